# ABOUTME: Environment-driven settings for gamemeta (credentials, hosts, data directory).
# ABOUTME: Read at call time so a changed environment takes effect without a restart.

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path.home() / ".gamemeta"
DEFAULT_OPENCRITIC_HOST = "opencritic-api.p.rapidapi.com"

API_KEY_VAR = "OPENCRITIC_API_KEY"
HOST_VAR = "OPENCRITIC_HOST"
DATA_DIR_VAR = "GAMEMETA_DATA_DIR"
DEBUG_VAR = "GAMEMETA_DEBUG"


class ConfigurationError(Exception):
    """Raised when a required setting (such as the gateway API key) is missing."""


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for metadata lookups."""

    data_dir: Path = DEFAULT_DATA_DIR
    opencritic_api_key: str | None = None
    opencritic_host: str = DEFAULT_OPENCRITIC_HOST
    debug: bool = False

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, *, data_dir: Path | None = None
    ) -> "Settings":
        """Build settings from environment variables.

        Blank values are treated as unset. An explicit data_dir wins over
        GAMEMETA_DATA_DIR.
        """
        env = os.environ if environ is None else environ

        api_key = env.get(API_KEY_VAR, "").strip() or None
        host = env.get(HOST_VAR, "").strip() or DEFAULT_OPENCRITIC_HOST
        if data_dir is None:
            env_dir = env.get(DATA_DIR_VAR, "").strip()
            data_dir = Path(env_dir).expanduser() if env_dir else DEFAULT_DATA_DIR

        return cls(
            data_dir=data_dir,
            opencritic_api_key=api_key,
            opencritic_host=host,
            debug=env.get(DEBUG_VAR, "") == "1",
        )

    def require_api_key(self) -> str:
        """Return the gateway API key or raise ConfigurationError."""
        if not self.opencritic_api_key:
            raise ConfigurationError(f"{API_KEY_VAR} is not set")
        return self.opencritic_api_key
