# ABOUTME: Core resolution pipeline and the public service operations.
# ABOUTME: Re-exports GameMetaService and the module-level convenience coroutines.

from gamemeta.core.resolver import Resolver
from gamemeta.core.service import (
    GameMetaService,
    clear_completion_time_cache,
    clear_critic_score_cache,
    close_default_service,
    resolve_completion_time,
    resolve_critic_score,
    resolve_price,
)

__all__ = [
    "GameMetaService",
    "Resolver",
    "clear_completion_time_cache",
    "clear_critic_score_cache",
    "close_default_service",
    "resolve_completion_time",
    "resolve_critic_score",
    "resolve_price",
]
