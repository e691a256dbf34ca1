# ABOUTME: MetadataSource protocol defining the contract for title-resolving sources.
# ABOUTME: Each upstream (HLTB search API, HLTB HTML page, OpenCritic) implements this.

from typing import Protocol, runtime_checkable

from gamemeta.metadata.types import SourceAnswer


@runtime_checkable
class MetadataSource(Protocol):
    """Protocol for a single upstream that can resolve a title to a number.

    The name doubles as the provenance tag of answers the source produces.
    Implementations raise FetchError (or return SourceAnswer.miss()) for soft
    failures, and ConfigurationError for missing credentials.
    """

    @property
    def name(self) -> str: ...

    async def resolve(self, title: str) -> SourceAnswer: ...
