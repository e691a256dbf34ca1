# ABOUTME: Core result types exchanged between sources, the resolver, and callers.
# ABOUTME: SourceAnswer distinguishes definitive answers from soft misses.

from dataclasses import dataclass

PROVENANCE_CACHE = "cache"
PROVENANCE_NONE = "none"


@dataclass(frozen=True)
class SourceAnswer:
    """Outcome of asking one source about one title.

    A definitive answer (a value, or a confirmed absence) stops the fallback
    chain. A non-definitive answer without a value is a soft miss and lets the
    resolver move on to the next source.
    """

    value: float | None
    definitive: bool

    @classmethod
    def found(cls, value: float) -> "SourceAnswer":
        return cls(value=value, definitive=True)

    @classmethod
    def not_found(cls) -> "SourceAnswer":
        return cls(value=None, definitive=True)

    @classmethod
    def miss(cls) -> "SourceAnswer":
        return cls(value=None, definitive=False)

    @property
    def is_final(self) -> bool:
        """Whether this answer ends the fallback chain."""
        return self.definitive or self.value is not None


@dataclass(frozen=True)
class Resolution:
    """A resolved value tagged with the source that produced it."""

    value: float | None
    provenance: str


@dataclass(frozen=True)
class CompletionTime:
    """Main-story completion estimate as returned to callers."""

    hours: float | None
    provenance: str


@dataclass(frozen=True)
class Price:
    """Storefront price in major currency units."""

    amount: float
    currency: str


def price_per_hour(price: float | None, hours: float | None) -> int | None:
    """Price per hour of play, rounded to whole currency units.

    Returns None unless both inputs are positive.
    """
    if not price or not hours or price <= 0 or hours <= 0:
        return None
    return round(price / hours)
