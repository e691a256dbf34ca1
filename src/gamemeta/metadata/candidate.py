# ABOUTME: Candidate pairs a source's display name with the metric it reports.
# ABOUTME: Ephemeral output of source resolvers, consumed by candidate selection.

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A single search hit from an upstream source.

    Only the metric of the chosen candidate is ever persisted; the display
    name exists so the hit can be scored against the query title.
    """

    display_name: str
    metric_value: float
