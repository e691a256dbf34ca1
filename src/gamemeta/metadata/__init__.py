# ABOUTME: Metadata package: title normalization, similarity, and upstream sources.
# ABOUTME: Exports the types shared by the sources and the resolution pipeline.

from gamemeta.metadata.candidate import Candidate
from gamemeta.metadata.normalizer import normalize_key, normalize_title
from gamemeta.metadata.provider import MetadataSource
from gamemeta.metadata.scoring import pick_best_candidate, similarity
from gamemeta.metadata.types import CompletionTime, Price, Resolution, SourceAnswer

__all__ = [
    "Candidate",
    "CompletionTime",
    "MetadataSource",
    "Price",
    "Resolution",
    "SourceAnswer",
    "normalize_key",
    "normalize_title",
    "pick_best_candidate",
    "similarity",
]
