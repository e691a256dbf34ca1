# ABOUTME: Similarity scoring between normalized titles and candidate selection.
# ABOUTME: Combines Jaro-Winkler and token-set Jaccard, keeping the more generous score.

from collections.abc import Callable, Iterable

from rapidfuzz.distance import JaroWinkler

from gamemeta.metadata.candidate import Candidate
from gamemeta.metadata.normalizer import normalize_title

# Minimum similarity for a candidate to be accepted as the queried game.
MATCH_THRESHOLD = 0.85


def token_jaccard(a: str, b: str) -> float:
    """Jaccard similarity of whitespace-split token sets (0.0 when both are empty)."""
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def similarity(a: str, b: str) -> float:
    """Similarity of two normalized titles in [0.0, 1.0].

    Jaro-Winkler tolerates small spelling noise; token Jaccard tolerates word
    reordering and subtitle differences. The maximum of the two is returned.
    """
    if not a or not b:
        return 0.0
    jaro_winkler = JaroWinkler.similarity(a, b)
    return max(jaro_winkler, token_jaccard(a, b))


def pick_best_candidate(
    query: str,
    candidates: Iterable[Candidate],
    *,
    threshold: float = MATCH_THRESHOLD,
    scorer: Callable[[str, str], float] = similarity,
) -> Candidate | None:
    """Choose the candidate that best matches the query title.

    Candidates without a positive metric are ignored. Ties keep the first
    candidate seen. The winner is returned only if its score reaches the
    threshold (inclusive).
    """
    normalized_query = normalize_title(query)
    best: Candidate | None = None
    best_score = -1.0
    for candidate in candidates:
        if candidate.metric_value <= 0:
            continue
        score = scorer(normalized_query, normalize_title(candidate.display_name))
        if score > best_score:
            best = candidate
            best_score = score

    if best is None or best_score < threshold:
        return None
    return best
