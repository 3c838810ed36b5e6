"""Deduplication and ordering of match candidates."""

import math
from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

CandidateT = TypeVar("CandidateT")


def confidence_percentage(confidence: float) -> int:
    """Round a [0, 1] confidence to a whole percentage, halves rounding up."""
    return int(math.floor(confidence * 100 + 0.5))


def keep_best(
    candidates: Iterable[CandidateT], key: Callable[[CandidateT], Hashable]
) -> List[CandidateT]:
    """Keep the highest-confidence candidate per key.

    Candidates are expected to expose a ``confidence`` attribute. On equal
    confidence the earlier candidate stays. The output lists keys in the order
    they were first discovered.
    """
    best: Dict[Hashable, CandidateT] = {}
    for candidate in candidates:
        candidate_key = key(candidate)
        current = best.get(candidate_key)
        if current is None or candidate.confidence > current.confidence:
            best[candidate_key] = candidate
    return list(best.values())


def rank(candidates: Iterable[CandidateT], limit: int) -> List[CandidateT]:
    """Sort by descending confidence (stable) and truncate to ``limit``."""
    return sorted(candidates, key=lambda candidate: candidate.confidence, reverse=True)[:limit]
