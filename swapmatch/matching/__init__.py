"""Swap matching engine.

This module provides:
- SimilarityScorer: heuristic similarity between posting titles
- ConfidenceCalculator: blends similarity with reputation signals
- DirectMatchFinder / ChainMatchFinder: two-party and multi-party discovery
- MatchingEngine / compute_matches: the entry point callers invoke
- Result models and payload helpers for presentation
"""

from .chain import ChainMatchFinder
from .confidence import ConfidenceCalculator
from .direct import DirectMatchFinder
from .engine import MatchingEngine, compute_matches
from .lexicon import GENERAL_CONTEXT, classify_context, find_synonyms
from .models import (
    ChainMatchCandidate,
    DirectMatchCandidate,
    MatchCandidate,
    MatchingResult,
    MatchingStats,
    SimilarityScores,
)
from .similarity import SimilarityScorer, calculate_similarity
from .utils import build_match_payload, build_result_payload, format_match_summary

__all__ = [
    "MatchingEngine",
    "compute_matches",
    "DirectMatchFinder",
    "ChainMatchFinder",
    "SimilarityScorer",
    "calculate_similarity",
    "ConfidenceCalculator",
    "find_synonyms",
    "classify_context",
    "GENERAL_CONTEXT",
    "DirectMatchCandidate",
    "ChainMatchCandidate",
    "MatchCandidate",
    "MatchingResult",
    "MatchingStats",
    "SimilarityScores",
    "build_match_payload",
    "build_result_payload",
    "format_match_summary",
]
