"""Text normalization layer for preparing posting titles for matching.

This module provides:
- normalize_text: lowercase, punctuation-free, whitespace-collapsed text
- extract_keywords: stop-word-filtered keywords plus adjacent-word bigrams
- MatchableText: original and normalized variants with extracted keywords
"""

from .models import MatchableText
from .service import STOP_WORDS, extract_keywords, normalize_text, tokenize

__all__ = [
    "MatchableText",
    "STOP_WORDS",
    "extract_keywords",
    "normalize_text",
    "tokenize",
]
