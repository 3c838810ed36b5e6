"""Text normalization and keyword extraction for posting titles.

This module implements the leaf text utilities the matcher relies on:
1. normalize_text lowercases text and strips punctuation
2. tokenize splits normalized text into candidate words
3. extract_keywords drops short words and stop words, then appends bigrams

Nothing here raises on odd input. Empty or stop-word-only text simply yields
no keywords, which the scorer treats as "no signal".
"""

import re
from typing import FrozenSet, List

# Common function words that carry no matching signal
STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
    "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
    "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
    "did", "its", "let", "put", "say", "she", "too", "use",
})

MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize free text for keyword comparison.

    Normalization steps:
    - Convert to lowercase
    - Replace every non-word, non-space character with a space
    - Collapse whitespace runs and trim the ends

    Args:
        text: Text to normalize

    Returns:
        Normalized text (empty string for empty input)

    Example:
        >>> normalize_text("  Guitar-lessons, for   BEGINNERS! ")
        'guitar lessons for beginners'
    """
    if not text:
        return ""

    normalized = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", normalized).strip()


def tokenize(text: str) -> List[str]:
    """Split text into normalized words of at least MIN_TOKEN_LENGTH characters."""
    return [word for word in normalize_text(text).split() if len(word) >= MIN_TOKEN_LENGTH]


def extract_keywords(text: str) -> List[str]:
    """Extract unigram keywords followed by bigram phrases.

    Unigrams are the tokens that are not stop words. Bigrams join each pair of
    adjacent tokens when neither is a stop word. Adjacency is judged before stop
    words are removed, so "lessons for beginners" yields no bigram across "for".
    Order is preserved and duplicates are kept.

    Args:
        text: Free text (typically an offer or need title)

    Returns:
        Keywords then phrases; empty list when the text has no signal

    Example:
        >>> extract_keywords("Guitar lessons for beginners")
        ['guitar', 'lessons', 'beginners', 'guitar lessons']
    """
    words = tokenize(text)
    keywords = [word for word in words if word not in STOP_WORDS]

    phrases = [
        f"{first} {second}"
        for first, second in zip(words, words[1:])
        if first not in STOP_WORDS and second not in STOP_WORDS
    ]

    return keywords + phrases
