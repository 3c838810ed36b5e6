"""Data models for the normalization layer."""

from dataclasses import dataclass
from typing import Tuple

from .service import extract_keywords, normalize_text


@dataclass(frozen=True)
class MatchableText:
    """Original and normalized variants of one piece of posting text.

    Preserves the original wording for descriptions shown to users while
    carrying the normalized form and extracted keywords used for scoring.

    Attributes:
        original: Text as supplied by the caller
        normalized: Lowercase, punctuation-stripped text
        keywords: Unigram keywords followed by bigram phrases
    """

    original: str
    normalized: str
    keywords: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "MatchableText":
        """Build MatchableText from raw text."""
        text = text or ""
        return cls(
            original=text,
            normalized=normalize_text(text),
            keywords=tuple(extract_keywords(text)),
        )

    @property
    def has_signal(self) -> bool:
        """Whether any keyword survived extraction."""
        return bool(self.keywords)
