"""Unit tests for text normalization and keyword extraction."""

import pytest

from swapmatch.normalization import (
    STOP_WORDS,
    MatchableText,
    extract_keywords,
    normalize_text,
    tokenize,
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_lowercases_strips_punctuation_and_collapses_whitespace(self):
        assert normalize_text("  Guitar-lessons, for   BEGINNERS! ") == "guitar lessons for beginners"

    @pytest.mark.parametrize("text", ["", None, "   ", "!!!"])
    def test_empty_or_symbol_only_text(self, text):
        assert normalize_text(text) == ""

    def test_keeps_digits_and_underscores(self):
        assert normalize_text("Web3 snake_case") == "web3 snake_case"

    def test_keeps_unicode_letters(self):
        assert normalize_text("Café Crème") == "café crème"


class TestTokenize:
    """Tests for tokenize."""

    def test_drops_words_shorter_than_three_characters(self):
        assert tokenize("I need a Python tutor") == ["need", "python", "tutor"]

    def test_keeps_stop_words(self):
        assert tokenize("lessons for beginners") == ["lessons", "for", "beginners"]


class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_unigrams_then_bigrams(self):
        assert extract_keywords("Web development") == ["web", "development", "web development"]

    def test_no_bigram_across_stop_word(self):
        assert extract_keywords("Guitar lessons for beginners") == [
            "guitar",
            "lessons",
            "beginners",
            "guitar lessons",
        ]

    def test_short_words_are_skipped_before_pairing(self):
        # "a" is dropped by tokenize, so "need" and "python" become adjacent
        assert extract_keywords("need a python") == ["need", "python", "need python"]

    def test_stop_words_only_yield_nothing(self):
        assert extract_keywords("the and for you") == []

    def test_empty_text(self):
        assert extract_keywords("") == []

    def test_duplicates_are_kept(self):
        assert extract_keywords("yoga yoga") == ["yoga", "yoga", "yoga yoga"]

    def test_stop_word_list_is_lowercase(self):
        assert all(word == word.lower() for word in STOP_WORDS)
        assert {"the", "and", "for", "use"} <= STOP_WORDS


class TestMatchableText:
    """Tests for MatchableText."""

    def test_from_text_keeps_original(self):
        text = MatchableText.from_text("Python Tutoring!")

        assert text.original == "Python Tutoring!"
        assert text.normalized == "python tutoring"
        assert text.keywords == ("python", "tutoring", "python tutoring")
        assert text.has_signal

    def test_from_empty_text_has_no_signal(self):
        text = MatchableText.from_text(None)

        assert text.original == ""
        assert text.keywords == ()
        assert not text.has_signal
