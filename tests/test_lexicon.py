"""Unit tests for the synonym and context lookup tables."""

import pytest

from swapmatch.matching.lexicon import (
    CONTEXTS,
    GENERAL_CONTEXT,
    SYNONYM_GROUPS,
    classify_context,
    classify_keywords,
    find_synonyms,
)


class TestFindSynonyms:
    """Tests for find_synonyms."""

    def test_returns_group_for_member(self):
        assert find_synonyms("django") == SYNONYM_GROUPS["python"]

    def test_lookup_is_case_insensitive(self):
        assert "lessons" in find_synonyms("Tutoring")

    def test_unknown_word_is_its_own_group(self):
        assert find_synonyms("Gardening") == frozenset({"gardening"})

    @pytest.mark.parametrize(
        "word,expected_group,other_group",
        [
            ("training", "teaching", "fitness"),
            ("editing", "photography", "video"),
        ],
    )
    def test_first_declared_group_wins(self, word, expected_group, other_group):
        group = find_synonyms(word)

        assert group == SYNONYM_GROUPS[expected_group]
        assert group != SYNONYM_GROUPS[other_group]


class TestClassifyContext:
    """Tests for classify_context."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Python tutoring", "programming"),
            ("Guitar lessons", "education"),
            ("Guitar and piano", "music"),
            ("Logo design", "design"),
            ("Morning yoga", "fitness"),
            ("Marketing strategy", "business"),
            ("Cooking classes", GENERAL_CONTEXT),
            ("", GENERAL_CONTEXT),
        ],
    )
    def test_first_matching_context(self, text, expected):
        assert classify_context(text) == expected

    def test_contexts_are_checked_in_declared_order(self):
        names = [name for name, _ in CONTEXTS]

        assert names == ["programming", "design", "education", "music", "fitness", "business"]
        assert classify_keywords(["guitar", "python"]) == "programming"


class TestTablesAreImmutable:
    """The lookup tables cannot be changed at runtime."""

    def test_synonym_groups_reject_assignment(self):
        with pytest.raises(TypeError):
            SYNONYM_GROUPS["gardening"] = frozenset({"gardening"})

    def test_groups_are_frozen(self):
        assert all(isinstance(group, frozenset) for group in SYNONYM_GROUPS.values())
