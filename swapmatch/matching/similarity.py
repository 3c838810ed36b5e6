"""Heuristic similarity between two pieces of posting text.

The score is additive rather than a formal metric. Every keyword of the first
text can earn points in three passes (exact, synonym, partial substring), a flat
bonus is added when both texts fall in the same topical context, and the total
is divided by the first text's keyword count and capped at 1.

Because the denominator only depends on the first argument, the score is not
symmetric: similarity("Java", "Java tutoring") differs from
similarity("Java tutoring", "Java"). The context bonus is not scaled by keyword
count either, so it weighs more on short titles.
"""

from typing import Dict, Optional, Sequence

from swapmatch.config.models import SimilarityWeights
from swapmatch.normalization import MatchableText

from .lexicon import GENERAL_CONTEXT, classify_keywords, find_synonyms


class SimilarityScorer:
    """Scores how well one text describes the same thing as another.

    Responsibilities:
    - Extract keywords and bigram phrases from both texts
    - Award exact, synonym and partial-substring matches per keyword of the first text
    - Add the shared-context bonus
    - Normalize to [0, 1]
    """

    max_prepared = 4096

    def __init__(self, weights: Optional[SimilarityWeights] = None):
        """Initialize SimilarityScorer.

        Args:
            weights: Points per pass (defaults to SimilarityWeights())
        """
        self.weights = weights or SimilarityWeights()
        self._prepared: Dict[str, MatchableText] = {}

    def prepare(self, text: str) -> MatchableText:
        """Normalize and extract keywords once per distinct text."""
        text = text or ""
        if text not in self._prepared:
            if len(self._prepared) >= self.max_prepared:
                self._prepared.clear()
            self._prepared[text] = MatchableText.from_text(text)
        return self._prepared[text]

    def score(self, text_a: str, text_b: str) -> float:
        """Return the similarity of ``text_b`` to ``text_a`` in [0, 1].

        Args:
            text_a: Reference text; its keyword count is the denominator
            text_b: Text compared against the reference

        Returns:
            0.0 when either text has no keywords, otherwise the capped ratio
        """
        return self.score_prepared(self.prepare(text_a), self.prepare(text_b))

    __call__ = score

    def score_prepared(self, text_a: MatchableText, text_b: MatchableText) -> float:
        """Score two already prepared texts; see ``score``."""
        if not text_a.has_signal or not text_b.has_signal:
            return 0.0

        keywords_a = text_a.keywords
        keywords_b = text_b.keywords

        max_possible_score = len(keywords_a)

        total_score = (
            self.weights.exact * self._exact_hits(keywords_a, keywords_b)
            + self.weights.synonym * self._synonym_hits(keywords_a, keywords_b)
            + self.weights.partial * self._partial_hits(keywords_a, keywords_b)
        )

        context_a = classify_keywords(keywords_a)
        if context_a != GENERAL_CONTEXT and context_a == classify_keywords(keywords_b):
            total_score += self.weights.context_bonus

        return min(total_score / max_possible_score, 1.0)

    @staticmethod
    def _exact_hits(keywords_a: Sequence[str], keywords_b: Sequence[str]) -> int:
        """Count keywords of A that appear verbatim in B."""
        present = set(keywords_b)
        return sum(1 for keyword in keywords_a if keyword in present)

    @staticmethod
    def _synonym_hits(keywords_a: Sequence[str], keywords_b: Sequence[str]) -> int:
        """Count keywords of A sharing a synonym group with a different keyword of B."""
        hits = 0
        for keyword_a in keywords_a:
            synonyms_a = find_synonyms(keyword_a)
            for keyword_b in keywords_b:
                # Identical keywords were already rewarded by the exact pass
                if keyword_a != keyword_b and synonyms_a & find_synonyms(keyword_b):
                    hits += 1
                    break
        return hits

    def _partial_hits(self, keywords_a: Sequence[str], keywords_b: Sequence[str]) -> int:
        """Count keywords of A that contain, or are contained in, a keyword of B."""
        min_length = self.weights.partial_min_length
        hits = 0
        for keyword_a in keywords_a:
            if len(keyword_a) <= min_length:
                continue
            for keyword_b in keywords_b:
                if len(keyword_b) > min_length and (keyword_b in keyword_a or keyword_a in keyword_b):
                    hits += 1
                    break
        return hits


_default_scorer = SimilarityScorer()


def calculate_similarity(text_a: str, text_b: str) -> float:
    """Score two texts with the default weights."""
    return _default_scorer.score(text_a, text_b)
