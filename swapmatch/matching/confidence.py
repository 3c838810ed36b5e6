"""Confidence blending for match candidates."""

from typing import Optional

from swapmatch.config.models import ConfidenceWeights
from swapmatch.domain.models import MatchType, UserProfile


class ConfidenceCalculator:
    """Blends textual similarity with a candidate's reputation.

    confidence = (base * w_sim + trust * w_trust + experience * w_exp) * type_factor

    where base is the mean of both similarity scores, trust is the trust score
    over trust_scale, experience is xp over xp_cap (saturating at 1) and
    type_factor discounts chain matches. The result is capped at 1.
    """

    def __init__(self, weights: Optional[ConfidenceWeights] = None):
        self.weights = weights or ConfidenceWeights()

    def calculate(
        self,
        offer_similarity: float,
        need_similarity: float,
        profile: UserProfile,
        match_type: MatchType,
    ) -> float:
        """Compute the confidence for one candidate.

        Args:
            offer_similarity: How well the counterpart's offer meets the requester's need
            need_similarity: How well the requester's offer meets the counterpart's need
            profile: Profile of the counterpart (first participant for chains)
            match_type: DIRECT or CHAIN

        Returns:
            Confidence in [0, 1]
        """
        weights = self.weights
        base = (offer_similarity + need_similarity) / 2
        trust_factor = profile.trust_score / weights.trust_scale
        exp_factor = min(profile.xp / weights.xp_cap, 1.0)
        type_factor = weights.chain_factor if match_type == MatchType.CHAIN else 1.0

        confidence = (
            base * weights.similarity
            + trust_factor * weights.trust
            + exp_factor * weights.experience
        ) * type_factor

        return min(confidence, 1.0)
