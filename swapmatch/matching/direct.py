"""Two-party match discovery.

For every pair of the requester's (offer, need) titles, the finder:
1. Selects needs in the pool that the requester's offer satisfies
2. Looks up the other postings of each such need's owner
3. Keeps the owner's offers that satisfy the requester's need, closing the cycle
4. Scores the pair with the confidence calculator and applies the confidence floor
5. Deduplicates by counterpart, sorts by confidence and truncates
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple, Union

from swapmatch.config.models import MatchingConfig
from swapmatch.domain.models import MatchType, NeedItem, OfferItem
from swapmatch.logging import get_logger

from .confidence import ConfidenceCalculator
from .models import DirectMatchCandidate, SimilarityScores
from .ranking import confidence_percentage, keep_best, rank
from .similarity import SimilarityScorer

logger = get_logger(__name__, component="matching")


def group_offers_by_user(
    offers: Sequence[OfferItem], exclude_user_id: Optional[str] = None
) -> Dict[str, List[OfferItem]]:
    """Index offers by owning user id, skipping ``exclude_user_id``."""
    grouped: Dict[str, List[OfferItem]] = defaultdict(list)
    for offer in offers:
        if exclude_user_id is not None and offer.user_id == exclude_user_id:
            continue
        grouped[offer.user_id].append(offer)
    return grouped


def is_own_posting(item: Union[OfferItem, NeedItem], requester_id: Optional[str]) -> bool:
    """Whether a posting belongs to the requesting user."""
    if requester_id is None:
        return False
    return item.user_id == requester_id or item.user_profile.uid == requester_id


class DirectMatchFinder:
    """Finds direct swaps between the requester and one other user.

    The finder never raises for missing data: empty inputs produce an empty list.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        scorer: Optional[SimilarityScorer] = None,
        calculator: Optional[ConfidenceCalculator] = None,
        logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        """Initialize DirectMatchFinder.

        Args:
            config: Matching policy (defaults to MatchingConfig())
            scorer: Similarity scorer (defaults to one built from config weights)
            calculator: Confidence calculator (defaults to one built from config weights)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config or MatchingConfig()
        self.scorer = scorer or SimilarityScorer(self.config.similarity)
        self.calculator = calculator or ConfidenceCalculator(self.config.confidence)
        self.logger = logger_instance or logger

    def find(
        self,
        user_offers: Sequence[str],
        user_needs: Sequence[str],
        all_offers: Sequence[OfferItem],
        all_needs: Sequence[NeedItem],
        requester_id: Optional[str] = None,
    ) -> List[DirectMatchCandidate]:
        """Find ranked direct match candidates.

        Args:
            user_offers: Requester's offer titles
            user_needs: Requester's need titles
            all_offers: Offer pool, each embedding its owner's profile
            all_needs: Need pool, each embedding its owner's profile
            requester_id: Requesting user's id; their own postings are never matched

        Returns:
            At most ``max_results`` candidates, one per counterpart, by descending confidence
        """
        if not (user_offers and user_needs and all_offers and all_needs):
            return []

        threshold = self.config.similarity_threshold
        offers_by_user = group_offers_by_user(all_offers, exclude_user_id=requester_id)
        scores: Dict[Tuple[str, str], float] = {}

        def similarity(text_a: str, text_b: str) -> float:
            key = (text_a, text_b)
            if key not in scores:
                scores[key] = self.scorer.score(text_a, text_b)
            return scores[key]

        candidates: List[DirectMatchCandidate] = []

        for user_offer in user_offers:
            for user_need in user_needs:
                for need_item in all_needs:
                    if is_own_posting(need_item, requester_id):
                        continue

                    need_similarity = similarity(user_offer, need_item.title)
                    if need_similarity < threshold:
                        continue

                    for their_offer in offers_by_user.get(need_item.user_id, ()):
                        offer_similarity = similarity(user_need, their_offer.title)
                        if offer_similarity < threshold:
                            continue

                        candidate = self._build_candidate(
                            user_offer, user_need, need_item, their_offer,
                            offer_similarity, need_similarity,
                        )
                        if candidate is not None:
                            candidates.append(candidate)

        unique = keep_best(candidates, key=lambda c: c.matched_user.uid)
        ranked = rank(unique, self.config.max_results)

        self.logger.info(
            f"Direct matching found {len(ranked)} candidates",
            extra={
                "event": "matching.direct.completed",
                "qualifying_count": len(candidates),
                "unique_user_count": len(unique),
                "returned_count": len(ranked),
            },
        )

        return ranked

    def _build_candidate(
        self,
        user_offer: str,
        user_need: str,
        need_item: NeedItem,
        their_offer: OfferItem,
        offer_similarity: float,
        need_similarity: float,
    ) -> Optional[DirectMatchCandidate]:
        """Score a closed two-party cycle, returning None below the confidence floor."""
        profile = need_item.user_profile
        confidence = self.calculator.calculate(
            offer_similarity, need_similarity, profile, MatchType.DIRECT
        )

        if confidence < self.config.min_confidence:
            self.logger.debug(
                f"Direct candidate below confidence floor: {profile.uid}",
                extra={
                    "event": "matching.direct.rejected",
                    "matched_user": profile.uid,
                    "confidence": confidence,
                },
            )
            return None

        return DirectMatchCandidate(
            user_offer=user_offer,
            user_need=user_need,
            matched_user=profile,
            matched_user_offer=their_offer,
            matched_user_need=need_item,
            description=(
                f'Enhanced match: Your "{user_offer}" for their "{their_offer.title}" '
                f"({confidence_percentage(confidence)}% confidence)"
            ),
            confidence=confidence,
            similarity=SimilarityScores(offer=offer_similarity, need=need_similarity),
        )
