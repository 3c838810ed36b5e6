"""Matching orchestrator and public entry point.

MatchingEngine runs the direct finder then the chain finder, and returns both
lists with summary statistics. It holds no state between runs, so one engine can
serve concurrent requests.
"""

import logging
from typing import Optional, Sequence, Union
from uuid import uuid4

from swapmatch.config.models import MatchingConfig
from swapmatch.domain.models import NeedItem, OfferItem
from swapmatch.logging import get_logger, log_context

from .chain import ChainMatchFinder
from .confidence import ConfidenceCalculator
from .direct import DirectMatchFinder
from .models import MatchingResult, MatchingStats
from .similarity import SimilarityScorer

logger = get_logger(__name__, component="matching")


class MatchingEngine:
    """Coordinates direct and chain match discovery.

    Responsibilities:
    - Share one scorer and calculator between both finders
    - Tag every log record of a run with run_id and requester_id
    - Compute the cost estimate and mean confidence
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        """Initialize MatchingEngine.

        Args:
            config: Matching policy (defaults to MatchingConfig())
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config or MatchingConfig()
        self.logger = logger_instance or logger

        scorer = SimilarityScorer(self.config.similarity)
        calculator = ConfidenceCalculator(self.config.confidence)
        self.direct_finder = DirectMatchFinder(self.config, scorer, calculator)
        self.chain_finder = ChainMatchFinder(self.config, scorer, calculator)

    def run(
        self,
        user_offers: Sequence[str],
        user_needs: Sequence[str],
        all_offers: Sequence[OfferItem],
        all_needs: Sequence[NeedItem],
        requester_id: Optional[str] = None,
    ) -> MatchingResult:
        """Compute direct and chain matches for one requester.

        Args:
            user_offers: Requester's offer titles
            user_needs: Requester's need titles
            all_offers: Offer pool, each embedding its owner's profile
            all_needs: Need pool, each embedding its owner's profile
            requester_id: Requesting user's id, excluded from every candidate

        Returns:
            MatchingResult with separate direct and chain lists and run statistics
        """
        with log_context(run_id=uuid4().hex, requester_id=requester_id):
            self.logger.info(
                "Matching run started",
                extra={
                    "event": "matching.run.started",
                    "user_offer_count": len(user_offers),
                    "user_need_count": len(user_needs),
                    "pool_offer_count": len(all_offers),
                    "pool_need_count": len(all_needs),
                },
            )

            direct_matches = self.direct_finder.find(
                user_offers, user_needs, all_offers, all_needs, requester_id=requester_id
            )
            chain_matches = self.chain_finder.find(
                user_offers, user_needs, all_offers, all_needs, requester_id=requester_id
            )

            all_matches = [*direct_matches, *chain_matches]
            average_confidence = (
                sum(match.confidence for match in all_matches) / len(all_matches)
                if all_matches
                else 0.0
            )

            stats = MatchingStats(
                total_comparisons=len(user_offers) * len(user_needs) * len(all_offers),
                threshold=self.config.similarity_threshold,
                average_confidence=average_confidence,
            )

            self.logger.info(
                "Matching run completed",
                extra={
                    "event": "matching.run.completed",
                    "direct_count": len(direct_matches),
                    "chain_count": len(chain_matches),
                    "total_comparisons": stats.total_comparisons,
                    "average_confidence": round(average_confidence, 4),
                },
            )

        return MatchingResult(
            direct_matches=direct_matches,
            chain_matches=chain_matches,
            stats=stats,
        )


def compute_matches(
    user_offers: Sequence[str],
    user_needs: Sequence[str],
    all_offers: Sequence[OfferItem],
    all_needs: Sequence[NeedItem],
    requester_id: Optional[str] = None,
    config: Optional[MatchingConfig] = None,
) -> MatchingResult:
    """Compute swap matches for a requester against the listing pool.

    This is the single operation the surrounding application calls. It never
    raises for empty inputs; absence of data yields an empty result.
    """
    return MatchingEngine(config).run(
        user_offers, user_needs, all_offers, all_needs, requester_id=requester_id
    )
