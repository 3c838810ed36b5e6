"""Multi-party (chain) match discovery.

With the default configuration chain search is switched off and ``find`` returns
an empty list for any input. Turning on ``matching.chain.enabled`` runs a bounded
depth-first search for swap cycles:

    requester -> P1 -> P2 [-> P3 ...] -> requester

where each arrow means "the offer on the left satisfies the need on the right".
Participants are distinct and never the requester. Chains hold between 3 and
``matching.chain.max_length`` users, requester included.

Postings are scored once up front and collapsed into one best link per ordered
pair of users. The search then walks users, not postings, and expands each
(first participant, current participant, participant set) state only once.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Set, Tuple, Union

from swapmatch.config.models import MatchingConfig
from swapmatch.domain.models import MatchType, NeedItem, OfferItem
from swapmatch.logging import get_logger

from .confidence import ConfidenceCalculator
from .direct import group_offers_by_user, is_own_posting
from .models import ChainMatchCandidate, SimilarityScores
from .ranking import confidence_percentage, rank
from .similarity import SimilarityScorer

logger = get_logger(__name__, component="matching")

SimilarityFn = Callable[[str, str], float]


class _Opening(NamedTuple):
    """Requester offer title that satisfies the first participant's need."""

    user_offer: str
    need: NeedItem
    score: float


class _Closing(NamedTuple):
    """Last participant's offer that satisfies a requester need title."""

    user_need: str
    offer: OfferItem
    score: float


class _Link(NamedTuple):
    """One participant's offer satisfying the next participant's need."""

    offer: OfferItem
    need: NeedItem
    score: float


class ChainMatchFinder:
    """Finds swap cycles through three or more users."""

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        scorer: Optional[SimilarityScorer] = None,
        calculator: Optional[ConfidenceCalculator] = None,
        logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        self.config = config or MatchingConfig()
        self.scorer = scorer or SimilarityScorer(self.config.similarity)
        self.calculator = calculator or ConfidenceCalculator(self.config.confidence)
        self.logger = logger_instance or logger

    @property
    def enabled(self) -> bool:
        return self.config.chain.enabled

    def find(
        self,
        user_offers: Sequence[str],
        user_needs: Sequence[str],
        all_offers: Sequence[OfferItem],
        all_needs: Sequence[NeedItem],
        requester_id: Optional[str] = None,
    ) -> List[ChainMatchCandidate]:
        """Find ranked chain match candidates.

        Args:
            user_offers: Requester's offer titles
            user_needs: Requester's need titles
            all_offers: Offer pool, each embedding its owner's profile
            all_needs: Need pool, each embedding its owner's profile
            requester_id: Requesting user's id; their own postings are never used

        Returns:
            Empty list while chain search is disabled; otherwise at most
            ``max_results`` candidates by descending confidence
        """
        if not self.enabled:
            self.logger.debug(
                "Chain matching skipped",
                extra={"event": "matching.chain.skipped", "reason": "disabled"},
            )
            return []

        if not (user_offers and user_needs and all_offers and all_needs):
            return []

        max_participants = self.config.chain.max_length - 1
        offers_by_user = group_offers_by_user(all_offers, exclude_user_id=requester_id)
        needs_by_user: Dict[str, List[NeedItem]] = defaultdict(list)
        for need in all_needs:
            if not is_own_posting(need, requester_id):
                needs_by_user[need.user_id].append(need)

        scores: Dict[Tuple[str, str], float] = {}

        def similarity(text_a: str, text_b: str) -> float:
            key = (text_a, text_b)
            if key not in scores:
                scores[key] = self.scorer.score(text_a, text_b)
            return scores[key]

        openings = self._best_openings(user_offers, needs_by_user, similarity)
        closings = self._best_closings(user_needs, offers_by_user, similarity)
        links = self._best_links(offers_by_user, needs_by_user, similarity)

        best: Dict[FrozenSet[str], ChainMatchCandidate] = {}
        explored: Set[Tuple[str, str, FrozenSet[str]]] = set()
        qualifying = 0

        def walk(path: Tuple[str, ...], steps: Tuple[_Link, ...]) -> None:
            nonlocal qualifying
            current = path[-1]
            members = frozenset(path)

            if len(path) >= 2 and current in closings:
                candidate = self._build_candidate(openings[path[0]], steps, closings[current])
                if candidate is not None:
                    qualifying += 1
                    kept = best.get(members)
                    if kept is None or candidate.confidence > kept.confidence:
                        best[members] = candidate

            if len(path) >= max_participants:
                return

            for next_user, link in links.get(current, {}).items():
                if next_user in members:
                    continue
                # Middle orderings with the same ends and members score the same
                state = (path[0], next_user, members | {next_user})
                if state in explored:
                    continue
                explored.add(state)
                walk(path + (next_user,), steps + (link,))

        for first_user in openings:
            walk((first_user,), ())

        ranked = rank(best.values(), self.config.max_results)

        self.logger.info(
            f"Chain matching found {len(ranked)} candidates",
            extra={
                "event": "matching.chain.completed",
                "qualifying_count": qualifying,
                "explored_states": len(explored),
                "returned_count": len(ranked),
                "max_length": self.config.chain.max_length,
            },
        )

        return ranked

    def _best_openings(
        self,
        user_offers: Sequence[str],
        needs_by_user: Dict[str, List[NeedItem]],
        similarity: SimilarityFn,
    ) -> Dict[str, _Opening]:
        """Best requester offer -> need pairing per potential first participant."""
        threshold = self.config.similarity_threshold
        openings: Dict[str, _Opening] = {}
        for user_id, needs in needs_by_user.items():
            for user_offer in user_offers:
                for need in needs:
                    score = similarity(user_offer, need.title)
                    if score < threshold:
                        continue
                    current = openings.get(user_id)
                    if current is None or score > current.score:
                        openings[user_id] = _Opening(user_offer, need, score)
        return openings

    def _best_closings(
        self,
        user_needs: Sequence[str],
        offers_by_user: Dict[str, List[OfferItem]],
        similarity: SimilarityFn,
    ) -> Dict[str, _Closing]:
        """Best offer -> requester need pairing per potential last participant."""
        threshold = self.config.similarity_threshold
        closings: Dict[str, _Closing] = {}
        for user_id, offers in offers_by_user.items():
            for user_need in user_needs:
                for offer in offers:
                    score = similarity(user_need, offer.title)
                    if score < threshold:
                        continue
                    current = closings.get(user_id)
                    if current is None or score > current.score:
                        closings[user_id] = _Closing(user_need, offer, score)
        return closings

    def _best_links(
        self,
        offers_by_user: Dict[str, List[OfferItem]],
        needs_by_user: Dict[str, List[NeedItem]],
        similarity: SimilarityFn,
    ) -> Dict[str, Dict[str, _Link]]:
        """Best offer -> need link for each ordered pair of distinct users."""
        threshold = self.config.similarity_threshold
        links: Dict[str, Dict[str, _Link]] = defaultdict(dict)
        for giver, offers in offers_by_user.items():
            for receiver, needs in needs_by_user.items():
                if receiver == giver:
                    continue
                for offer in offers:
                    for need in needs:
                        score = similarity(offer.title, need.title)
                        if score < threshold:
                            continue
                        current = links[giver].get(receiver)
                        if current is None or score > current.score:
                            links[giver][receiver] = _Link(offer, need, score)
        return links

    def _build_candidate(
        self,
        opening: _Opening,
        steps: Tuple[_Link, ...],
        closing: _Closing,
    ) -> Optional[ChainMatchCandidate]:
        """Score a closed cycle, returning None below the confidence floor."""
        chain_needs = (opening.need,) + tuple(link.need for link in steps)
        chain_offers = tuple(link.offer for link in steps) + (closing.offer,)
        chain_users = tuple(need.user_profile for need in chain_needs)
        confidence = self.calculator.calculate(
            closing.score, opening.score, chain_users[0], MatchType.CHAIN
        )

        if confidence < self.config.min_confidence:
            return None

        chain_length = len(chain_users) + 1
        return ChainMatchCandidate(
            user_offer=opening.user_offer,
            user_need=closing.user_need,
            chain_users=chain_users,
            chain_offers=chain_offers,
            chain_needs=chain_needs,
            chain_length=chain_length,
            description=(
                f'Chain match: Your "{opening.user_offer}" starts a {chain_length}-user swap '
                f'that returns "{closing.offer.title}" '
                f"({confidence_percentage(confidence)}% confidence)"
            ),
            confidence=confidence,
            similarity=SimilarityScores(offer=closing.score, need=opening.score),
        )
