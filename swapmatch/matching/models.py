"""Data models for matching results.

Match candidates form a tagged union: DirectMatchCandidate and
ChainMatchCandidate each carry a fixed ``match_type``. Code that consumes a
MatchCandidate should branch on the concrete type and reject anything else.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from swapmatch.domain.models import MatchType, NeedItem, OfferItem, UserProfile


@dataclass(frozen=True)
class SimilarityScores:
    """The two similarity values behind a candidate.

    Attributes:
        offer: How well the counterpart's offer meets the requester's need
        need: How well the requester's offer meets the counterpart's need
    """

    offer: float
    need: float


@dataclass(frozen=True)
class DirectMatchCandidate:
    """Two-party swap: each side's offer satisfies the other side's need.

    Attributes:
        user_offer: Requester's offer title that meets the counterpart's need
        user_need: Requester's need title met by the counterpart's offer
        matched_user: Counterpart profile (never the requester)
        matched_user_offer: Counterpart's offer that closes the cycle
        matched_user_need: Counterpart's need met by the requester's offer
        description: Human-readable summary including the confidence percentage
        confidence: Confidence in [0, 1]
        similarity: Similarity scores behind the confidence
    """

    user_offer: str
    user_need: str
    matched_user: UserProfile
    matched_user_offer: OfferItem
    matched_user_need: NeedItem
    description: str
    confidence: float
    similarity: SimilarityScores
    match_type: MatchType = field(default=MatchType.DIRECT, init=False)


@dataclass(frozen=True)
class ChainMatchCandidate:
    """Swap cycle through three or more users that closes back to the requester.

    ``chain_users`` lists the other participants in cycle order: the requester's
    offer goes to chain_users[0], whose offer goes to chain_users[1], and so on
    until the last participant's offer meets the requester's need.

    Attributes:
        user_offer: Requester's offer title at the start of the chain
        user_need: Requester's need title met at the end of the chain
        chain_users: Ordered participant profiles, excluding the requester
        chain_offers: Offer each participant contributes, aligned with chain_users
        chain_needs: Need each participant has met, aligned with chain_users
        chain_length: Number of users in the cycle, requester included (>= 3)
        description: Human-readable summary including the confidence percentage
        confidence: Confidence in [0, 1]
        similarity: Closing link (offer) and opening link (need) scores
    """

    user_offer: str
    user_need: str
    chain_users: Tuple[UserProfile, ...]
    chain_offers: Tuple[OfferItem, ...]
    chain_needs: Tuple[NeedItem, ...]
    chain_length: int
    description: str
    confidence: float
    similarity: SimilarityScores
    match_type: MatchType = field(default=MatchType.CHAIN, init=False)

    def __post_init__(self):
        if self.chain_length < 3:
            raise ValueError(f"chain_length must be at least 3, got {self.chain_length}")
        if not (len(self.chain_users) == len(self.chain_offers) == len(self.chain_needs)):
            raise ValueError("chain_users, chain_offers and chain_needs must be aligned")

    @property
    def primary_user(self) -> UserProfile:
        """First participant after the requester."""
        return self.chain_users[0]


MatchCandidate = Union[DirectMatchCandidate, ChainMatchCandidate]


@dataclass(frozen=True)
class MatchingStats:
    """Summary statistics for one matching run.

    Attributes:
        total_comparisons: |user offers| x |user needs| x |all offers|, a cost
            estimate rather than an exact count of work performed
        threshold: Similarity threshold used
        average_confidence: Mean confidence over every returned candidate (0 if none)
    """

    total_comparisons: int
    threshold: float
    average_confidence: float


@dataclass
class MatchingResult:
    """Aggregate output of the matching engine."""

    direct_matches: List[DirectMatchCandidate] = field(default_factory=list)
    chain_matches: List[ChainMatchCandidate] = field(default_factory=list)
    stats: MatchingStats = field(
        default_factory=lambda: MatchingStats(total_comparisons=0, threshold=0.5, average_confidence=0.0)
    )
    algorithm: str = "enhanced"

    def all_matches(self) -> List[MatchCandidate]:
        """Direct candidates followed by chain candidates."""
        return [*self.direct_matches, *self.chain_matches]

    @property
    def is_empty(self) -> bool:
        """Whether neither list holds a candidate."""
        return not self.direct_matches and not self.chain_matches
