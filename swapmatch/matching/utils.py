"""Utility functions for preparing match results for downstream consumers.

This module turns MatchingResult objects into JSON-safe payloads for the
presentation layer and into a plain-text report for the command line.
"""

from typing import Any, Dict, List

from swapmatch.domain.models import NeedItem, OfferItem, UserProfile

from .models import ChainMatchCandidate, DirectMatchCandidate, MatchCandidate, MatchingResult
from .ranking import confidence_percentage


def build_profile_payload(profile: UserProfile) -> Dict[str, Any]:
    """Serialize a profile with its reputation tiers."""
    return {
        "uid": profile.uid,
        "displayName": profile.display_name,
        "username": profile.username,
        "trustScore": profile.trust_score,
        "trustLabel": profile.trust_label,
        "xp": profile.xp,
        "xpLevel": profile.xp_level,
    }


def _posting_payload(item) -> Dict[str, Any]:
    if isinstance(item, OfferItem):
        item_id = {"offerId": item.offer_id}
    elif isinstance(item, NeedItem):
        item_id = {"needId": item.need_id}
    else:
        raise TypeError(f"Unsupported posting type: {type(item).__name__}")
    return {**item_id, "userId": item.user_id, "title": item.title, "description": item.description}


def build_match_payload(candidate: MatchCandidate) -> Dict[str, Any]:
    """Build a presentation payload for one match candidate.

    Args:
        candidate: DirectMatchCandidate or ChainMatchCandidate

    Returns:
        Dict keyed the way the match display consumes it. Both variants carry
        ``type``, ``description``, ``userOffer``, ``userNeed``, ``confidence``,
        ``confidencePercentage``, ``similarity`` and ``primaryUser``.

    Raises:
        TypeError: If candidate is not a known match variant
    """
    common: Dict[str, Any] = {
        "type": candidate.match_type.value,
        "description": candidate.description,
        "userOffer": candidate.user_offer,
        "userNeed": candidate.user_need,
        "confidence": candidate.confidence,
        "confidencePercentage": confidence_percentage(candidate.confidence),
        "similarity": {"offer": candidate.similarity.offer, "need": candidate.similarity.need},
    }

    if isinstance(candidate, DirectMatchCandidate):
        return {
            **common,
            "primaryUser": build_profile_payload(candidate.matched_user),
            "matchedUser": build_profile_payload(candidate.matched_user),
            "matchedUserOffer": _posting_payload(candidate.matched_user_offer),
            "matchedUserNeed": _posting_payload(candidate.matched_user_need),
        }

    if isinstance(candidate, ChainMatchCandidate):
        return {
            **common,
            "primaryUser": build_profile_payload(candidate.primary_user),
            "chainUsers": [build_profile_payload(user) for user in candidate.chain_users],
            "chainOffers": [_posting_payload(offer) for offer in candidate.chain_offers],
            "chainNeeds": [_posting_payload(need) for need in candidate.chain_needs],
            "chainLength": candidate.chain_length,
        }

    raise TypeError(f"Unsupported match candidate: {type(candidate).__name__}")


def build_result_payload(result: MatchingResult) -> Dict[str, Any]:
    """Serialize a full MatchingResult into a JSON-safe dict."""
    return {
        "directMatches": [build_match_payload(match) for match in result.direct_matches],
        "chainMatches": [build_match_payload(match) for match in result.chain_matches],
        "algorithm": result.algorithm,
        "stats": {
            "totalComparisons": result.stats.total_comparisons,
            "threshold": result.stats.threshold,
            "averageConfidence": result.stats.average_confidence,
        },
    }


def format_match_summary(result: MatchingResult) -> str:
    """Format a MatchingResult as a plain-text report.

    Args:
        result: Result returned by the matching engine

    Returns:
        Multi-line report listing direct matches, chain matches and statistics
    """
    lines: List[str] = []

    lines.append("Swap Matches")
    lines.append("=" * 60)

    if result.is_empty:
        lines.append("No matches found. Try adding more offers or needs.")
    else:
        for heading, matches in (("Direct Matches", result.direct_matches), ("Chain Matches", result.chain_matches)):
            if not matches:
                continue
            lines.append("")
            lines.append(f"{heading} ({len(matches)}):")
            lines.append("-" * 60)
            for index, match in enumerate(matches, start=1):
                lines.extend(_format_match_lines(index, match))

    lines.append("")
    lines.append("Statistics:")
    lines.append("-" * 60)
    lines.append(f"  Comparisons (estimate): {result.stats.total_comparisons}")
    lines.append(f"  Similarity threshold: {result.stats.threshold}")
    lines.append(f"  Average confidence: {confidence_percentage(result.stats.average_confidence)}%")

    return "\n".join(lines)


def _format_match_lines(index: int, match: MatchCandidate) -> List[str]:
    percentage = confidence_percentage(match.confidence)

    if isinstance(match, DirectMatchCandidate):
        user = match.matched_user
        return [
            f"  {index}. {user.display_name} (@{user.username}) {percentage}%",
            f"     You give: {match.user_offer} -> they need: {match.matched_user_need.title}",
            f"     They give: {match.matched_user_offer.title} -> you need: {match.user_need}",
            f"     Trust: {user.trust_score:g}/100 ({user.trust_label}), XP: {user.xp} ({user.xp_level})",
        ]

    if isinstance(match, ChainMatchCandidate):
        route = " -> ".join(user.display_name for user in match.chain_users)
        return [
            f"  {index}. {match.chain_length}-user chain {percentage}%",
            f"     You -> {route} -> You",
            f"     You give: {match.user_offer}; you receive: {match.chain_offers[-1].title}",
        ]

    raise TypeError(f"Unsupported match candidate: {type(match).__name__}")
