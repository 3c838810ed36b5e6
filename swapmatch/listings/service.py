"""Assembly of matcher inputs from a listing store snapshot.

The listing store is a key-value document tree:

    userProfiles/{uid}          displayName, username, trustScore, xp
    allOffers/{offerId}         userId, title, description
    allNeeds/{needId}           userId, title, description
    userOffers/{uid}/{offerId}  title, description  (requester's own copy)
    userNeeds/{uid}/{needId}    title, description

This module reads such a snapshot and produces the requester's titles plus the
pool of every other user's postings, each embedding its owner's profile.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import yaml
from pydantic import ValidationError

from swapmatch.domain.models import NeedItem, OfferItem, UserProfile
from swapmatch.logging import get_logger

from .exceptions import SnapshotError

logger = get_logger(__name__, component="listings")

DEFAULT_DISPLAY_NAME = "Anonymous Swapper"


@dataclass
class ListingPool:
    """Inputs for one matching run.

    Attributes:
        requester_id: Requesting user's id
        user_offers: Requester's offer titles
        user_needs: Requester's need titles
        all_offers: Every other user's offers
        all_needs: Every other user's needs
        skipped_count: Postings dropped as malformed or empty
    """

    requester_id: str
    user_offers: List[str] = field(default_factory=list)
    user_needs: List[str] = field(default_factory=list)
    all_offers: List[OfferItem] = field(default_factory=list)
    all_needs: List[NeedItem] = field(default_factory=list)
    skipped_count: int = 0

    @property
    def requester_has_postings(self) -> bool:
        return bool(self.user_offers or self.user_needs)


def load_snapshot(path: Path) -> Dict[str, Any]:
    """Read a snapshot document from a JSON or YAML file.

    Args:
        path: Snapshot file (.json, .yaml or .yml)

    Returns:
        Top-level mapping of the snapshot

    Raises:
        SnapshotError: If the file is missing, unparsable or not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except FileNotFoundError:
        raise SnapshotError(f"Snapshot file not found: {path}", path=str(path))
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(f"Failed to parse snapshot {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise SnapshotError(f"Failed to read snapshot {path}: {e}", path=str(path)) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise SnapshotError(
            f"Snapshot root must be a mapping, got {type(document).__name__}", path=str(path)
        )

    logger.info(
        "Snapshot loaded",
        extra={"event": "listings.snapshot.loaded", "path": str(path)},
    )
    return document


def build_listing_pool(snapshot: Mapping[str, Any], requester_id: str) -> ListingPool:
    """Build matcher inputs for ``requester_id`` from a snapshot.

    Titles fall back to the description when missing. The requester's own
    postings are kept out of the pool. Users without a stored profile get a
    default one (trust 50, xp 0).

    Args:
        snapshot: Snapshot mapping (see module docstring)
        requester_id: Requesting user's id

    Returns:
        ListingPool ready for MatchingEngine.run
    """
    pool = ListingPool(requester_id=requester_id)
    profiles = _ProfileDirectory(snapshot.get("userProfiles") or {})

    for offer_id, data in _entries(snapshot.get("allOffers")):
        item = _build_posting(OfferItem, "offerId", offer_id, data, profiles)
        if item is None:
            pool.skipped_count += 1
        elif item.user_id == requester_id:
            continue
        else:
            pool.all_offers.append(item)

    for need_id, data in _entries(snapshot.get("allNeeds")):
        item = _build_posting(NeedItem, "needId", need_id, data, profiles)
        if item is None:
            pool.skipped_count += 1
        elif item.user_id == requester_id:
            continue
        else:
            pool.all_needs.append(item)

    pool.user_offers = _requester_titles(snapshot, "userOffers", "allOffers", requester_id)
    pool.user_needs = _requester_titles(snapshot, "userNeeds", "allNeeds", requester_id)

    logger.info(
        "Listing pool built",
        extra={
            "event": "listings.pool.built",
            "requester_id": requester_id,
            "user_offer_count": len(pool.user_offers),
            "user_need_count": len(pool.user_needs),
            "pool_offer_count": len(pool.all_offers),
            "pool_need_count": len(pool.all_needs),
            "skipped_count": pool.skipped_count,
        },
    )

    return pool


class _ProfileDirectory:
    """Lazily validated profiles, defaulted when missing or invalid."""

    def __init__(self, raw_profiles: Mapping[str, Any]):
        self._raw = raw_profiles if isinstance(raw_profiles, Mapping) else {}
        self._cache: Dict[str, UserProfile] = {}

    def get(self, uid: str) -> UserProfile:
        if uid not in self._cache:
            self._cache[uid] = self._load(uid)
        return self._cache[uid]

    def _load(self, uid: str) -> UserProfile:
        data = self._raw.get(uid)
        if not isinstance(data, Mapping):
            return UserProfile(uid=uid)

        # Null fields fall back to model defaults
        fields = {key: value for key, value in data.items() if value is not None}
        fields["uid"] = uid
        try:
            return UserProfile.model_validate(fields)
        except ValidationError as e:
            logger.warning(
                f"Invalid profile for {uid}, using defaults",
                extra={"event": "listings.profile.invalid", "uid": uid, "error_count": e.error_count()},
            )
            display_name = data.get("displayName")
            if not isinstance(display_name, str) or not display_name.strip():
                display_name = DEFAULT_DISPLAY_NAME
            return UserProfile(uid=uid, displayName=display_name)


def _entries(collection: Any) -> Iterator[Tuple[str, Any]]:
    """Iterate (key, value) over a mapping or an index-keyed list."""
    if isinstance(collection, Mapping):
        yield from ((str(key), value) for key, value in collection.items())
    elif isinstance(collection, list):
        yield from ((str(index), value) for index, value in enumerate(collection))


def _posting_text(data: Mapping[str, Any]) -> Tuple[str, str]:
    description = str(data.get("description") or "").strip()
    title = str(data.get("title") or "").strip() or description
    return title, description


def _build_posting(model, id_field: str, item_id: str, data: Any, profiles: _ProfileDirectory):
    if not isinstance(data, Mapping):
        return None

    user_id = str(data.get("userId") or "").strip()
    title, description = _posting_text(data)
    if not user_id or not title:
        logger.warning(
            f"Skipping posting {item_id}: missing owner or text",
            extra={"event": "listings.posting.skipped", "posting_id": item_id},
        )
        return None

    return model.model_validate({
        id_field: str(data.get(id_field) or item_id),
        "userId": user_id,
        "title": title,
        "description": description,
        "userProfile": profiles.get(user_id),
    })


def _requester_titles(
    snapshot: Mapping[str, Any], own_key: str, pool_key: str, requester_id: str
) -> List[str]:
    """Titles of the requester's postings, from their own branch or the global one."""
    branch = snapshot.get(own_key)
    own: Optional[Any] = branch.get(requester_id) if isinstance(branch, Mapping) else None

    if own:
        source = (data for _, data in _entries(own))
    else:
        source = (
            data
            for _, data in _entries(snapshot.get(pool_key))
            if isinstance(data, Mapping) and str(data.get("userId") or "").strip() == requester_id
        )

    titles = []
    for data in source:
        if isinstance(data, Mapping):
            title, _ = _posting_text(data)
            if title:
                titles.append(title)
    return titles
