"""Listing snapshot loading and matcher input assembly."""

from .exceptions import SnapshotError
from .service import ListingPool, build_listing_pool, load_snapshot

__all__ = ["ListingPool", "SnapshotError", "build_listing_pool", "load_snapshot"]
