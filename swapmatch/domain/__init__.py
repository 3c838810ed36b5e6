"""Domain models for the swap match engine."""

from .models import MatchType, NeedItem, OfferItem, UserProfile

__all__ = ["UserProfile", "OfferItem", "NeedItem", "MatchType"]
