"""Core domain models for profiles and postings.

This module defines the data structures the matcher consumes:
- UserProfile: identity and reputation snapshot of a swapper
- OfferItem: something a user can provide
- NeedItem: something a user wants
- MatchType: discriminator for direct and chain matches

All models are read-only snapshots. They accept the camelCase keys used by the
listing store (``trustScore``, ``userProfile``, ...) as well as snake_case names.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class MatchType(str, Enum):
    """Kinds of swap the engine can propose."""

    DIRECT = "direct"
    CHAIN = "chain"


class UserProfile(BaseModel):
    """Identity and reputation snapshot for a user.

    The trust score is bounded to [0, 100] and xp is a non-negative counter.
    Profiles reaching the matcher have already passed this validation, so the
    scoring code never re-checks them.
    """

    uid: str = Field(..., description="Unique user id")
    display_name: str = Field("Anonymous Swapper", alias="displayName")
    username: str = Field("", description="Unique handle")
    trust_score: float = Field(50, ge=0, le=100, alias="trustScore")
    xp: int = Field(0, ge=0, description="Experience points")

    @field_validator("uid")
    @classmethod
    def strip_uid(cls, v: str) -> str:
        """Strip whitespace from the user id."""
        if not v or not v.strip():
            raise ValueError("uid cannot be empty or whitespace-only")
        return v.strip()

    @property
    def trust_label(self) -> str:
        """Human-readable trust tier."""
        if self.trust_score >= 80:
            return "Excellent"
        if self.trust_score >= 60:
            return "Good"
        if self.trust_score >= 40:
            return "Fair"
        return "Building"

    @property
    def xp_level(self) -> str:
        """Experience tier derived from xp."""
        if self.xp >= 1000:
            return "Expert"
        if self.xp >= 500:
            return "Advanced"
        if self.xp >= 100:
            return "Intermediate"
        return "Beginner"

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "json_schema_extra": {"example": {
            "uid": "u_42",
            "displayName": "Ada",
            "username": "ada",
            "trustScore": 72,
            "xp": 340,
        }},
    }


class OfferItem(BaseModel):
    """A posting describing something a user provides."""

    offer_id: str = Field(..., alias="offerId")
    user_id: str = Field(..., alias="userId")
    title: str = Field(..., description="Short title, the text the matcher scores")
    description: str = Field("", description="Free-text description")
    user_profile: UserProfile = Field(..., alias="userProfile")

    model_config = {"frozen": True, "populate_by_name": True}


class NeedItem(BaseModel):
    """A posting describing something a user wants."""

    need_id: str = Field(..., alias="needId")
    user_id: str = Field(..., alias="userId")
    title: str = Field(..., description="Short title, the text the matcher scores")
    description: str = Field("", description="Free-text description")
    user_profile: UserProfile = Field(..., alias="userProfile")

    model_config = {"frozen": True, "populate_by_name": True}
