"""Shared fixtures for the swap match engine tests."""

from pathlib import Path

import pytest

from swapmatch.domain.models import NeedItem, OfferItem, UserProfile
from swapmatch.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clean_log_context():
    """Keep log context from leaking between tests."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def make_profile():
    """Factory for user profiles with sensible defaults."""

    def _make(uid, trust_score=50, xp=0, display_name=None):
        return UserProfile(
            uid=uid,
            display_name=display_name or uid.title(),
            username=uid,
            trust_score=trust_score,
            xp=xp,
        )

    return _make


@pytest.fixture
def make_offer(make_profile):
    """Factory for offers owned by ``uid``; pass ``profile`` to share one."""
    counter = {"n": 0}

    def _make(uid, title, profile=None, description=""):
        counter["n"] += 1
        return OfferItem(
            offer_id=f"offer-{uid}-{counter['n']}",
            user_id=uid,
            title=title,
            description=description,
            user_profile=profile or make_profile(uid),
        )

    return _make


@pytest.fixture
def make_need(make_profile):
    """Factory for needs owned by ``uid``; pass ``profile`` to share one."""
    counter = {"n": 0}

    def _make(uid, title, profile=None, description=""):
        counter["n"] += 1
        return NeedItem(
            need_id=f"need-{uid}-{counter['n']}",
            user_id=uid,
            title=title,
            description=description,
            user_profile=profile or make_profile(uid),
        )

    return _make


@pytest.fixture
def sample_snapshot_path():
    return FIXTURES_DIR / "sample_snapshot.json"
