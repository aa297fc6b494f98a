"""Shared fixtures for the matching tests."""

from datetime import datetime, timezone as dt_timezone

import pytest

from profiles.models import TravelerProfile
from travel_matching.choices import MatchStatus
from travel_matching.records import Match, UserProfile
from travel_matching.repositories import InMemoryMatchRepository
from travel_matching.services import CompatibilityCalculator, MatchingService

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=dt_timezone.utc)


# ============================================================================
# Profile records
# ============================================================================

def make_profile(profile_id, interests=(), travel_style='adventure', languages=(),
                 verification_status='unverified') -> UserProfile:
    return UserProfile(
        id=profile_id,
        interests=frozenset(interests),
        travel_style=travel_style,
        languages=frozenset(languages),
        verification_status=verification_status,
    )


def make_match(match_id='m-1', viewer_id='viewer', candidate_id='cand', score=50,
               shared_interests=(), status=MatchStatus.PENDING) -> Match:
    return Match(
        id=match_id,
        viewer_id=viewer_id,
        candidate_id=candidate_id,
        score=score,
        shared_interests=frozenset(shared_interests),
        status=status,
        created_at=FIXED_NOW,
    )


@pytest.fixture
def viewer() -> UserProfile:
    """Viewer from the worked example: hiker who likes beaches and food."""
    return make_profile(
        'viewer',
        interests={'Hiking', 'Beach', 'Food'},
        travel_style='adventure',
        languages={'English'},
        verification_status='email_verified',
    )


@pytest.fixture
def candidate() -> UserProfile:
    return make_profile(
        'candidate',
        interests={'Beach', 'Food', 'Art'},
        travel_style='cultural',
        languages={'English', 'French'},
        verification_status='id_verified',
    )


# ============================================================================
# Services
# ============================================================================

@pytest.fixture
def calculator() -> CompatibilityCalculator:
    return CompatibilityCalculator()


@pytest.fixture
def repository() -> InMemoryMatchRepository:
    return InMemoryMatchRepository()


class RecordingNotifier:
    """Collects match events instead of sending them."""

    def __init__(self):
        self.events = []

    def match_accepted(self, match):
        self.events.append(('match_accepted', match))

    def match_connected(self, match):
        self.events.append(('match_connected', match))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(repository, notifier) -> MatchingService:
    return MatchingService(repository=repository, notifier=notifier, clock=lambda: FIXED_NOW)


# ============================================================================
# Database travelers
# ============================================================================

@pytest.fixture
def make_traveler(db, django_user_model):
    """Create a user with a traveler profile."""

    def _make(username, interests=(), travel_style='adventure', languages=(),
              verification_status='unverified', is_active=True):
        user = django_user_model.objects.create_user(
            username=username,
            email=f'{username}@example.com',
            password='travel-pass-123',
            is_active=is_active,
        )
        TravelerProfile.objects.create(
            user=user,
            interests=list(interests),
            travel_style=travel_style,
            languages=list(languages),
            verification_status=verification_status,
        )
        return user

    return _make
