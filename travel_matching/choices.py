from django.db import models


class TravelStyle(models.TextChoices):
    ADVENTURE = 'adventure', 'Adventure'
    RELAXATION = 'relaxation', 'Relaxation'
    CULTURAL = 'cultural', 'Cultural'
    BUDGET = 'budget', 'Budget'
    LUXURY = 'luxury', 'Luxury'
    SOLO = 'solo', 'Solo'
    GROUP = 'group', 'Group'


class VerificationStatus(models.TextChoices):
    """Trust tiers, declared from least to most trusted"""
    UNVERIFIED = 'unverified', 'Unverified'
    EMAIL_VERIFIED = 'email_verified', 'Email verified'
    ID_VERIFIED = 'id_verified', 'ID verified'
    FULLY_VERIFIED = 'fully_verified', 'Fully verified'


class MatchStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    DECLINED = 'declined', 'Declined'
    CONNECTED = 'connected', 'Connected'


# Legal status changes; declined and connected have no way out
MATCH_TRANSITIONS = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACCEPTED, MatchStatus.DECLINED}),
    MatchStatus.ACCEPTED: frozenset({MatchStatus.CONNECTED}),
    MatchStatus.DECLINED: frozenset(),
    MatchStatus.CONNECTED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in MATCH_TRANSITIONS.items() if not targets
)
