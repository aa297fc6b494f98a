"""Plain records the matching core works on.

These carry no ORM state, so scoring and discovery can run over
in-memory pools as easily as over profiles loaded from the database.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterable, Optional

from .choices import MatchStatus
from .exceptions import InvalidStatus


def _as_frozenset(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


@dataclass(frozen=True)
class UserProfile:
    """Traveler attributes used for compatibility scoring"""
    id: Any
    travel_style: str
    verification_status: str
    interests: FrozenSet[str] = field(default_factory=frozenset)
    languages: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, 'interests', _as_frozenset(self.interests))
        object.__setattr__(self, 'languages', _as_frozenset(self.languages))


@dataclass(frozen=True)
class Match:
    """A scored pairing between a viewer and a candidate traveler"""
    id: str
    viewer_id: Any
    candidate_id: Any
    score: int
    shared_interests: FrozenSet[str]
    status: str
    created_at: datetime

    def __post_init__(self):
        object.__setattr__(self, 'shared_interests', _as_frozenset(self.shared_interests))
        try:
            status = MatchStatus(self.status)
        except ValueError:
            raise InvalidStatus(self.status, self.id) from None
        object.__setattr__(self, 'status', status)

    @property
    def is_live(self) -> bool:
        return self.status != MatchStatus.DECLINED

    @property
    def compatibility_level(self) -> str:
        """Return compatibility level as string"""
        if self.score >= 90:
            return 'Excellent'
        elif self.score >= 80:
            return 'Very Good'
        elif self.score >= 70:
            return 'Good'
        elif self.score >= 60:
            return 'Fair'
        elif self.score >= 50:
            return 'Moderate'
        else:
            return 'Low'

    def with_status(self, status: str) -> 'Match':
        return replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'viewer_id': self.viewer_id,
            'candidate_id': self.candidate_id,
            'score': self.score,
            'compatibility_level': self.compatibility_level,
            'shared_interests': sorted(self.shared_interests),
            'status': str(self.status),
            'created_at': self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class MatchFilters:
    """Optional discovery filters, all applied together"""
    min_compatibility: Optional[int] = None
    travel_styles: FrozenSet[str] = field(default_factory=frozenset)
    interests: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, 'travel_styles', _as_frozenset(self.travel_styles))
        object.__setattr__(self, 'interests', _as_frozenset(self.interests))

    def admits(self, candidate: UserProfile) -> bool:
        """Check the filters that do not need a score"""
        if self.travel_styles and candidate.travel_style not in self.travel_styles:
            return False
        if self.interests and not (self.interests & candidate.interests):
            return False
        return True

    def admits_score(self, score: int) -> bool:
        return self.min_compatibility is None or score >= self.min_compatibility


@dataclass(frozen=True)
class CompatibilityResult:
    score: int
    shared_interests: FrozenSet[str]
    breakdown: Dict[str, Any] = field(default_factory=dict)
