from typing import List, Optional, Iterable, Callable
import logging
import math
import time
import uuid
from fractions import Fraction

from django.utils import timezone

from .choices import TravelStyle, VerificationStatus, MatchStatus, MATCH_TRANSITIONS
from .exceptions import DuplicateMatch, InvalidProfile, InvalidTransition, NotFound
from .records import UserProfile, Match, MatchFilters, CompatibilityResult

logger = logging.getLogger(__name__)


class CompatibilityCalculator:
    """Core compatibility scoring algorithm"""

    # Styles that partially suit a traveler of the given style
    PARTIAL_STYLE_MATCHES = {
        TravelStyle.ADVENTURE: {TravelStyle.CULTURAL, TravelStyle.SOLO},
        TravelStyle.RELAXATION: {TravelStyle.LUXURY, TravelStyle.GROUP},
        TravelStyle.CULTURAL: {TravelStyle.ADVENTURE, TravelStyle.BUDGET},
        TravelStyle.BUDGET: {TravelStyle.SOLO, TravelStyle.GROUP},
        TravelStyle.LUXURY: {TravelStyle.RELAXATION},
        TravelStyle.SOLO: {TravelStyle.ADVENTURE, TravelStyle.BUDGET},
        TravelStyle.GROUP: {TravelStyle.RELAXATION, TravelStyle.BUDGET},
    }

    VERIFICATION_BONUS = {
        VerificationStatus.FULLY_VERIFIED: 10,
        VerificationStatus.ID_VERIFIED: 5,
    }

    def __init__(self):
        self.weights = {
            'interests': 40,
            'travel_style': 30,
            'languages': 20,
            'verification': 10,
        }

    def score(self, viewer: UserProfile, candidate: UserProfile) -> CompatibilityResult:
        """Score how well the candidate suits the viewer.

        Only the candidate's verification counts towards the bonus, so
        ``score(a, b)`` and ``score(b, a)`` differ when the two profiles sit
        in different verification tiers.
        """
        viewer_style = self._validate_style(viewer)
        candidate_style = self._validate_style(candidate)
        self._validate_verification(viewer)
        candidate_verification = self._validate_verification(candidate)

        shared_interests = viewer.interests & candidate.interests
        interests_score = self._calculate_interests_compatibility(viewer, candidate, shared_interests)
        style_score = self._calculate_style_compatibility(viewer_style, candidate_style)
        languages_score = self._calculate_languages_compatibility(viewer, candidate)
        verification_score = self._calculate_verification_bonus(candidate_verification)

        total = interests_score + style_score + languages_score + verification_score
        overall_score = min(100, max(0, self._round_half_up(total)))

        breakdown = {
            'interests': {
                'score': float(interests_score),
                'weight': self.weights['interests'],
                'shared': sorted(shared_interests),
            },
            'travel_style': {
                'score': style_score,
                'weight': self.weights['travel_style'],
            },
            'languages': {
                'score': languages_score,
                'weight': self.weights['languages'],
            },
            'verification': {
                'score': verification_score,
                'weight': self.weights['verification'],
            },
        }

        return CompatibilityResult(
            score=overall_score,
            shared_interests=frozenset(shared_interests),
            breakdown=breakdown,
        )

    def _calculate_interests_compatibility(self, viewer: UserProfile, candidate: UserProfile,
                                           shared_interests: frozenset) -> Fraction:
        """Share of interests in common, measured against the larger set"""
        denominator = max(len(viewer.interests), len(candidate.interests))
        if denominator == 0:
            return Fraction(0)
        return Fraction(self.weights['interests'] * len(shared_interests), denominator)

    def _calculate_style_compatibility(self, viewer_style: TravelStyle, candidate_style: TravelStyle) -> int:
        if viewer_style == candidate_style:
            return self.weights['travel_style']
        if candidate_style in self.PARTIAL_STYLE_MATCHES[viewer_style]:
            return self.weights['travel_style'] // 2
        return 0

    def _calculate_languages_compatibility(self, viewer: UserProfile, candidate: UserProfile) -> int:
        shared_languages = viewer.languages & candidate.languages
        return min(self.weights['languages'], 10 * len(shared_languages))

    def _calculate_verification_bonus(self, verification: VerificationStatus) -> int:
        return self.VERIFICATION_BONUS.get(verification, 0)

    @staticmethod
    def _round_half_up(value: Fraction) -> int:
        return math.floor(value + Fraction(1, 2))

    @staticmethod
    def _validate_style(profile: UserProfile) -> TravelStyle:
        try:
            return TravelStyle(profile.travel_style)
        except ValueError:
            raise InvalidProfile('travel_style', profile.travel_style, profile.id) from None

    @staticmethod
    def _validate_verification(profile: UserProfile) -> VerificationStatus:
        try:
            return VerificationStatus(profile.verification_status)
        except ValueError:
            raise InvalidProfile('verification_status', profile.verification_status, profile.id) from None


class MatchingService:
    """Service for discovering matches and moving them through their lifecycle.

    The repository must apply ``update_status`` as a compare-and-swap on the
    stored status; that is what keeps two racing requests on the same match
    from both succeeding.
    """

    def __init__(self, repository, calculator: Optional[CompatibilityCalculator] = None,
                 notifier=None, clock: Optional[Callable] = None):
        self.repository = repository
        self.calculator = calculator or CompatibilityCalculator()
        self.notifier = notifier
        self.clock = clock or timezone.now

    def find_matches(self, viewer: UserProfile, candidate_pool: Iterable[UserProfile],
                     filters: Optional[MatchFilters] = None) -> List[Match]:
        """Score and rank candidates for a viewer without storing anything"""
        start_time = time.time()
        filters = filters or MatchFilters()
        candidates = tuple(candidate_pool)
        created_at = self.clock()

        matches = []
        for candidate in candidates:
            if candidate.id == viewer.id or not filters.admits(candidate):
                continue

            result = self.calculator.score(viewer, candidate)
            if not filters.admits_score(result.score):
                continue

            matches.append(Match(
                id=str(uuid.uuid4()),
                viewer_id=viewer.id,
                candidate_id=candidate.id,
                score=result.score,
                shared_interests=result.shared_interests,
                status=MatchStatus.PENDING,
                created_at=created_at,
            ))

        matches.sort(key=lambda match: (-match.score, match.candidate_id))

        logger.info(
            "Scored %d of %d candidates for viewer %s in %.1fms",
            len(matches), len(candidates), viewer.id, (time.time() - start_time) * 1000
        )
        return matches

    def discover(self, viewer: UserProfile, candidate_pool: Iterable[UserProfile],
                 filters: Optional[MatchFilters] = None, limit: Optional[int] = None) -> List[Match]:
        """Find matches and store the new ones, reusing any live match for a pair"""
        if limit is not None and limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")

        found = self.find_matches(viewer, candidate_pool, filters)
        if limit is not None:
            found = found[:limit]

        stored = []
        created = 0
        for match in found:
            existing = self.repository.find_live(match.viewer_id, match.candidate_id)
            if existing is not None:
                stored.append(existing)
                continue
            try:
                stored.append(self.repository.create(match))
            except DuplicateMatch:
                # stored by a concurrent discovery since find_live
                existing = self.repository.find_live(match.viewer_id, match.candidate_id)
                if existing is None:
                    raise
                stored.append(existing)
                continue
            created += 1

        logger.info(
            "Discovery for viewer %s: %d matches, %d newly stored",
            viewer.id, len(stored), created
        )
        return stored

    def get_matches(self, viewer_id, status: Optional[str] = None) -> List[Match]:
        """Stored matches for a viewer, best first"""
        matches = self.repository.list_for_viewer(viewer_id, status=status)
        return sorted(matches, key=lambda match: (-match.score, match.candidate_id))

    def get_match(self, match_id: str, viewer_id=None) -> Match:
        """Load one match, hidden from anyone but its viewer when viewer_id is given"""
        match = self.repository.get_by_id(match_id)
        if viewer_id is not None and match.viewer_id != viewer_id:
            raise NotFound('Match', match_id)
        return match

    def accept(self, match_id: str, viewer_id=None) -> Match:
        match = self._transition(match_id, MatchStatus.ACCEPTED, viewer_id)
        if self.notifier:
            self.notifier.match_accepted(match)
        return match

    def decline(self, match_id: str, viewer_id=None) -> Match:
        return self._transition(match_id, MatchStatus.DECLINED, viewer_id)

    def connect(self, match_id: str, viewer_id=None) -> Match:
        match = self._transition(match_id, MatchStatus.CONNECTED, viewer_id)
        if self.notifier:
            self.notifier.match_connected(match)
        return match

    def _transition(self, match_id: str, new_status: MatchStatus, viewer_id=None) -> Match:
        match = self.get_match(match_id, viewer_id)

        if new_status not in MATCH_TRANSITIONS[match.status]:
            logger.info(
                "Rejected transition of match %s from %s to %s",
                match_id, match.status, new_status
            )
            raise InvalidTransition(match_id, match.status, new_status)

        updated = self.repository.update_status(match_id, match.status, new_status)
        logger.info("Match %s moved from %s to %s", match_id, match.status, new_status)
        return updated
