"""Match storage.

Every repository applies ``update_status`` as a compare-and-swap: the write
only lands when the stored status still equals the expected one.
"""

from typing import Dict, List, Optional
import logging
import threading
import uuid

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from .choices import MatchStatus
from .exceptions import DuplicateMatch, InvalidStatus, InvalidTransition, NotFound, StorageError
from .models import TravelMatch
from .records import Match

logger = logging.getLogger(__name__)


class MatchRepository:
    """Storage contract the matching service depends on"""

    def create(self, match: Match) -> Match:
        raise NotImplementedError

    def get_by_id(self, match_id: str) -> Match:
        raise NotImplementedError

    def update_status(self, match_id: str, expected_status: str, new_status: str) -> Match:
        raise NotImplementedError

    def find_live(self, viewer_id, candidate_id) -> Optional[Match]:
        raise NotImplementedError

    def list_for_viewer(self, viewer_id, status: Optional[str] = None) -> List[Match]:
        raise NotImplementedError


class InMemoryMatchRepository(MatchRepository):
    """Process-local repository guarded by a single lock"""

    def __init__(self):
        self._matches: Dict[str, Match] = {}
        self._lock = threading.Lock()

    def create(self, match: Match) -> Match:
        with self._lock:
            if match.id in self._matches:
                raise StorageError(f"Match {match.id} already exists")
            if match.is_live and self._find_live(match.viewer_id, match.candidate_id):
                raise DuplicateMatch(match.viewer_id, match.candidate_id)
            self._matches[match.id] = match
            return match

    def get_by_id(self, match_id: str) -> Match:
        with self._lock:
            try:
                return self._matches[match_id]
            except KeyError:
                raise NotFound('Match', match_id) from None

    def update_status(self, match_id: str, expected_status: str, new_status: str) -> Match:
        with self._lock:
            try:
                current = self._matches[match_id]
            except KeyError:
                raise NotFound('Match', match_id) from None

            if current.status != expected_status:
                raise InvalidTransition(match_id, current.status, new_status)

            updated = current.with_status(new_status)
            self._matches[match_id] = updated
            return updated

    def find_live(self, viewer_id, candidate_id) -> Optional[Match]:
        with self._lock:
            return self._find_live(viewer_id, candidate_id)

    def list_for_viewer(self, viewer_id, status: Optional[str] = None) -> List[Match]:
        with self._lock:
            return [
                match for match in self._matches.values()
                if match.viewer_id == viewer_id and (status is None or match.status == status)
            ]

    def _find_live(self, viewer_id, candidate_id) -> Optional[Match]:
        for match in self._matches.values():
            if match.viewer_id == viewer_id and match.candidate_id == candidate_id and match.is_live:
                return match
        return None


class DjangoMatchRepository(MatchRepository):
    """Repository backed by the TravelMatch model"""

    def create(self, match: Match) -> Match:
        try:
            with transaction.atomic():
                travel_match = TravelMatch.objects.create(
                    id=uuid.UUID(match.id),
                    viewer_id=match.viewer_id,
                    candidate_id=match.candidate_id,
                    score=match.score,
                    shared_interests=sorted(match.shared_interests),
                    status=match.status,
                    created_at=match.created_at,
                )
        except IntegrityError as e:
            if match.is_live and self.find_live(match.viewer_id, match.candidate_id):
                raise DuplicateMatch(match.viewer_id, match.candidate_id) from e
            logger.error(f"Could not store match {match.id}: {str(e)}")
            raise StorageError(f"Could not store match {match.id}") from e
        except ValueError as e:
            logger.error(f"Could not store match {match.id}: {str(e)}")
            raise StorageError(f"Could not store match {match.id}") from e
        except DatabaseError as e:
            logger.error(f"Database error storing match {match.id}: {str(e)}")
            raise StorageError(f"Could not store match {match.id}") from e

        return travel_match.to_record()

    def get_by_id(self, match_id: str) -> Match:
        try:
            return TravelMatch.objects.get(pk=match_id).to_record()
        except InvalidStatus:
            raise
        except (TravelMatch.DoesNotExist, ValidationError, ValueError):
            raise NotFound('Match', match_id) from None
        except DatabaseError as e:
            logger.error(f"Database error loading match {match_id}: {str(e)}")
            raise StorageError(f"Could not load match {match_id}") from e

    def update_status(self, match_id: str, expected_status: str, new_status: str) -> Match:
        try:
            with transaction.atomic():
                updated = TravelMatch.objects.filter(
                    pk=match_id,
                    status=expected_status
                ).update(status=new_status, updated_at=timezone.now())

                if not updated:
                    current = TravelMatch.objects.filter(pk=match_id).values_list('status', flat=True).first()
                    if current is None:
                        raise NotFound('Match', match_id)
                    raise InvalidTransition(match_id, MatchStatus(current), new_status)

                return TravelMatch.objects.get(pk=match_id).to_record()
        except InvalidStatus:
            raise
        except (ValidationError, ValueError):
            raise NotFound('Match', match_id) from None
        except DatabaseError as e:
            logger.error(f"Database error updating match {match_id}: {str(e)}")
            raise StorageError(f"Could not update match {match_id}") from e

    def find_live(self, viewer_id, candidate_id) -> Optional[Match]:
        travel_match = TravelMatch.objects.filter(
            viewer_id=viewer_id,
            candidate_id=candidate_id
        ).exclude(
            status=MatchStatus.DECLINED
        ).first()
        return travel_match.to_record() if travel_match else None

    def list_for_viewer(self, viewer_id, status: Optional[str] = None) -> List[Match]:
        matches = TravelMatch.objects.filter(viewer_id=viewer_id)
        if status:
            matches = matches.filter(status=status)
        return [travel_match.to_record() for travel_match in matches]
