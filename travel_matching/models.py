import uuid

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from .choices import MatchStatus
from .records import Match


class TravelMatch(models.Model):
    """Stored match between a viewer and a candidate traveler"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    viewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='travel_matches'
    )
    candidate = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='travel_matches_as_candidate'
    )

    score = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Compatibility score from 0-100"
    )
    shared_interests = models.JSONField(default=list, help_text="Interests both travelers share")

    status = models.CharField(
        max_length=20,
        choices=MatchStatus.choices,
        default=MatchStatus.PENDING
    )

    # Metadata
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'travel_matching_travelmatch'
        ordering = ['-score', 'candidate_id']
        constraints = [
            models.UniqueConstraint(
                fields=['viewer', 'candidate'],
                condition=~Q(status=MatchStatus.DECLINED),
                name='unique_live_match_per_pair',
            ),
        ]
        indexes = [
            models.Index(fields=['viewer', 'status'], name='match_viewer_status_idx'),
            models.Index(fields=['candidate', 'status'], name='match_candidate_status_idx'),
        ]

    def __str__(self):
        return f"{self.viewer_id} -> {self.candidate_id}: {self.score}% ({self.status})"

    def to_record(self) -> Match:
        return Match(
            id=str(self.id),
            viewer_id=self.viewer_id,
            candidate_id=self.candidate_id,
            score=self.score,
            shared_interests=self.shared_interests,
            status=self.status,
            created_at=self.created_at,
        )
