from django.contrib.auth import get_user_model
from django.db import models
from django.utils import timezone

from travel_matching.choices import TravelStyle, VerificationStatus
from travel_matching.records import UserProfile

User = get_user_model()


class TravelerProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')

    # About
    bio = models.TextField(max_length=1000, blank=True, help_text="Tell other travelers about yourself")
    location = models.CharField(max_length=120, blank=True, help_text="Home city or region")

    # Travel preferences
    travel_style = models.CharField(
        max_length=20,
        choices=TravelStyle.choices,
        default=TravelStyle.ADVENTURE
    )
    interests = models.JSONField(default=list, blank=True, help_text="List of interests, e.g. Hiking, Food")
    languages = models.JSONField(default=list, blank=True, help_text="Languages spoken")

    # Verification and Safety
    verification_status = models.CharField(
        max_length=20,
        choices=VerificationStatus.choices,
        default=VerificationStatus.UNVERIFIED
    )

    # Metadata
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles_travelerprofile'
        indexes = [
            models.Index(fields=['travel_style'], name='profile_travel_style_idx'),
        ]

    def __str__(self):
        return f"{self.user.get_username()}'s profile"

    def to_record(self) -> UserProfile:
        """Snapshot of the attributes used for matching"""
        return UserProfile(
            id=self.user_id,
            travel_style=self.travel_style,
            verification_status=self.verification_status,
            interests=self.interests or [],
            languages=self.languages or [],
        )
