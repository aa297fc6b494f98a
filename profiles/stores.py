from typing import List

from travel_matching.exceptions import NotFound
from travel_matching.records import UserProfile

from .models import TravelerProfile


class ProfileStore:
    """Read access to traveler profiles for matching"""

    def get(self, user_id) -> UserProfile:
        try:
            profile = TravelerProfile.objects.get(user_id=user_id, user__is_active=True)
        except TravelerProfile.DoesNotExist:
            raise NotFound('Profile', user_id) from None
        return profile.to_record()

    def candidate_pool(self, exclude_id=None) -> List[UserProfile]:
        """All active travelers, materialised so discovery sees a fixed pool"""
        profiles = TravelerProfile.objects.filter(
            user__is_active=True
        ).order_by('user_id')

        if exclude_id is not None:
            profiles = profiles.exclude(user_id=exclude_id)

        return [profile.to_record() for profile in profiles]
