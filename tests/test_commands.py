"""Management command tests."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from travel_matching.models import TravelMatch


@pytest.fixture
def travelers(make_traveler):
    viewer = make_traveler('viewer', interests=['Food', 'Art'], travel_style='budget', languages=['English'])
    buddy = make_traveler('buddy', interests=['Food', 'Art'], travel_style='budget', languages=['English'],
                          verification_status='fully_verified')
    stranger = make_traveler('stranger', interests=['Golf'], travel_style='luxury')
    return viewer, buddy, stranger


@pytest.mark.django_db
class TestFindMatchesCommand:

    def test_lists_ranked_matches(self, travelers):
        viewer, buddy, stranger = travelers
        out = StringIO()

        call_command('find_matches', user_id=viewer.pk, stdout=out)

        lines = out.getvalue().splitlines()
        assert lines[0] == f"Processing user {viewer.pk}: 2 matches"
        assert lines[1].startswith(f"  {buddy.pk}: 90% (Excellent)")
        assert lines[2].startswith(f"  {stranger.pk}: 0% (Low)")
        assert TravelMatch.objects.count() == 0

    def test_min_score_and_save(self, travelers):
        viewer, buddy, _ = travelers

        call_command('find_matches', user_id=viewer.pk, min_score=50, save=True, stdout=StringIO())

        stored = TravelMatch.objects.get()
        assert stored.viewer_id == viewer.pk
        assert stored.candidate_id == buddy.pk
        assert stored.score == 90

    def test_unknown_user(self, db):
        with pytest.raises(CommandError):
            call_command('find_matches', user_id=999, stdout=StringIO())

    def test_negative_limit(self, travelers):
        viewer, _, _ = travelers

        with pytest.raises(CommandError):
            call_command('find_matches', user_id=viewer.pk, limit=-1, save=True, stdout=StringIO())

        assert TravelMatch.objects.count() == 0
