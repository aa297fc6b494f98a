from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from profiles.stores import ProfileStore
from travel_matching.exceptions import MatchingError
from travel_matching.records import MatchFilters
from travel_matching.repositories import DjangoMatchRepository
from travel_matching.services import MatchingService


class Command(BaseCommand):
    help = 'Rank compatible travelers for a user, optionally storing the matches'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-id',
            type=int,
            required=True,
            help='Find matches for this user ID',
        )
        parser.add_argument(
            '--min-score',
            type=int,
            default=getattr(settings, 'TRAVEL_MATCHING_MIN_COMPATIBILITY', 0),
            help='Skip candidates scoring below this value',
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=getattr(settings, 'TRAVEL_MATCHING_DISCOVERY_LIMIT', 20),
            help='Maximum number of matches to show',
        )
        parser.add_argument(
            '--save',
            action='store_true',
            help='Store new matches as pending',
        )

    def handle(self, *args, **options):
        if options['limit'] < 0:
            raise CommandError(f"--limit must not be negative, got {options['limit']}")

        profile_store = ProfileStore()
        matching_service = MatchingService(repository=DjangoMatchRepository())
        filters = MatchFilters(min_compatibility=options['min_score'])

        try:
            viewer = profile_store.get(options['user_id'])
            pool = profile_store.candidate_pool(exclude_id=viewer.id)

            if options['save']:
                matches = matching_service.discover(viewer, pool, filters=filters, limit=options['limit'])
            else:
                matches = matching_service.find_matches(viewer, pool, filters=filters)[:options['limit']]
        except MatchingError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(f"Processing user {viewer.id}: {len(matches)} matches")

        for match in matches:
            shared = ', '.join(sorted(match.shared_interests)) or '-'
            self.stdout.write(
                f"  {match.candidate_id}: {match.score}% "
                f"({match.compatibility_level}) [{match.status}] shared: {shared}"
            )

        self.stdout.write(self.style.SUCCESS('Done!'))
