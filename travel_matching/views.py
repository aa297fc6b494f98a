import json

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from profiles.stores import ProfileStore
from .choices import MatchStatus, TravelStyle
from .exceptions import (
    InvalidProfile, InvalidStatus, InvalidTransition, MatchingError, NotFound, StorageError
)
from .notifications import MatchNotifier
from .records import MatchFilters
from .repositories import DjangoMatchRepository
from .services import MatchingService
from .sessions import RequestSessionProvider

ERROR_STATUS_CODES = (
    (NotFound, 404, 'not_found'),
    (InvalidTransition, 409, 'invalid_transition'),
    (InvalidProfile, 400, 'invalid_profile'),
    (InvalidStatus, 400, 'invalid_status'),
    (StorageError, 503, 'storage_error'),
)


def get_matching_service() -> MatchingService:
    return MatchingService(
        repository=DjangoMatchRepository(),
        notifier=MatchNotifier()
    )


def error_response(error: MatchingError) -> JsonResponse:
    for error_class, status, code in ERROR_STATUS_CODES:
        if isinstance(error, error_class):
            return JsonResponse({'error': str(error), 'code': code}, status=status)
    raise error


def _request_params(request) -> dict:
    if request.content_type == 'application/json' and request.body:
        try:
            data = json.loads(request.body)
        except json.JSONDecodeError:
            raise ValueError('Request body is not valid JSON')
        if not isinstance(data, dict):
            raise ValueError('Request body must be a JSON object')
        return data

    params = request.GET.copy()
    params.update(request.POST)
    return {
        'min_compatibility': params.get('min_compatibility'),
        'travel_styles': params.getlist('travel_styles'),
        'interests': params.getlist('interests'),
        'limit': params.get('limit'),
    }


def _parse_int(value, name, default=None):
    if value in (None, ''):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f'{name} must be an integer')


def _parse_string_list(value, name):
    if value in (None, ''):
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f'{name} must be a list of strings')
    return value


def _parse_discovery(request):
    params = _request_params(request)

    travel_styles = _parse_string_list(params.get('travel_styles'), 'travel_styles')
    invalid_styles = [style for style in travel_styles if style not in TravelStyle.values]
    if invalid_styles:
        raise ValueError(f"Unknown travel styles: {', '.join(invalid_styles)}")

    filters = MatchFilters(
        min_compatibility=_parse_int(
            params.get('min_compatibility'),
            'min_compatibility',
            getattr(settings, 'TRAVEL_MATCHING_MIN_COMPATIBILITY', None)
        ),
        travel_styles=travel_styles,
        interests=_parse_string_list(params.get('interests'), 'interests'),
    )
    limit = _parse_int(
        params.get('limit'),
        'limit',
        getattr(settings, 'TRAVEL_MATCHING_DISCOVERY_LIMIT', 20)
    )
    if limit is not None and limit < 0:
        raise ValueError('limit must not be negative')
    return filters, limit


@login_required
@require_GET
def match_list(request):
    """Stored matches for the logged-in traveler"""

    status = request.GET.get('status') or None
    if status and status not in MatchStatus.values:
        return JsonResponse({'error': f'Unknown status {status}', 'code': 'bad_request'}, status=400)

    try:
        matches = get_matching_service().get_matches(request.user.pk, status=status)
    except MatchingError as e:
        return error_response(e)

    return JsonResponse({
        'matches': [match.to_dict() for match in matches],
        'total_count': len(matches)
    })


@login_required
@require_POST
def discover_matches(request):
    """Score the candidate pool and store new matches"""

    profile_store = ProfileStore()
    viewer = RequestSessionProvider(request, profile_store).current_user()
    if viewer is None:
        return JsonResponse({'error': 'Profile not completed', 'code': 'profile_required'}, status=400)

    try:
        filters, limit = _parse_discovery(request)
    except ValueError as e:
        return JsonResponse({'error': str(e), 'code': 'bad_request'}, status=400)

    try:
        matches = get_matching_service().discover(
            viewer,
            profile_store.candidate_pool(exclude_id=viewer.id),
            filters=filters,
            limit=limit
        )
    except MatchingError as e:
        return error_response(e)

    return JsonResponse({
        'matches': [match.to_dict() for match in matches],
        'total_count': len(matches)
    })


def _apply_transition(request, match_id, operation):
    service = get_matching_service()
    try:
        match = getattr(service, operation)(str(match_id), viewer_id=request.user.pk)
    except MatchingError as e:
        return error_response(e)
    return JsonResponse({'match': match.to_dict()})


@login_required
@require_POST
def accept_match(request, match_id):
    """Accept a pending match"""
    return _apply_transition(request, match_id, 'accept')


@login_required
@require_POST
def decline_match(request, match_id):
    """Decline a pending match"""
    return _apply_transition(request, match_id, 'decline')


@login_required
@require_POST
def connect_match(request, match_id):
    """Connect with an accepted match, opening messaging"""
    return _apply_transition(request, match_id, 'connect')


@login_required
@require_GET
def match_detail(request, match_id):
    """A single stored match of the logged-in traveler"""

    try:
        match = get_matching_service().get_match(str(match_id), viewer_id=request.user.pk)
    except MatchingError as e:
        return error_response(e)

    return JsonResponse({'match': match.to_dict()})
