"""Who is asking.

Views and commands hand the matching service a session provider instead of
reading the logged-in user from ambient state.
"""

from typing import Optional

from .exceptions import NotFound
from .records import UserProfile


class SessionProvider:
    def current_user(self) -> Optional[UserProfile]:
        raise NotImplementedError

    def refresh(self):
        raise NotImplementedError


class RequestSessionProvider(SessionProvider):
    """Resolves the authenticated user of a Django request to a profile record"""

    def __init__(self, request, profile_store):
        self.request = request
        self.profile_store = profile_store
        self._profile = None
        self._loaded = False

    def current_user(self) -> Optional[UserProfile]:
        if not self._loaded:
            self._profile = self._load()
            self._loaded = True
        return self._profile

    def refresh(self):
        self._profile = None
        self._loaded = False

    def _load(self) -> Optional[UserProfile]:
        user = getattr(self.request, 'user', None)
        if user is None or not user.is_authenticated:
            return None
        try:
            return self.profile_store.get(user.pk)
        except NotFound:
            return None

