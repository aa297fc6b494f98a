class MatchingError(Exception):
    """Base class for every failure the matching core reports"""


class InvalidProfile(MatchingError):
    """A profile field holds a value outside its fixed enumeration"""

    def __init__(self, field: str, value, profile_id=None):
        self.field = field
        self.value = value
        self.profile_id = profile_id
        super().__init__(f"Invalid {field} {value!r} on profile {profile_id!r}")


class NotFound(MatchingError):
    """Referenced match or profile does not exist"""

    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier!r} not found")


class InvalidTransition(MatchingError):
    """Requested status change is not legal from the current status"""

    def __init__(self, match_id, current_status, requested_status):
        self.match_id = match_id
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Match {match_id} cannot move from {current_status} to {requested_status}"
        )


class StorageError(MatchingError):
    """The backing repository failed"""


class DuplicateMatch(StorageError):
    """A live match already exists for the viewer and candidate pair"""

    def __init__(self, viewer_id, candidate_id):
        self.viewer_id = viewer_id
        self.candidate_id = candidate_id
        super().__init__(f"A live match already exists for {viewer_id} -> {candidate_id}")


class InvalidStatus(MatchingError, ValueError):
    """A match status outside the lifecycle's states"""

    def __init__(self, value, match_id=None):
        self.value = value
        self.match_id = match_id
        super().__init__(f"Invalid match status {value!r} on match {match_id!r}")
