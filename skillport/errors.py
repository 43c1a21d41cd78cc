"""Exception classes for the SkillPort matching core.

Only the strict request store and the storage backends raise these; the
default store turns them into logged no-ops or in-memory fallbacks.
"""


class SkillPortError(Exception):
    """Base exception for all SkillPort errors."""

    pass


class RequestNotFound(SkillPortError):
    """Raised when a lifecycle operation names an unknown request."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Request '{request_id}' not found")


class InvalidTransition(SkillPortError):
    """Raised when a transition is not allowed from the request's status."""

    def __init__(self, request_id: str, action: str, status: str):
        self.request_id = request_id
        self.action = action
        self.status = status
        super().__init__(
            f"Cannot {action} request '{request_id}' while it is {status}"
        )


class PersistenceUnavailable(SkillPortError):
    """Raised when the request snapshot cannot be read or written."""

    pass
