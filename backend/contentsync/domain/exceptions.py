from typing import Optional


class ContentError(Exception):
    """Base class for content store and session errors."""


class StoreError(ContentError):
    """
    The version store could not complete an operation.

    Raised by adapters for transport failures, unexpected responses
    and rejected writes. `status` carries the HTTP status when the
    failure came from the REST surface.
    """

    def __init__(self, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ConflictError(StoreError):
    """A conditional write was rejected because the record changed."""

    def __init__(self, message: str = "Conflict detected. Resource has been modified."):
        super().__init__(message, status=409)


class PageNotFound(ContentError):
    pass


class SessionModeError(ContentError):
    """Operation is not available in the session's mode."""


class InvariantViolation(ContentError):
    pass
