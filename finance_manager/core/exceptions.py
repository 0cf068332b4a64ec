"""
Error kinds raised by the finance services.

A boundary layer maps these to its own status codes by ``kind``; the message
is short and safe to show to the caller.
"""


class FinanceError(Exception):
    kind = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FinanceError):
    """Referenced entity does not exist (in the caller's scope, for name lookups)."""
    kind = "not_found"


class ForbiddenError(FinanceError):
    """Entity belongs to another user, or the change targets a protected entity."""
    kind = "forbidden"


class ConflictError(FinanceError):
    """Creation collides with a uniqueness rule."""
    kind = "conflict"


class BadRequestError(FinanceError):
    """Business-rule violation that is neither ownership nor uniqueness."""
    kind = "bad_request"


class InternalError(FinanceError):
    kind = "internal"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
