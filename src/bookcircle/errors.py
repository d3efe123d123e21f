"""Exception hierarchy shared by managers and views.

Managers raise these; views catch ``BookCircleError`` at the operation
boundary and turn it into a notification.
"""


class BookCircleError(Exception):
    """Base exception for bookcircle errors."""

    pass


class NotFoundError(BookCircleError):
    """Requested book, review or profile does not exist."""

    pass


class ValidationError(BookCircleError):
    """Input failed validation before any write was attempted."""

    pass


class AuthorizationError(BookCircleError):
    """Caller is anonymous or does not own the record."""

    pass


class DuplicateReviewError(AuthorizationError):
    """User already has a review on this book."""

    pass


class ServiceError(BookCircleError):
    """Persistence call failed."""

    pass


class MalformedRecordError(ServiceError):
    """A stored row could not be converted into a typed record."""

    pass
