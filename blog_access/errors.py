"""
Error types raised by blog_access.

Every failure leaving a store or the access service is one of:

- NotFound: no matching record
- Forbidden: a visibility or ownership check failed
- Conflict: a uniqueness or identifier collision
- TransientFailure: the database call failed for an infrastructure reason

NotFound and Forbidden also derive from Django's ObjectDoesNotExist and
PermissionDenied, so a view that lets them propagate gets Django's usual
404/403 handling.
"""
from django.core.exceptions import ObjectDoesNotExist, PermissionDenied


class BlogAccessError(Exception):
    """Base exception for blog_access errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    default_code = "BLOG_ACCESS_ERROR"

    def __init__(self, message, code=None, details=None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r})"


class NotFound(BlogAccessError, ObjectDoesNotExist):
    """No record matches the lookup."""

    default_code = "NOT_FOUND"


class Forbidden(BlogAccessError, PermissionDenied):
    """The caller may not see or modify the record."""

    default_code = "FORBIDDEN"


class Conflict(BlogAccessError):
    """A write collided with an existing record."""

    default_code = "CONFLICT"


class TransientFailure(BlogAccessError):
    """
    The database call failed for a reason unrelated to the request.

    The original database error is kept as __cause__.
    """

    default_code = "TRANSIENT_FAILURE"
