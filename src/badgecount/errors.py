from abc import ABC


class UserError(ABC, Exception):
    """Base class for client-side errors.

    All errors that inherit from UserError will have their messages
    displayed to the caller. These errors should not contain any
    sensitive information.
    """


class BadRequestError(UserError):
    """Raised when request input is malformed."""


class InvalidLabelError(BadRequestError):
    """Raised when a badge label contains disallowed characters or is too long."""


class NotFoundError(UserError):
    """Raised when a requested badge is not registered."""

    def __init__(self, message: str = "Badge not found") -> None:
        super().__init__(message)


class ServiceError(ABC, Exception):
    """Base class for server-side failures.

    Messages of these errors are logged but never sent to the caller.
    """


class StoreUnavailableError(ServiceError):
    """Raised when the badge store cannot be reached or the connection pool is exhausted.

    Transient: the same request may succeed when retried later.
    """


class StoreCorruptError(ServiceError):
    """Raised when a stored badge document is structurally invalid. Never repaired automatically."""


class InternalError(ServiceError):
    """Raised when rendering or other in-process logic fails unexpectedly."""
