"""Custom exceptions for Cascade."""


class CascadeError(Exception):
    """Base exception for all Cascade errors."""

    pass


class ValidationError(CascadeError):
    """Raised when validation fails."""

    pass


class ParseError(CascadeError):
    """Raised when a project file cannot be read or parsed."""

    pass


class NotFoundError(CascadeError):
    """Raised when a project or task does not exist."""

    pass


class PreconditionFailedError(CascadeError):
    """Raised when an action is not allowed for the project's current state."""

    pass
