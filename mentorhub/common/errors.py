class UnauthorizedError(Exception):
    """Raised when a request carries no usable authenticated identity."""


class ForbiddenError(Exception):
    """Raised when the caller is authenticated but lacks the role or ownership."""


class NotFoundError(Exception):
    """Raised when a referenced entity does not exist."""


class ValidationError(ValueError):
    """Raised when a required field is missing or malformed."""


class ConflictError(Exception):
    """Raised when the requested change conflicts with the current record state."""


class ExternalServiceError(RuntimeError):
    """Raised when a third-party provider (email, auth keys) fails."""
