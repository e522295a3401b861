class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when a row (or a remote file it points to) does not exist."""


class UploadError(DomainError):
    """Raised when the legacy host rejects or fails an upload."""
