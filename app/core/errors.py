"""Error taxonomy shared by the services and both API transports."""


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when required input is missing or malformed."""


class NotFoundError(AppError):
    """Raised when a lookup that must succeed matches no row."""


class InvalidCredentialsError(AppError):
    """Raised when a password does not match the stored hash."""


class StoreError(AppError):
    """Raised when the relational store rejects or fails a statement."""


class StreamError(AppError):
    """Raised when an uploaded stream cannot be written to storage."""


class AuthenticationError(AppError):
    """Raised when an operation requires a verified identity and none is present."""
