"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class InvalidCredentialsError(AuthError):
    """Password did not match the operator's stored hash."""


class AccessDeniedError(AuthError):
    """
    Email is not the designated operator.

    Authenticated identity alone is not enough: only the one operator
    account may use the application.
    """


class RateLimitedError(AuthError):
    """Too many attempts. Client should wait before retrying."""

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Rate limited. Retry after {retry_after_seconds} seconds.")


class SessionExpiredError(AuthError):
    """Session is missing or has expired and the operator must log in again."""
