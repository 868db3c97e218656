"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    The operator's identity (email and password hash) is a secret and comes
    from Vault; only tunables live here.
    """

    # Session settings
    session_expiry_hours: int = Field(
        default=12,
        description="Session lifetime in hours",
        ge=1,
        le=720,
    )
    cookie_secure: bool = Field(
        default=True,
        description="Send the session cookie over HTTPS only",
    )

    # Rate limiting
    rate_limit_attempts: int = Field(
        default=5,
        description="Failed logins per client IP before lockout",
        ge=1,
        le=20,
    )
    rate_limit_window_minutes: int = Field(
        default=15,
        description="Lockout window, fixed from the first failure",
        ge=5,
        le=60,
    )

    # Routing
    login_path: str = Field(
        default="/auth/login",
        description="Where unauthenticated browser requests are redirected",
    )
