"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    AccessDeniedError,
    RateLimitedError,
    SessionExpiredError,
)
from auth.types import Session, LoginRequest
from auth.config import AuthConfig
from auth.rate_limiter import RateLimiter
from auth.session import SessionManager
from auth.service import AuthService, hash_password, verify_password
from auth.security_middleware import AuthMiddleware
from auth.api import create_auth_router
