"""Authentication service - operator password login and sessions."""

import logging

import bcrypt

from auth.config import AuthConfig
from auth.session import SessionManager
from auth.rate_limiter import RateLimiter
from auth.types import Session
from auth.exceptions import AccessDeniedError, InvalidCredentialsError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plaintext password with bcrypt for storage in Vault."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        logger.error("Operator password check failed: %s", e)
        return False


class AuthService:
    """Single-operator authentication.

    Handles:
    - Login (lockout check, operator check, password check, session creation)
    - Session validation
    - Logout
    """

    def __init__(
        self,
        config: AuthConfig,
        operator_email: str,
        password_hash: str,
        session_manager: SessionManager,
        rate_limiter: RateLimiter,
    ):
        if not operator_email:
            raise ValueError("operator_email is required")
        if not password_hash:
            raise ValueError("password_hash is required")

        self._config = config
        self._operator_email = operator_email.lower().strip()
        self._password_hash = password_hash
        self._session_manager = session_manager
        self._rate_limiter = rate_limiter

    def login(self, email: str, password: str, ip_address: str | None = None) -> Session:
        """Log the operator in.

        Flow:
        1. Refuse clients that are locked out
        2. Reject any email other than the operator's
        3. Verify password
        4. Clear the client's failures and create session

        Failures in steps 2 and 3 count toward the client's lockout.

        Raises:
            RateLimitedError: If the client is locked out.
            AccessDeniedError: If email is not the operator's.
            InvalidCredentialsError: If password is wrong.
        """
        self._rate_limiter.ensure_not_locked(ip_address)

        email = email.lower().strip()

        if email != self._operator_email:
            self._rate_limiter.record_failure(ip_address)
            logger.warning("Login refused for non-operator account from %s", ip_address)
            raise AccessDeniedError("This account is not authorized to use the application")

        if not verify_password(password, self._password_hash):
            self._rate_limiter.record_failure(ip_address)
            logger.warning("Invalid operator password from %s", ip_address)
            raise InvalidCredentialsError("Invalid email or password")

        self._rate_limiter.reset(ip_address)
        session = self._session_manager.create_session(email)
        logger.info("Operator logged in from %s", ip_address)
        return session

    def logout(self, session_token: str) -> None:
        """Revoke session (logout). Safe to call with invalid token."""
        self._session_manager.revoke_session(session_token)
        logger.info("Operator session revoked")

    def validate_session(self, token: str) -> Session:
        """Validate session token.

        Raises:
            SessionExpiredError: If session invalid or expired.
        """
        return self._session_manager.validate_session(token)
