"""Session token lifecycle management.

Sessions are stored in Valkey with TTL matching session expiry.
Token format is cryptographically random (secrets.token_urlsafe).
"""

import secrets
from datetime import timedelta

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.types import Session
from auth.exceptions import SessionExpiredError
from utils.timezone import now_utc, parse_iso


class SessionManager:
    """Session token lifecycle management.

    Every validation slides the expiry forward by the full session lifetime.
    """

    KEY_PREFIX = "session:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._config = config

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def _store(self, session: Session) -> None:
        self._valkey.set_json(
            self._key(session.token),
            {
                "email": session.email,
                "created_at": session.created_at.isoformat(),
                "expires_at": session.expires_at.isoformat(),
                "last_activity_at": session.last_activity_at.isoformat(),
            },
            expire_seconds=self._config.session_expiry_hours * 3600,
        )

    def create_session(self, email: str) -> Session:
        """Create and store a new session for the operator."""
        now = now_utc()
        session = Session(
            token=secrets.token_urlsafe(32),
            email=email,
            created_at=now,
            expires_at=now + timedelta(hours=self._config.session_expiry_hours),
            last_activity_at=now,
        )
        self._store(session)
        return session

    def validate_session(self, token: str) -> Session:
        """Validate session token and return the extended session.

        Raises:
            SessionExpiredError: If token unknown or expired.
        """
        data = self._valkey.get_json(self._key(token))

        if data is None:
            raise SessionExpiredError("Session not found or expired")

        session = Session(
            token=token,
            email=data["email"],
            created_at=parse_iso(data["created_at"]),
            expires_at=parse_iso(data["expires_at"]),
            last_activity_at=parse_iso(data["last_activity_at"]),
        )

        now = now_utc()

        # Valkey TTL normally removes these first
        if now > session.expires_at:
            self._valkey.delete(self._key(token))
            raise SessionExpiredError("Session expired")

        extended = session.model_copy(update={
            "expires_at": now + timedelta(hours=self._config.session_expiry_hours),
            "last_activity_at": now,
        })
        self._store(extended)
        return extended

    def revoke_session(self, token: str) -> None:
        """Revoke session (logout). Safe to call with nonexistent token."""
        self._valkey.delete(self._key(token))
