"""Login lockout per client IP.

Failed attempts are counted in Valkey under a fixed window that starts with
the first failure. Attempts made while locked out are refused without being
counted, so they cannot push the lockout further out.
"""

import logging

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.exceptions import RateLimitedError

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


class RateLimiter:
    """Failed-login counter keyed on the client address."""

    KEY_PREFIX = "ratelimit:login:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._max_failures = config.rate_limit_attempts
        self._window_seconds = config.rate_limit_window_minutes * 60

    def _key(self, client_ip: str | None) -> str:
        return f"{self.KEY_PREFIX}{client_ip or UNKNOWN_CLIENT}"

    def _failures(self, key: str) -> int:
        current = self._valkey.get(key)
        return int(current) if current is not None else 0

    def ensure_not_locked(self, client_ip: str | None) -> None:
        """
        Refuse the attempt if this client is locked out.

        Raises:
            RateLimitedError: With the seconds left on the lockout.
        """
        key = self._key(client_ip)
        if self._failures(key) < self._max_failures:
            return

        retry_after = max(self._valkey.ttl(key), 1)
        logger.warning("Login attempt from locked-out client %s (%ds remaining)", client_ip, retry_after)
        raise RateLimitedError(retry_after_seconds=retry_after)

    def record_failure(self, client_ip: str | None) -> int:
        """Count a failed attempt. Returns the failure count in this window."""
        key = self._key(client_ip)
        count = self._valkey.incr(key)

        # Window is fixed at the first failure; a key without a TTL would never clear
        if count == 1 or self._valkey.ttl(key) < 0:
            self._valkey.expire(key, self._window_seconds)

        if count >= self._max_failures:
            logger.warning(
                "Client %s locked out for %ds after %d failed logins",
                client_ip, self._window_seconds, count,
            )
        return count

    def reset(self, client_ip: str | None) -> None:
        """Clear failures after a successful login."""
        self._valkey.delete(self._key(client_ip))

    def get_remaining_attempts(self, client_ip: str | None) -> int:
        return max(self._max_failures - self._failures(self._key(client_ip)), 0)
