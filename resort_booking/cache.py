"""
In-memory session cache with TTL.

Resolving a session costs a round trip to the auth provider plus an admin
lookup. The cache keeps resolved sessions keyed by access token for a short
TTL, and sign-out removes the entry immediately.

For deployments with multiple instances, a shared store would be needed for
sign-out to take effect everywhere before the TTL expires.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from resort_booking.config import SESSION_CACHE_MAX_ENTRIES, SESSION_CACHE_TTL_SECONDS

if TYPE_CHECKING:
    from resort_booking.services.session import UserSession


class SessionCache:
    """
    Session cache with time-to-live (TTL) expiration.

    Attributes:
        ttl: Time-to-live for cached sessions
        _cache: Internal storage mapping access token to (session, expires_at) tuples

    Example:
        >>> cache = SessionCache(ttl_seconds=300)
        >>> cache.set("token-abc", session)
        >>> cache.get("token-abc")
        >>> cache.invalidate("token-abc")
    """

    def __init__(self, ttl_seconds: int = 300, max_entries: int = 10000):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_entries = max_entries
        self._cache: dict[str, tuple[UserSession, datetime]] = {}

    def get(self, access_token: str) -> UserSession | None:
        """
        Get cached session if not expired.

        Args:
            access_token: Bearer token presented by the client

        Returns:
            Cached session if found and not expired, None otherwise
        """
        if access_token in self._cache:
            session, expires_at = self._cache[access_token]
            if datetime.now(timezone.utc) < expires_at:
                return session
            del self._cache[access_token]
        return None

    def set(self, access_token: str, session: UserSession) -> None:
        """
        Cache a session, first pruning expired entries.

        Tokens rotate on every refresh, so entries are never looked up again
        once replaced. When the cache is still full after pruning, the oldest
        entries are evicted.
        """
        now = datetime.now(timezone.utc)
        self.prune(now)
        self._cache.pop(access_token, None)
        while self._cache and len(self._cache) >= self.max_entries:
            del self._cache[next(iter(self._cache))]
        self._cache[access_token] = (session, now + self.ttl)

    def prune(self, now: datetime | None = None) -> int:
        """Drop expired entries and return how many were removed."""
        now = now or datetime.now(timezone.utc)
        expired = [t for t, (_, expires_at) in self._cache.items() if expires_at <= now]
        for token in expired:
            del self._cache[token]
        return len(expired)

    def invalidate(self, access_token: str) -> None:
        """
        Remove a session from the cache.

        Called on sign-out so the token stops working immediately.
        """
        self._cache.pop(access_token, None)

    def invalidate_email(self, email: str) -> None:
        """
        Remove every cached session for an email.

        Called when an admin row is created, changed or deleted so the role
        is re-resolved on the next request.
        """
        email = email.lower()
        for token in [t for t, (s, _) in self._cache.items() if s.email.lower() == email]:
            del self._cache[token]

    def clear(self) -> None:
        self._cache.clear()

    def size(self) -> int:
        return len(self._cache)


# Global cache instance
session_cache = SessionCache(
    ttl_seconds=SESSION_CACHE_TTL_SECONDS, max_entries=SESSION_CACHE_MAX_ENTRIES
)
