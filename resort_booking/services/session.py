"""
Per-request user sessions.

A session is acquired once per request from the bearer token, carried
explicitly through route dependencies, and invalidated on sign-out. The
admin role is resolved here, on the server, from the provider's
app_metadata role claim or an admin table row for the user's email.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog
from sqlalchemy.engine import Engine

from resort_booking.cache import SessionCache, session_cache
from resort_booking.db.readers.admins import admin_exists_for_email
from resort_booking.metrics import session_cache_hits, session_cache_misses
from resort_booking.network.auth_provider import AuthProviderError, get_user, sign_out
from resort_booking.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"


@dataclass(frozen=True)
class UserSession:
    access_token: str = field(repr=False)
    user_id: str
    email: str
    role: str = ROLE_CUSTOMER
    acquired_at: datetime = field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def resolve_role(engine: Engine, user: dict[str, Any]) -> str:
    """
    Decide the role for a provider user.

    Args:
        engine: SQLAlchemy engine for the admin table lookup
        user: User object returned by the auth provider

    Returns:
        str: "admin" or "customer"
    """
    app_metadata = user.get("app_metadata") or {}
    if app_metadata.get("role") == ROLE_ADMIN:
        return ROLE_ADMIN

    email = user.get("email")
    if not email:
        return ROLE_CUSTOMER

    with engine.connect() as conn:
        return ROLE_ADMIN if admin_exists_for_email(conn, email) else ROLE_CUSTOMER


def start_session(
    engine: Engine,
    access_token: str,
    user: dict[str, Any],
    cache: SessionCache = session_cache,
) -> UserSession:
    """
    Build and cache a session for a token whose user is already known,
    as after sign-in or sign-up.

    Raises:
        AuthProviderError: 401 if the user has no email
    """
    email = user.get("email")
    if not email:
        raise AuthProviderError("Signed-in user has no email", status_code=401)

    session = UserSession(
        access_token=access_token,
        user_id=str(user["id"]),
        email=email.lower(),
        role=resolve_role(engine, user),
    )
    cache.set(access_token, session)

    logger.info("session_acquired", user_id=session.user_id, role=session.role)
    return session


def resolve_session(
    engine: Engine, access_token: str, cache: SessionCache = session_cache
) -> UserSession:
    """
    Turn a bearer token into a session.

    Checks the cache first, otherwise validates the token with the auth
    provider and resolves the role.

    Raises:
        AuthProviderError: 401 if the token is invalid, 503 if the provider is down
    """
    cached = cache.get(access_token)
    if cached is not None:
        session_cache_hits.inc()
        return cached

    session_cache_misses.inc()
    return start_session(engine, access_token, get_user(access_token), cache=cache)


def end_session(session: UserSession, cache: SessionCache = session_cache) -> None:
    """
    Sign out: drop the cached session and revoke the token at the provider.

    The cache entry is removed even if the provider call fails, so the token
    is refused by this instance from now on.
    """
    cache.invalidate(session.access_token)
    try:
        sign_out(session.access_token)
    finally:
        logger.info("session_ended", user_id=session.user_id)
