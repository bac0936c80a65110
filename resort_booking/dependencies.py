"""
FastAPI dependency injection providers.

Routes receive the database engine and the caller's session through these
providers. Tests override them with app.dependency_overrides to inject an
in-memory engine or a fixed session.
"""

from __future__ import annotations

from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.engine import Engine

from resort_booking.db.engine import engine
from resort_booking.network.auth_provider import AuthProviderError
from resort_booking.services.session import UserSession, resolve_session


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> app.dependency_overrides[get_db_engine] = lambda: test_engine
    """
    yield engine


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract the token from an "Authorization: Bearer <token>" header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_optional_session(
    token: Optional[str] = Depends(get_bearer_token),
    db_engine: Engine = Depends(get_db_engine),
) -> Optional[UserSession]:
    """
    Resolve the caller's session, or None for anonymous requests.

    Raises:
        HTTPException: 401 for a token the provider rejects, 503 if the provider is down
    """
    if token is None:
        return None
    try:
        return resolve_session(db_engine, token)
    except AuthProviderError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


def get_session(session: Optional[UserSession] = Depends(get_optional_session)) -> UserSession:
    """
    Require a signed-in caller.

    Raises:
        HTTPException: 401 if no valid session is present
    """
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in to continue",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def require_admin(session: UserSession = Depends(get_session)) -> UserSession:
    """
    Require the admin role, resolved server-side when the session was acquired.

    Raises:
        HTTPException: 403 if the caller is signed in but not an admin
    """
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return session
