"""
Authentication routes.

Sign-in and sign-up are proxied to the hosted auth provider. The returned
access token is sent back by the client as "Authorization: Bearer <token>"
on every later request.
"""

from typing import Any, Optional
from urllib.parse import urlparse

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy.engine import Engine

from resort_booking.config import ALLOWED_ORIGINS
from resort_booking.dependencies import get_db_engine, get_session
from resort_booking.network.auth_provider import (
    AuthProviderError,
    build_oauth_url,
    check_provider_status,
    sign_in_with_password,
    sign_up,
)
from resort_booking.schemas.auth import (
    Credentials,
    ProviderStatus,
    SessionRead,
    SignInResponse,
    SignUpResponse,
)
from resort_booking.services.session import UserSession, end_session, start_session

logger = structlog.get_logger(__name__)
router = APIRouter()


def _session_read(session: UserSession) -> SessionRead:
    return SessionRead(
        user_id=session.user_id,
        email=session.email,
        role=session.role,
        is_admin=session.is_admin,
    )


def _is_allowed_redirect(url: str) -> bool:
    """True if url points at one of the configured CORS origins."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    origin = f"{parsed.scheme}://{parsed.netloc}".lower()
    return origin in {allowed.rstrip("/").lower() for allowed in ALLOWED_ORIGINS}


@router.post("/signin", response_model=SignInResponse)
def signin(credentials: Credentials, db_engine: Engine = Depends(get_db_engine)) -> SignInResponse:
    """
    Sign in with email and password.

    Raises:
        HTTPException: The provider's status (400/401 for bad credentials,
            503 when it is unreachable)
    """
    try:
        data = sign_in_with_password(credentials.email, credentials.password)
        session = start_session(db_engine, data["access_token"], data.get("user") or {})
    except AuthProviderError as e:
        logger.info("signin_failed", status_code=e.status_code, error=e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("signin_error", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Sign in failed")

    return SignInResponse(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in"),
        session=_session_read(session),
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=SignUpResponse)
def signup(credentials: Credentials, db_engine: Engine = Depends(get_db_engine)) -> SignUpResponse:
    """
    Register with email and password.

    When the provider requires email confirmation no session is returned
    and the user must sign in after confirming.
    """
    try:
        data = sign_up(credentials.email, credentials.password)
        access_token: Optional[str] = data.get("access_token")
        user: dict[str, Any] = data.get("user") or data
        session = start_session(db_engine, access_token, user) if access_token else None
    except AuthProviderError as e:
        logger.info("signup_failed", status_code=e.status_code, error=e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception("signup_error", error=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Sign up failed")

    logger.info("user_signed_up", user_id=user.get("id"), confirmed=session is not None)
    return SignUpResponse(
        message="Account created" if session else "Check your email to confirm your account",
        user_id=str(user["id"]) if user.get("id") else None,
        email=credentials.email,
        access_token=access_token,
        session=_session_read(session) if session else None,
    )


@router.post("/signout")
def signout(session: UserSession = Depends(get_session)) -> dict[str, str]:
    """
    Sign out the current session.

    The token stops working on this API even if revoking it at the provider
    fails.
    """
    try:
        end_session(session)
    except AuthProviderError as e:
        logger.warning("signout_revoke_failed", user_id=session.user_id, error=e.message)
    return {"message": "Signed out"}


@router.get("/session", response_model=SessionRead)
def current_session(session: UserSession = Depends(get_session)) -> SessionRead:
    return _session_read(session)


@router.get("/oauth/{provider}")
def oauth_redirect(
    provider: str,
    redirect_to: Optional[str] = Query(None, description="Where the provider sends the user back"),
) -> RedirectResponse:
    """
    Start an OAuth sign-in by redirecting to the provider's authorize URL.

    The provider returns the access token to redirect_to; the client then
    uses it as a bearer token like any other. redirect_to must be on one of
    ALLOWED_ORIGINS; without it OAUTH_REDIRECT_URL is used.

    Raises:
        HTTPException: 400 for an unknown provider or a foreign redirect_to
    """
    if redirect_to is not None and not _is_allowed_redirect(redirect_to):
        logger.warning("oauth_redirect_rejected", provider=provider)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="redirect_to must be on an allowed origin",
        )
    try:
        url = build_oauth_url(provider, redirect_to)
    except AuthProviderError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return RedirectResponse(url, status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/status", response_model=ProviderStatus)
def provider_status() -> dict[str, Any]:
    """Configuration and reachability of the auth provider."""
    return check_provider_status()
