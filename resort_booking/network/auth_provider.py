"""
Client for the hosted auth provider (Supabase GoTrue REST API).

Sign-in, sign-up and sign-out are proxied through the API, and every bearer
token presented to the API is validated by asking the provider for its user.
"""

import time
from typing import Any, Optional
from urllib.parse import urlencode

import requests
import structlog

from resort_booking.config import (
    AUTH_TIMEOUT_SECONDS,
    OAUTH_REDIRECT_URL,
    SUPABASE_ANON_KEY,
    SUPABASE_URL,
)
from resort_booking.metrics import auth_provider_latency, auth_provider_requests

logger = structlog.get_logger(__name__)

SUPPORTED_OAUTH_PROVIDERS = ("google", "github", "facebook")


class AuthProviderError(Exception):
    """Raised when the auth provider rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _auth_url(path: str) -> str:
    if not SUPABASE_URL:
        raise AuthProviderError("Auth provider is not configured", status_code=503)
    return f"{SUPABASE_URL}/auth/v1/{path}"


def _headers(access_token: Optional[str] = None) -> dict[str, str]:
    return {
        "apikey": SUPABASE_ANON_KEY,
        "Authorization": f"Bearer {access_token or SUPABASE_ANON_KEY}",
        "Content-Type": "application/json",
    }


def _error_message(res: requests.Response) -> str:
    try:
        body = res.json()
    except ValueError:
        return res.text or f"HTTP {res.status_code}"
    return str(
        body.get("error_description") or body.get("msg") or body.get("message") or body
    )


def _request(
    method: str,
    path: str,
    endpoint: str,
    access_token: Optional[str] = None,
    json: Optional[dict[str, Any]] = None,
) -> requests.Response:
    """
    Send one request to the auth provider and record metrics.

    Args:
        method: HTTP method
        path: Path under /auth/v1/ (may include a query string)
        endpoint: Metric label for the call
        access_token: User token to send instead of the anon key
        json: JSON body

    Returns:
        requests.Response: Successful (2xx) response

    Raises:
        AuthProviderError: On a non-2xx response or a network failure
    """
    url = _auth_url(path)
    start_time = time.time()
    try:
        res = requests.request(
            method,
            url,
            headers=_headers(access_token),
            json=json,
            timeout=AUTH_TIMEOUT_SECONDS,
        )
    except requests.RequestException as err:
        auth_provider_requests.labels(endpoint=endpoint, status_code="error").inc()
        logger.warning("auth_provider_unreachable", endpoint=endpoint, error=str(err))
        raise AuthProviderError("Auth provider is unreachable", status_code=503) from err

    auth_provider_latency.labels(endpoint=endpoint).observe(time.time() - start_time)
    auth_provider_requests.labels(endpoint=endpoint, status_code=str(res.status_code)).inc()

    if res.status_code >= 400:
        message = _error_message(res)
        logger.info("auth_provider_rejected", endpoint=endpoint, status_code=res.status_code)
        status_code = res.status_code if res.status_code < 500 else 502
        raise AuthProviderError(message, status_code=status_code)

    return res


def sign_in_with_password(email: str, password: str) -> dict[str, Any]:
    """
    Exchange email and password for a session.

    Returns:
        dict: access_token, refresh_token, expires_in and the provider's user object
    """
    res = _request(
        "POST",
        "token?grant_type=password",
        endpoint="token",
        json={"email": email, "password": password},
    )
    data: dict[str, Any] = res.json()
    if not isinstance(data.get("access_token"), str):
        raise AuthProviderError("No access_token in auth provider response")
    return data


def sign_up(email: str, password: str) -> dict[str, Any]:
    """
    Register a new email/password user.

    Depending on provider settings the response holds a session or only the
    user awaiting email confirmation.
    """
    res = _request("POST", "signup", endpoint="signup", json={"email": email, "password": password})
    return dict(res.json())


def sign_out(access_token: str) -> None:
    """Revoke the session behind an access token."""
    _request("POST", "logout", endpoint="logout", access_token=access_token)


def get_user(access_token: str) -> dict[str, Any]:
    """
    Validate an access token and return the user it belongs to.

    Raises:
        AuthProviderError: 401 if the token is invalid or expired
    """
    res = _request("GET", "user", endpoint="user", access_token=access_token)
    user: dict[str, Any] = res.json()
    if not user.get("id"):
        raise AuthProviderError("Invalid session", status_code=401)
    return user


def build_oauth_url(provider: str, redirect_to: Optional[str] = None) -> str:
    """
    Authorization URL that starts an OAuth sign-in with the given provider.

    Raises:
        AuthProviderError: 400 for providers that are not enabled here
    """
    if provider not in SUPPORTED_OAUTH_PROVIDERS:
        raise AuthProviderError(f"Unsupported OAuth provider: {provider}", status_code=400)

    params = {"provider": provider}
    if redirect_to or OAUTH_REDIRECT_URL:
        params["redirect_to"] = redirect_to or OAUTH_REDIRECT_URL
    return f"{_auth_url('authorize')}?{urlencode(params)}"


def check_provider_status() -> dict[str, Any]:
    """
    Report whether the auth provider is configured and reachable.

    Never raises; failures are reported in the returned dict.
    """
    status: dict[str, Any] = {
        "url_configured": bool(SUPABASE_URL),
        "anon_key_configured": bool(SUPABASE_ANON_KEY),
    }
    try:
        _request("GET", "settings", endpoint="settings")
        status.update(ok=True, error=None)
    except AuthProviderError as e:
        status.update(ok=False, error=e.message)
    return status
