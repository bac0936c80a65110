"""
Unit tests for the in-memory session cache.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from resort_booking.cache import SessionCache
from resort_booking.services.session import ROLE_ADMIN, UserSession


def _session(token: str, email: str = "guest@example.com") -> UserSession:
    return UserSession(access_token=token, user_id=f"user-{token}", email=email)


@pytest.mark.unit
def test_get_returns_cached_session() -> None:
    cache = SessionCache(ttl_seconds=60)
    session = _session("abc")
    cache.set("abc", session)

    assert cache.get("abc") is session
    assert cache.size() == 1


@pytest.mark.unit
def test_get_unknown_token_returns_none() -> None:
    assert SessionCache().get("missing") is None


@pytest.mark.unit
def test_expired_session_is_dropped() -> None:
    cache = SessionCache(ttl_seconds=60)
    cache.set("abc", _session("abc"))

    later = datetime.now(timezone.utc) + timedelta(seconds=61)
    with patch("resort_booking.cache.datetime") as mock_datetime:
        mock_datetime.now.return_value = later
        assert cache.get("abc") is None

    assert cache.size() == 0


@pytest.mark.unit
def test_set_prunes_expired_sessions() -> None:
    cache = SessionCache(ttl_seconds=0)
    for i in range(1000):
        cache.set(f"token-{i}", _session(f"token-{i}"))

    cache.set("fresh", _session("fresh"))

    assert cache.size() == 1


@pytest.mark.unit
def test_prune_keeps_live_sessions() -> None:
    cache = SessionCache(ttl_seconds=60)
    cache.set("abc", _session("abc"))

    assert cache.prune() == 0
    assert cache.get("abc") is not None


@pytest.mark.unit
def test_set_evicts_oldest_when_full() -> None:
    cache = SessionCache(ttl_seconds=60, max_entries=2)
    cache.set("first", _session("first"))
    cache.set("second", _session("second"))
    cache.set("third", _session("third"))

    assert cache.size() == 2
    assert cache.get("first") is None
    assert cache.get("second") is not None
    assert cache.get("third") is not None


@pytest.mark.unit
def test_invalidate_removes_session() -> None:
    cache = SessionCache()
    cache.set("abc", _session("abc"))

    cache.invalidate("abc")
    cache.invalidate("never-cached")

    assert cache.get("abc") is None


@pytest.mark.unit
def test_invalidate_email_removes_all_sessions_for_that_email() -> None:
    cache = SessionCache()
    cache.set("laptop", _session("laptop", email="admin@resort.test"))
    cache.set("phone", _session("phone", email="admin@resort.test"))
    cache.set("other", _session("other", email="guest@example.com"))

    cache.invalidate_email("admin@resort.test")

    assert cache.get("laptop") is None
    assert cache.get("phone") is None
    assert cache.get("other") is not None


@pytest.mark.unit
def test_clear() -> None:
    cache = SessionCache()
    cache.set("a", _session("a"))
    cache.set("b", _session("b"))

    cache.clear()

    assert cache.size() == 0


@pytest.mark.unit
def test_user_session_hides_token_in_repr() -> None:
    session = UserSession(access_token="secret-token", user_id="u1", email="a@b.co", role=ROLE_ADMIN)

    assert "secret-token" not in repr(session)
    assert session.is_admin
