"""
Shared fixtures.

The application reads its configuration at import time, so the environment
is prepared here before anything from resort_booking is imported. Database
tests run against a throwaway SQLite file per test.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")

from typing import Any, Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from resort_booking.cache import session_cache  # noqa: E402
from resort_booking.db.writers.admins import create_admin  # noqa: E402
from resort_booking.db.writers.services import create_service  # noqa: E402
from resort_booking.dependencies import get_db_engine, get_optional_session  # noqa: E402
from resort_booking.main import app  # noqa: E402
from resort_booking.models.admins import Admin  # noqa: E402, F401
from resort_booking.models.base import Base  # noqa: E402
from resort_booking.models.customers import Customer  # noqa: E402, F401
from resort_booking.models.payments import Payment  # noqa: E402, F401
from resort_booking.models.reservations import Reservation  # noqa: E402, F401
from resort_booking.models.services import Service  # noqa: E402, F401
from resort_booking.services.session import ROLE_ADMIN, ROLE_CUSTOMER, UserSession  # noqa: E402


@pytest.fixture
def db_engine(tmp_path: Any) -> Generator[Engine, None, None]:
    """
    SQLite engine with foreign keys enforced and working SAVEPOINTs.

    pysqlite's own transaction handling is disabled so SQLAlchemy emits
    BEGIN itself, which is what makes begin_nested() behave as on PostgreSQL.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def make_service(db_engine: Engine) -> Callable[..., dict[str, Any]]:
    """Factory inserting a service; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> dict[str, Any]:
        data = {
            "name": "Sea Pearl Beach Resort",
            "service_type": "Resort",
            "location": "Cox's Bazar",
            "price": 250.0,
            "status": "available",
            "amenities": ["Pool", "Spa"],
            **overrides,
        }
        with db_engine.begin() as conn:
            return create_service(conn, data)

    return _make


@pytest.fixture
def make_admin(db_engine: Engine) -> Callable[..., dict[str, Any]]:
    def _make(email: str = "admin@resort.test", name: str = "Ayesha Rahman") -> dict[str, Any]:
        with db_engine.begin() as conn:
            return create_admin(conn, {"name": name, "email": email})

    return _make


@pytest.fixture
def admin_session() -> UserSession:
    return UserSession(
        access_token="admin-token",
        user_id="user-admin",
        email="admin@resort.test",
        role=ROLE_ADMIN,
    )


@pytest.fixture
def customer_session() -> UserSession:
    return UserSession(
        access_token="customer-token",
        user_id="user-customer",
        email="guest@example.com",
        role=ROLE_CUSTOMER,
    )


@pytest.fixture
def client(db_engine: Engine) -> Generator[TestClient, None, None]:
    """FastAPI test client wired to the per-test SQLite engine, anonymous by default."""
    session_cache.clear()
    app.dependency_overrides[get_db_engine] = lambda: db_engine

    yield TestClient(app)

    app.dependency_overrides.clear()
    session_cache.clear()


@pytest.fixture
def sign_in_as() -> Callable[[UserSession | None], None]:
    """Make every request from the test client carry the given session."""

    def _sign_in(session: UserSession | None) -> None:
        app.dependency_overrides[get_optional_session] = lambda: session

    return _sign_in
