"""
SQLAlchemy engine singleton with production-ready connection pooling.

PostgreSQL is the production target. SQLite URLs are accepted for local
runs; the pool sizing arguments are skipped for them because SQLite's
default pools do not take them.
"""

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from resort_booking.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

pool_options: dict[str, Any] = (
    {}
    if DATABASE_URL.startswith("sqlite")
    else {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,
    }
)

engine: Engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using (detect stale connections)
    echo=False,
    **pool_options,
)


def check_engine_health(db_engine: Engine | None = None) -> bool:
    """
    Check if the database is reachable.

    Used by the /ready endpoint before the service accepts traffic.

    Args:
        db_engine: Engine to probe (defaults to the module engine)

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with (db_engine or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
