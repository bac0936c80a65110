"""Admin dashboard loader."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable

import structlog
from sqlalchemy.engine import Connection, Engine

from resort_booking.db.readers.customers import get_customers
from resort_booking.db.readers.reservations import get_dashboard_stats, get_reservations
from resort_booking.db.readers.services import get_services

logger = structlog.get_logger(__name__)

MAX_CONCURRENT_QUERIES = 4

DASHBOARD_SECTIONS: dict[str, Callable[[Connection], Any]] = {
    "services": get_services,
    "reservations": get_reservations,
    "customers": get_customers,
    "stats": get_dashboard_stats,
}


def _load_section(engine: Engine, reader: Callable[[Connection], Any]) -> Any:
    with engine.connect() as conn:
        return reader(conn)


def load_dashboard(engine: Engine, max_workers: int = MAX_CONCURRENT_QUERIES) -> dict[str, Any]:
    """
    Fetch services, reservations, customers and stats in parallel.

    The four reads are independent, so each runs on its own connection and
    results are collected in completion order. Any failing read fails the
    whole load.

    Args:
        engine: SQLAlchemy engine
        max_workers: Thread pool size

    Returns:
        dict: Keys services, reservations, customers, stats
    """
    results: dict[str, Any] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            pool.submit(_load_section, engine, reader): name
            for name, reader in DASHBOARD_SECTIONS.items()
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    logger.info(
        "dashboard_loaded",
        services=len(results["services"]),
        reservations=len(results["reservations"]),
        customers=len(results["customers"]),
    )
    return results
