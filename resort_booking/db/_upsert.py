"""
Dialect-aware INSERT helpers.

PostgreSQL and SQLite both support INSERT ... ON CONFLICT DO UPDATE with
RETURNING, but SQLAlchemy exposes them through separate insert() constructs.
Writers call dialect_insert() so the same upsert runs on either backend.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection


def dialect_insert(conn: Connection, table: type) -> Any:
    """
    Return an insert() construct that supports on_conflict_do_update.

    Args:
        conn: Active database connection
        table: SQLAlchemy ORM table class

    Raises:
        NotImplementedError: For dialects without ON CONFLICT support
    """
    dialect = conn.dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table)
    if dialect == "sqlite":
        return sqlite.insert(table)
    raise NotImplementedError(f"Upsert is not supported on dialect {dialect!r}")


def upsert_returning_id(
    conn: Connection,
    table: type,
    row: dict[str, Any],
    conflict_column: str,
    update_columns: list[str] | None = None,
) -> int:
    """
    Insert a row or touch the existing one, returning its primary key.

    On conflict the row is "updated" with update_columns taken from the
    excluded row. When update_columns is empty, the conflict column is
    re-assigned to itself so RETURNING yields the existing id without
    changing any stored value (DO NOTHING would return no row).

    Args:
        conn: Active database connection (within transaction)
        table: SQLAlchemy ORM table class (e.g., Customer)
        row: Column values for the new row
        conflict_column: Unique column for ON CONFLICT (e.g., "email")
        update_columns: Columns to overwrite on conflict (default: none)

    Returns:
        int: id of the inserted or existing row

    Example:
        >>> with engine.begin() as conn:
        ...     customer_id = upsert_returning_id(
        ...         conn, Customer, {"name": "Ana", "email": "ana@x.io"}, "email"
        ...     )
    """
    stmt = dialect_insert(conn, table).values(row)

    columns = update_columns or [conflict_column]
    set_dict = {col: getattr(stmt.excluded, col) for col in columns}

    stmt = stmt.on_conflict_do_update(
        index_elements=[conflict_column],
        set_=set_dict,
    ).returning(table.id)

    return int(conn.execute(stmt).scalar_one())
