"""
Internal helper functions for route handlers.

Validation and payload utilities shared by the admin and public routes.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException, status
from pydantic import BaseModel


def changed_fields(payload: BaseModel) -> dict[str, Any]:
    """
    Fields to write for a PATCH payload (only non-None values).

    Args:
        payload: Parsed update payload

    Returns:
        dict: Column name to new value
    """
    return {k: v for k, v in payload.model_dump().items() if v is not None}


def found_or_404(row: Optional[Any], entity: str, entity_id: int) -> Any:
    """
    Return row, or raise 404 if it is None/False.

    Args:
        row: Result of a reader or writer call
        entity: Entity name used in the error message (e.g. "Service")
        entity_id: ID that was looked up

    Raises:
        HTTPException: 404 if the entity doesn't exist
    """
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} {entity_id} not found",
        )
    return row


def internal_error(message: str = "Internal server error") -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)
