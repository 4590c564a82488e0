"""Dialect-aware statement helpers shared by repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Table
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

__all__ = ["insert_ignoring_conflicts"]


async def insert_ignoring_conflicts(
    session: AsyncSession,
    table: Table,
    values: dict[str, Any],
) -> bool:
    """Insert a row unless it collides with a unique constraint.

    Uses ``INSERT ... ON CONFLICT DO NOTHING`` so two concurrent inserts of
    the same row both succeed without aborting the surrounding transaction.

    Args:
        session: Session whose transaction the insert joins
        table: Target table
        values: Column values for the new row

    Returns:
        True if a row was inserted, False if it already existed

    Raises:
        NotImplementedError: For dialects without ON CONFLICT support
    """
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(**values).on_conflict_do_nothing()
    else:
        raise NotImplementedError(
            f"Unsupported dialect for idempotent insert: {dialect}"
        )

    result = await session.execute(stmt)
    return bool(result.rowcount)
