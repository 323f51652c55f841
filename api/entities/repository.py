"""
Entity persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db


async def list_entities(*, user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT e.id, e.user_id, e.entity_name, e.entity_desc, e.entity_short_desc,
               e.category, u.username
        FROM entities e
        JOIN users u ON u.id = e.user_id
        WHERE e.user_id = $1
        ORDER BY e.id
        """,
        user_id,
    )


async def get_entity(
    entity_id: int,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, entity_name, entity_desc, entity_short_desc, category
        FROM entities
        WHERE id = $1
          AND user_id = $2
        LIMIT 1
        """,
        entity_id,
        user_id,
        conn=conn,
    )


async def insert_entity(
    *,
    user_id: int,
    entity_name: str,
    entity_desc: str,
    entity_short_desc: str,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO entities (user_id, entity_name, entity_desc, entity_short_desc, category)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id, user_id, entity_name, entity_desc, entity_short_desc, category
        """,
        user_id,
        entity_name,
        entity_desc,
        entity_short_desc,
        category,
        conn=conn,
    )
    if row is None:
        raise RuntimeError("Failed to create entity.")
    return row


async def update_entity(
    entity_id: int,
    *,
    user_id: int,
    entity_name: str,
    entity_desc: str,
    entity_short_desc: str,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> None:
    await db.execute(
        """
        UPDATE entities
        SET entity_name = $3,
            entity_desc = $4,
            entity_short_desc = $5,
            category = $6
        WHERE id = $1
          AND user_id = $2
        """,
        entity_id,
        user_id,
        entity_name,
        entity_desc,
        entity_short_desc,
        category,
        conn=conn,
    )


async def delete_entity(entity_id: int, *, user_id: int, conn: asyncpg.Connection) -> None:
    """
    Delete an entity and everything hanging off it, leaves first.

    Must run inside `db.transaction()`; the caller has already checked
    ownership of the entity itself.
    """
    await db.execute(
        """
        DELETE FROM subscriptions
        WHERE entity_id = $1
           OR service_id IN (SELECT id FROM services WHERE entity_id = $1)
           OR payee_id IN (
                SELECT p.id
                FROM payees p
                WHERE p.entity_id = $1
                   OR p.service_id IN (SELECT id FROM services WHERE entity_id = $1)
           )
        """,
        entity_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM payees
        WHERE entity_id = $1
           OR service_id IN (SELECT id FROM services WHERE entity_id = $1)
        """,
        entity_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM services
        WHERE entity_id = $1
        """,
        entity_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM entities
        WHERE id = $1
          AND user_id = $2
        """,
        entity_id,
        user_id,
        conn=conn,
    )
