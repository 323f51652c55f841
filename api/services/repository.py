"""
Service persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import asyncpg

from core import db


async def list_services(*, user_id: int) -> list[dict[str, Any]]:
    """
    Services owned by the user, with the parent entity name for display.
    """
    return await db.fetch_all(
        """
        SELECT s.id, s.user_id, s.entity_id, s.service_name, s.service_desc,
               s.min_duration, s.amount, s.category,
               u.username,
               e.entity_name
        FROM services s
        JOIN users u ON u.id = s.user_id
        LEFT JOIN entities e ON e.id = s.entity_id
        WHERE s.user_id = $1
        ORDER BY s.id
        """,
        user_id,
    )


async def get_service(
    service_id: int,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, entity_id, service_name, service_desc, min_duration, amount, category
        FROM services
        WHERE id = $1
          AND user_id = $2
        LIMIT 1
        """,
        service_id,
        user_id,
        conn=conn,
    )


async def insert_service(
    *,
    user_id: int,
    entity_id: int,
    service_name: str,
    service_desc: str,
    min_duration: int,
    amount: Decimal,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO services (user_id, entity_id, service_name, service_desc, min_duration, amount, category)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING id, user_id, entity_id, service_name, service_desc, min_duration, amount, category
        """,
        user_id,
        entity_id,
        service_name,
        service_desc,
        min_duration,
        amount,
        category,
        conn=conn,
    )
    if row is None:
        raise RuntimeError("Failed to create service.")
    return row


async def update_service(
    service_id: int,
    *,
    user_id: int,
    entity_id: int,
    service_name: str,
    service_desc: str,
    min_duration: int,
    amount: Decimal,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> None:
    await db.execute(
        """
        UPDATE services
        SET entity_id = $3,
            service_name = $4,
            service_desc = $5,
            min_duration = $6,
            amount = $7,
            category = $8
        WHERE id = $1
          AND user_id = $2
        """,
        service_id,
        user_id,
        entity_id,
        service_name,
        service_desc,
        min_duration,
        amount,
        category,
        conn=conn,
    )


async def delete_service(service_id: int, *, user_id: int, conn: asyncpg.Connection) -> None:
    """
    Delete a service with its payees and subscriptions.

    Must run inside `db.transaction()`.
    """
    await db.execute(
        """
        DELETE FROM subscriptions
        WHERE service_id = $1
           OR payee_id IN (SELECT id FROM payees WHERE service_id = $1)
        """,
        service_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM payees
        WHERE service_id = $1
        """,
        service_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM services
        WHERE id = $1
          AND user_id = $2
        """,
        service_id,
        user_id,
        conn=conn,
    )
