"""
Payee persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import asyncpg

from core import db


async def list_payees(*, user_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT p.id, p.user_id, p.entity_id, p.service_id, p.payee_name,
               p.phone, p.email, p.amount, p.category,
               u.username,
               e.entity_name,
               s.service_name
        FROM payees p
        JOIN users u ON u.id = p.user_id
        LEFT JOIN entities e ON e.id = p.entity_id
        LEFT JOIN services s ON s.id = p.service_id
        WHERE p.user_id = $1
        ORDER BY p.id
        """,
        user_id,
    )


async def get_payee(
    payee_id: int,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, entity_id, service_id, payee_name, phone, email, amount, category
        FROM payees
        WHERE id = $1
          AND user_id = $2
        LIMIT 1
        """,
        payee_id,
        user_id,
        conn=conn,
    )


async def insert_payee(
    *,
    user_id: int,
    entity_id: int,
    service_id: int,
    payee_name: str,
    phone: str,
    email: str,
    amount: Decimal,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO payees (user_id, entity_id, service_id, payee_name, phone, email, amount, category)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING id, user_id, entity_id, service_id, payee_name, phone, email, amount, category
        """,
        user_id,
        entity_id,
        service_id,
        payee_name,
        phone,
        email,
        amount,
        category,
        conn=conn,
    )
    if row is None:
        raise RuntimeError("Failed to create payee.")
    return row


async def update_payee(
    payee_id: int,
    *,
    user_id: int,
    entity_id: int,
    service_id: int,
    payee_name: str,
    phone: str,
    email: str,
    amount: Decimal,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> None:
    await db.execute(
        """
        UPDATE payees
        SET entity_id = $3,
            service_id = $4,
            payee_name = $5,
            phone = $6,
            email = $7,
            amount = $8,
            category = $9
        WHERE id = $1
          AND user_id = $2
        """,
        payee_id,
        user_id,
        entity_id,
        service_id,
        payee_name,
        phone,
        email,
        amount,
        category,
        conn=conn,
    )


async def delete_payee(payee_id: int, *, user_id: int, conn: asyncpg.Connection) -> None:
    """
    Delete a payee with its subscriptions. Must run inside `db.transaction()`.
    """
    await db.execute(
        """
        DELETE FROM subscriptions
        WHERE payee_id = $1
        """,
        payee_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM payees
        WHERE id = $1
          AND user_id = $2
        """,
        payee_id,
        user_id,
        conn=conn,
    )
