"""
Subscription persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import asyncpg

from core import db


async def list_subscriptions(*, user_id: int) -> list[dict[str, Any]]:
    """
    Subscriptions owned by the user, joined with entity, service and payee
    details for display.
    """
    return await db.fetch_all(
        """
        SELECT sub.id, sub.user_id, sub.entity_id, sub.service_id, sub.payee_id,
               sub.start_date, sub.end_date, sub.amount, sub.payment_date, sub.category,
               u.username,
               e.entity_name,
               s.service_name,
               s.min_duration AS service_duration,
               p.payee_name,
               p.email AS payee_email,
               p.phone AS payee_phone
        FROM subscriptions sub
        JOIN users u ON u.id = sub.user_id
        LEFT JOIN entities e ON e.id = sub.entity_id
        LEFT JOIN services s ON s.id = sub.service_id
        LEFT JOIN payees p ON p.id = sub.payee_id
        WHERE sub.user_id = $1
        ORDER BY sub.payment_date, sub.id
        """,
        user_id,
    )


async def get_subscription(
    subscription_id: int,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, user_id, entity_id, service_id, payee_id,
               start_date, end_date, amount, payment_date, category
        FROM subscriptions
        WHERE id = $1
          AND user_id = $2
        LIMIT 1
        """,
        subscription_id,
        user_id,
        conn=conn,
    )


async def insert_subscription(
    *,
    user_id: int,
    entity_id: int,
    service_id: int,
    payee_id: int,
    start_date: date,
    end_date: date,
    amount: Decimal,
    payment_date: date,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO subscriptions
          (user_id, entity_id, service_id, payee_id, start_date, end_date, amount, payment_date, category)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
        RETURNING id, user_id, entity_id, service_id, payee_id,
                  start_date, end_date, amount, payment_date, category
        """,
        user_id,
        entity_id,
        service_id,
        payee_id,
        start_date,
        end_date,
        amount,
        payment_date,
        category,
        conn=conn,
    )
    if row is None:
        raise RuntimeError("Failed to create subscription.")
    return row


async def update_subscription(
    subscription_id: int,
    *,
    user_id: int,
    entity_id: int,
    service_id: int,
    payee_id: int,
    start_date: date,
    end_date: date,
    amount: Decimal,
    payment_date: date,
    category: str,
    conn: asyncpg.Connection | None = None,
) -> None:
    await db.execute(
        """
        UPDATE subscriptions
        SET entity_id = $3,
            service_id = $4,
            payee_id = $5,
            start_date = $6,
            end_date = $7,
            amount = $8,
            payment_date = $9,
            category = $10
        WHERE id = $1
          AND user_id = $2
        """,
        subscription_id,
        user_id,
        entity_id,
        service_id,
        payee_id,
        start_date,
        end_date,
        amount,
        payment_date,
        category,
        conn=conn,
    )


async def delete_subscription(
    subscription_id: int,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> None:
    await db.execute(
        """
        DELETE FROM subscriptions
        WHERE id = $1
          AND user_id = $2
        """,
        subscription_id,
        user_id,
        conn=conn,
    )
