"""
User persistence helpers.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

# Row sets reached from a user ($1), directly or through a parent.
_USER_ENTITIES = "SELECT id FROM entities WHERE user_id = $1"
_USER_SERVICES = f"SELECT id FROM services WHERE user_id = $1 OR entity_id IN ({_USER_ENTITIES})"
_USER_PAYEES = (
    "SELECT id FROM payees WHERE user_id = $1"
    f" OR entity_id IN ({_USER_ENTITIES})"
    f" OR service_id IN ({_USER_SERVICES})"
)


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    return email.strip().lower()


async def get_user_by_id(user_id: int, *, conn: asyncpg.Connection | None = None) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, username, name, email, phone, password_hash
        FROM users
        WHERE id = $1
        """,
        user_id,
        conn=conn,
    )


async def username_taken(
    username: str,
    *,
    exclude_user_id: int,
    conn: asyncpg.Connection | None = None,
) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM users
        WHERE username = $1
          AND id <> $2
        LIMIT 1
        """,
        username,
        exclude_user_id,
        conn=conn,
    )
    return row is not None


async def update_user(
    user_id: int,
    *,
    username: str,
    name: str | None,
    email: str | None,
    phone: str | None,
    password_hash: str,
    conn: asyncpg.Connection | None = None,
) -> bool:
    status = await db.execute(
        """
        UPDATE users
        SET username = $2,
            name = $3,
            email = $4,
            phone = $5,
            password_hash = $6
        WHERE id = $1
        """,
        user_id,
        username,
        name,
        normalize_email(email),
        phone,
        password_hash,
        conn=conn,
    )
    return db.affected_rows(status) > 0


async def delete_user(user_id: int, *, conn: asyncpg.Connection) -> bool:
    """
    Delete the user, every row they own and every row hanging off those,
    leaves first.

    Dependents go by parent id as well as by owner, so another user's row
    that points at one of this user's entities, services or payees is
    removed too instead of tripping a foreign key.

    Must run inside `db.transaction()`.
    """
    await db.execute(
        f"""
        DELETE FROM subscriptions
        WHERE user_id = $1
           OR entity_id IN ({_USER_ENTITIES})
           OR service_id IN ({_USER_SERVICES})
           OR payee_id IN ({_USER_PAYEES})
        """,
        user_id,
        conn=conn,
    )
    await db.execute(
        f"""
        DELETE FROM payees
        WHERE id IN ({_USER_PAYEES})
        """,
        user_id,
        conn=conn,
    )
    await db.execute(
        f"""
        DELETE FROM services
        WHERE id IN ({_USER_SERVICES})
        """,
        user_id,
        conn=conn,
    )
    await db.execute(
        """
        DELETE FROM entities
        WHERE user_id = $1
        """,
        user_id,
        conn=conn,
    )

    status = await db.execute(
        """
        DELETE FROM users
        WHERE id = $1
        """,
        user_id,
        conn=conn,
    )
    return db.affected_rows(status) > 0
