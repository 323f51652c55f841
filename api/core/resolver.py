"""
Name -> id resolution for body fields like `entity_name`.

Clients reference parent rows by their display name. Lookups are exact
matches restricted to the caller's own rows.
"""

from __future__ import annotations

from typing import Any, Mapping

import asyncpg

from . import db
from .errors import NotFound

# body field -> (table, name column, label used in error messages, id key)
LOOKUPS: dict[str, tuple[str, str, str, str]] = {
    "entity_name": ("entities", "entity_name", "Entity", "entity_id"),
    "service_name": ("services", "service_name", "Service", "service_id"),
    "payee_name": ("payees", "payee_name", "Payee", "payee_id"),
}


async def lookup_id(
    table: str,
    column: str,
    value: str,
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> int | None:
    # table/column only ever come from LOOKUPS, never from the request.
    row = await db.fetch_one(
        f"""
        SELECT id
        FROM {table}
        WHERE {column} = $1
          AND user_id = $2
        ORDER BY id
        LIMIT 1
        """,
        value,
        user_id,
        conn=conn,
    )
    return int(row["id"]) if row is not None else None


async def resolve_names(
    names: Mapping[str, Any],
    *,
    user_id: int,
    conn: asyncpg.Connection | None = None,
) -> dict[str, int]:
    """
    Resolve every non-empty name in `names` and return `{id_key: id}`.

    e.g. {"entity_name": "Acme"} -> {"entity_id": 4}
    Raises NotFound on the first name that does not resolve.
    """
    resolved: dict[str, int] = {}
    for field, value in names.items():
        if value is None or not str(value).strip():
            continue
        table, column, label, id_key = LOOKUPS[field]
        found = await lookup_id(table, column, str(value), user_id=user_id, conn=conn)
        if found is None:
            raise NotFound(f'{label} with name "{value}" not found.')
        resolved[id_key] = found
    return resolved
