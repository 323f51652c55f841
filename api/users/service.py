"""
User profile business logic (edit / delete the authenticated user).
"""

from __future__ import annotations

import logging

from auth import security
from core import db, validation
from core.errors import Conflict, NotFound, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)


async def edit_user(payload: schemas.EditUserRequest, *, user_id: int) -> None:
    password_hash = None
    if payload.password:
        try:
            password_hash = security.hash_password(payload.password)
        except security.AuthSecurityError as exc:
            raise ValidationError(str(exc)) from exc

    async with db.transaction() as conn:
        existing = await repository.get_user_by_id(user_id, conn=conn)
        if existing is None:
            raise NotFound("User not found")

        username = (payload.username or "").strip()
        if username and await repository.username_taken(username, exclude_user_id=user_id, conn=conn):
            raise Conflict("Username already exists")

        merged = validation.merge_update(
            existing,
            {
                "username": username,
                "name": payload.name,
                "email": payload.email,
                "phone": payload.phone,
            },
        )

        updated = await repository.update_user(
            user_id,
            password_hash=password_hash or str(existing["password_hash"]),
            conn=conn,
            **merged,
        )
        if not updated:
            raise NotFound("User not found")

    logger.info("user_updated id=%s password_changed=%s", user_id, bool(payload.password))


async def delete_user(*, user_id: int) -> None:
    async with db.transaction() as conn:
        deleted = await repository.delete_user(user_id, conn=conn)
        if not deleted:
            raise NotFound("User not found")

    logger.info("user_deleted id=%s", user_id)
