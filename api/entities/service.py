"""
Entity business logic.
"""

from __future__ import annotations

import logging

from core import db, validation
from core.errors import NotFound, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("entity_name", "entity_desc", "entity_short_desc", "category")
UPDATE_FIELDS = ("id", "entity_name", "entity_desc", "entity_short_desc")


async def list_entities(*, user_id: int) -> list[dict]:
    rows = await repository.list_entities(user_id=user_id)
    if not rows:
        raise NotFound("No entities found")
    return rows


async def create_entity(payload: schemas.EntityCreateRequest, *, user_id: int) -> dict:
    validation.require_fields(payload.model_dump(), CREATE_FIELDS)
    category = validation.normalize_category(payload.category)

    row = await repository.insert_entity(
        user_id=user_id,
        entity_name=str(payload.entity_name),
        entity_desc=str(payload.entity_desc),
        entity_short_desc=str(payload.entity_short_desc),
        category=category,
    )
    logger.info("entity_created id=%s user_id=%s", row["id"], user_id)
    return row


async def update_entity(payload: schemas.EntityUpdateRequest, *, user_id: int) -> None:
    validation.require_fields(payload.model_dump(), UPDATE_FIELDS)
    category = validation.optional_category(payload.category)
    entity_id = int(payload.id)

    async with db.transaction() as conn:
        existing = await repository.get_entity(entity_id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Entity not found or does not belong to the user.")

        merged = validation.merge_update(
            existing,
            {
                "entity_name": payload.entity_name,
                "entity_desc": payload.entity_desc,
                "entity_short_desc": payload.entity_short_desc,
                "category": category,
            },
        )
        await repository.update_entity(entity_id, user_id=user_id, conn=conn, **merged)

    logger.info("entity_updated id=%s user_id=%s", entity_id, user_id)


async def delete_entity(payload: schemas.EntityDeleteRequest, *, user_id: int) -> None:
    entity_id = payload.id or payload.entity_id
    if not entity_id:
        raise ValidationError("Missing required field: id is mandatory.")

    async with db.transaction() as conn:
        existing = await repository.get_entity(entity_id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Entity not found or not authorized.")
        await repository.delete_entity(entity_id, user_id=user_id, conn=conn)

    logger.info("entity_deleted id=%s user_id=%s", entity_id, user_id)
