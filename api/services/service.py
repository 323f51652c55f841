"""
Service business logic.

A service always hangs off one of the caller's entities, referenced in
request bodies by `entity_name`.
"""

from __future__ import annotations

import logging

from core import db, resolver, validation
from core.errors import NotFound, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("service_name", "service_desc", "min_duration", "amount", "category", "entity_name")
UPDATE_FIELDS = ("id", "entity_name")


async def list_services(*, user_id: int) -> list[dict]:
    rows = await repository.list_services(user_id=user_id)
    if not rows:
        raise NotFound("No services found")
    return rows


async def create_service(payload: schemas.ServiceCreateRequest, *, user_id: int) -> dict:
    validation.require_fields(payload.model_dump(), CREATE_FIELDS)
    category = validation.normalize_category(payload.category)

    async with db.transaction() as conn:
        ids = await resolver.resolve_names(
            {"entity_name": payload.entity_name},
            user_id=user_id,
            conn=conn,
        )
        row = await repository.insert_service(
            user_id=user_id,
            entity_id=ids["entity_id"],
            service_name=str(payload.service_name),
            service_desc=str(payload.service_desc),
            min_duration=int(payload.min_duration),
            amount=payload.amount,
            category=category,
            conn=conn,
        )

    logger.info("service_created id=%s entity_id=%s user_id=%s", row["id"], row["entity_id"], user_id)
    return {**row, "entity_name": payload.entity_name}


async def update_service(payload: schemas.ServiceUpdateRequest, *, user_id: int) -> None:
    validation.require_fields(payload.model_dump(), UPDATE_FIELDS)
    category = validation.optional_category(payload.category)
    service_id = int(payload.id)

    async with db.transaction() as conn:
        existing = await repository.get_service(service_id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Service not found or does not belong to the user.")

        ids = await resolver.resolve_names(
            {"entity_name": payload.entity_name},
            user_id=user_id,
            conn=conn,
        )
        merged = validation.merge_update(
            existing,
            {
                "service_name": payload.service_name,
                "service_desc": payload.service_desc,
                "min_duration": payload.min_duration,
                "amount": payload.amount,
                "category": category,
            },
        )
        await repository.update_service(
            service_id,
            user_id=user_id,
            entity_id=ids["entity_id"],
            conn=conn,
            **merged,
        )

    logger.info("service_updated id=%s user_id=%s", service_id, user_id)


async def delete_service(payload: schemas.ServiceDeleteRequest, *, user_id: int) -> None:
    if not payload.id:
        raise ValidationError("Missing required field: id is mandatory.")

    async with db.transaction() as conn:
        existing = await repository.get_service(payload.id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Service not found or not authorized.")
        await repository.delete_service(payload.id, user_id=user_id, conn=conn)

    logger.info("service_deleted id=%s user_id=%s", payload.id, user_id)
