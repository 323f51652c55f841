"""
Payee business logic.
"""

from __future__ import annotations

import logging

from core import db, resolver, validation
from core.errors import NotFound, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("entity_name", "service_name", "payee_name", "phone", "email", "amount", "category")
UPDATE_FIELDS = ("id",)


async def list_payees(*, user_id: int) -> list[dict]:
    rows = await repository.list_payees(user_id=user_id)
    if not rows:
        raise NotFound("No payees found")
    return rows


async def create_payee(payload: schemas.PayeeCreateRequest, *, user_id: int) -> dict:
    validation.require_fields(payload.model_dump(), CREATE_FIELDS)
    category = validation.normalize_category(payload.category)

    async with db.transaction() as conn:
        ids = await resolver.resolve_names(
            {"entity_name": payload.entity_name, "service_name": payload.service_name},
            user_id=user_id,
            conn=conn,
        )
        row = await repository.insert_payee(
            user_id=user_id,
            entity_id=ids["entity_id"],
            service_id=ids["service_id"],
            payee_name=str(payload.payee_name),
            phone=str(payload.phone),
            email=str(payload.email),
            amount=payload.amount,
            category=category,
            conn=conn,
        )

    logger.info("payee_created id=%s user_id=%s", row["id"], user_id)
    return {**row, "entity_name": payload.entity_name, "service_name": payload.service_name}


async def update_payee(payload: schemas.PayeeUpdateRequest, *, user_id: int) -> None:
    validation.require_fields(payload.model_dump(), UPDATE_FIELDS)
    category = validation.optional_category(payload.category)
    payee_id = int(payload.id)

    async with db.transaction() as conn:
        existing = await repository.get_payee(payee_id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Payee not found or does not belong to the user.")

        ids = await resolver.resolve_names(
            {"entity_name": payload.entity_name, "service_name": payload.service_name},
            user_id=user_id,
            conn=conn,
        )
        merged = validation.merge_update(
            existing,
            {
                "entity_id": ids.get("entity_id"),
                "service_id": ids.get("service_id"),
                "payee_name": payload.payee_name,
                "phone": payload.phone,
                "email": payload.email,
                "amount": payload.amount,
                "category": category,
            },
        )
        await repository.update_payee(payee_id, user_id=user_id, conn=conn, **merged)

    logger.info("payee_updated id=%s user_id=%s", payee_id, user_id)


async def delete_payee(payload: schemas.PayeeDeleteRequest, *, user_id: int) -> None:
    if not payload.id:
        raise ValidationError("Payee ID is required")

    async with db.transaction() as conn:
        existing = await repository.get_payee(payload.id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Payee not found or not authorized to delete")
        await repository.delete_payee(payload.id, user_id=user_id, conn=conn)

    logger.info("payee_deleted id=%s user_id=%s", payload.id, user_id)
