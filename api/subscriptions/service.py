"""
Subscription business logic.

A subscription links one of the caller's payees to a service of an entity
for a billing period. All three parents are referenced by name.
"""

from __future__ import annotations

import logging
from datetime import date

from core import db, resolver, validation
from core.errors import NotFound, ValidationError

from . import repository, schemas

logger = logging.getLogger(__name__)

CREATE_FIELDS = (
    "entity_name",
    "service_name",
    "payee_name",
    "start_date",
    "end_date",
    "amount",
    "payment_date",
    "category",
)
UPDATE_FIELDS = ("id",)


def _check_period(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and end_date < start_date:
        raise ValidationError("end_date must not be before start_date.")


async def list_subscriptions(*, user_id: int) -> list[dict]:
    rows = await repository.list_subscriptions(user_id=user_id)
    if not rows:
        raise NotFound("No subscriptions found")
    return rows


async def create_subscription(payload: schemas.SubscriptionCreateRequest, *, user_id: int) -> dict:
    validation.require_fields(payload.model_dump(), CREATE_FIELDS)
    category = validation.normalize_category(payload.category)
    _check_period(payload.start_date, payload.end_date)

    names = {
        "entity_name": payload.entity_name,
        "service_name": payload.service_name,
        "payee_name": payload.payee_name,
    }
    async with db.transaction() as conn:
        ids = await resolver.resolve_names(names, user_id=user_id, conn=conn)
        row = await repository.insert_subscription(
            user_id=user_id,
            entity_id=ids["entity_id"],
            service_id=ids["service_id"],
            payee_id=ids["payee_id"],
            start_date=payload.start_date,
            end_date=payload.end_date,
            amount=payload.amount,
            payment_date=payload.payment_date,
            category=category,
            conn=conn,
        )

    logger.info("subscription_created id=%s payee_id=%s user_id=%s", row["id"], row["payee_id"], user_id)
    return {**row, **names}


async def update_subscription(payload: schemas.SubscriptionUpdateRequest, *, user_id: int) -> None:
    validation.require_fields(payload.model_dump(), UPDATE_FIELDS)
    category = validation.optional_category(payload.category)
    subscription_id = int(payload.id)

    async with db.transaction() as conn:
        existing = await repository.get_subscription(subscription_id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Subscription not found or does not belong to the user.")

        ids = await resolver.resolve_names(
            {
                "entity_name": payload.entity_name,
                "service_name": payload.service_name,
                "payee_name": payload.payee_name,
            },
            user_id=user_id,
            conn=conn,
        )
        merged = validation.merge_update(
            existing,
            {
                "entity_id": ids.get("entity_id"),
                "service_id": ids.get("service_id"),
                "payee_id": ids.get("payee_id"),
                "start_date": payload.start_date,
                "end_date": payload.end_date,
                "amount": payload.amount,
                "payment_date": payload.payment_date,
                "category": category,
            },
        )
        _check_period(merged["start_date"], merged["end_date"])
        await repository.update_subscription(subscription_id, user_id=user_id, conn=conn, **merged)

    logger.info("subscription_updated id=%s user_id=%s", subscription_id, user_id)


async def delete_subscription(payload: schemas.SubscriptionDeleteRequest, *, user_id: int) -> None:
    if not payload.id:
        raise ValidationError("Subscription ID is required")

    async with db.transaction() as conn:
        existing = await repository.get_subscription(payload.id, user_id=user_id, conn=conn)
        if existing is None:
            raise NotFound("Subscription not found or not authorized to delete")
        await repository.delete_subscription(payload.id, user_id=user_id, conn=conn)

    logger.info("subscription_deleted id=%s user_id=%s", payload.id, user_id)
