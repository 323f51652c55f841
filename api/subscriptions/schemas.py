"""
Subscription API schemas.

Date fields also accept the camelCase names (`startDate`, ...) sent by the
existing web client.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field


class SubscriptionCreateRequest(BaseModel):
    entity_name: str | None = Field(default=None, max_length=255)
    service_name: str | None = Field(default=None, max_length=255)
    payee_name: str | None = Field(default=None, max_length=255)
    start_date: date | None = Field(default=None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: date | None = Field(default=None, validation_alias=AliasChoices("end_date", "endDate"))
    payment_date: date | None = Field(
        default=None,
        validation_alias=AliasChoices("payment_date", "paymentDate"),
    )
    amount: Decimal | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=20)


class SubscriptionUpdateRequest(SubscriptionCreateRequest):
    id: int | None = None


class SubscriptionDeleteRequest(BaseModel):
    id: int | None = None
