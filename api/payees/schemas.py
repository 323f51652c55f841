"""
Payee API schemas.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class PayeeCreateRequest(BaseModel):
    entity_name: str | None = Field(default=None, max_length=255)
    service_name: str | None = Field(default=None, max_length=255)
    payee_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=320)
    amount: Decimal | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=20)


class PayeeUpdateRequest(PayeeCreateRequest):
    id: int | None = None


class PayeeDeleteRequest(BaseModel):
    id: int | None = None
