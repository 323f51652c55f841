"""
Service (entity offering) API schemas.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


class ServiceCreateRequest(BaseModel):
    service_name: str | None = Field(default=None, max_length=255)
    service_desc: str | None = Field(default=None, max_length=2000)
    # Parent entity, referenced by name.
    entity_name: str | None = Field(default=None, max_length=255)
    min_duration: int | None = Field(default=None, ge=0)
    amount: Decimal | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=20)


class ServiceUpdateRequest(ServiceCreateRequest):
    id: int | None = None


class ServiceDeleteRequest(BaseModel):
    id: int | None = None
