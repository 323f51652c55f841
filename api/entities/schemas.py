"""
Entity API schemas (request bodies).

Fields are optional at the parsing layer; required-field rules live in the
service so every missing field is reported in one 400 response.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EntityCreateRequest(BaseModel):
    entity_name: str | None = Field(default=None, max_length=255)
    entity_desc: str | None = Field(default=None, max_length=2000)
    entity_short_desc: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=20)


class EntityUpdateRequest(EntityCreateRequest):
    id: int | None = None


class EntityDeleteRequest(BaseModel):
    id: int | None = None
    # Older clients send the id under this name.
    entity_id: int | None = None
