"""
User profile schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EditUserRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)
    phone: str | None = Field(default=None, max_length=50)
    username: str | None = Field(default=None, max_length=150)
    password: str | None = Field(default=None, max_length=128)
