"""User related Pydantic schemas."""

from __future__ import annotations

import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    """Schema for creating a new user record."""

    name: Annotated[str, Field(
        min_length=1,
        max_length=100,
        description="Display name of the user"
    )]
    email: EmailStr = Field(description="Email address (login key)")

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("name")
    def validate_name(cls, v: str) -> str:
        """Validate name field."""
        if not v or not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class UserPublic(BaseModel):
    """Public profile returned to the owner of the account."""

    id: str
    email: str
    name: str
    created_at: datetime.datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
