"""Pydantic schemas for household Member model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from tidyhome.schemas.common import StoredDateTime


class MemberWrite(BaseModel):
    """Schema for creating or renaming a household member."""
    name: Optional[str] = None


class MemberResponse(BaseModel):
    """Schema for household member responses."""
    id: int
    name: str
    created_at: StoredDateTime

    model_config = ConfigDict(from_attributes=True)
