"""Pydantic schemas for Category model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from tidyhome.schemas.common import StoredDateTime


class CategoryWrite(BaseModel):
    """Schema for creating or renaming a category."""
    name: Optional[str] = None
    color: Optional[str] = None  # Falls back to the default grey


class CategoryResponse(BaseModel):
    """Schema for category responses."""
    id: int
    name: str
    color: str
    created_at: StoredDateTime

    model_config = ConfigDict(from_attributes=True)
