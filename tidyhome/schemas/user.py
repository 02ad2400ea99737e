"""Pydantic schemas for User model."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

from tidyhome.schemas.common import StoredDateTime

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
USERNAME_ERROR = "Username must be 3-20 characters, letters, numbers and underscores only"
PASSWORD_MIN_LENGTH = 6
PASSWORD_ERROR = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"


class UserCreate(BaseModel):
    """Schema for creating a new user."""
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_format(cls, v: str) -> str:
        if not USERNAME_PATTERN.match(v):
            raise ValueError(USERNAME_ERROR)
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(PASSWORD_ERROR)
        # bcrypt only looks at the first 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password must be at most 72 bytes")
        return v


class UserResponse(BaseModel):
    """Schema for user responses (excludes password)."""
    id: int
    username: str
    created_at: StoredDateTime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
