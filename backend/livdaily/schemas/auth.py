"""Request/response schemas for sign-up, sign-in and session issuance."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from livdaily.schemas.common import ApiModel


class SignUpRequest(ApiModel):
    email: str = Field(min_length=3, max_length=320)
    password: str = Field(min_length=8, max_length=128)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-cases the address and rejects values without a local part and domain."""
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Invalid email address")
        return v


class SignInRequest(ApiModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class SessionResponse(ApiModel):
    """Issued bearer token. The client sends it as `Authorization: Bearer <token>`."""
    user_id: uuid.UUID
    token: str
    expires_at: datetime


class UserResponse(ApiModel):
    id: uuid.UUID
    email: Optional[str] = None
    name: Optional[str] = None
    is_anonymous: bool
    role: str
    created_at: datetime
