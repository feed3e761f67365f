"""
LivDaily Backend — Shared Pydantic Schemas
============================================

What:  The camelCase base model every API schema inherits from, plus the
       error, health and acknowledgement payloads shared by all routers.

Wire format:
    The mobile client speaks camelCase JSON. `ApiModel` generates camelCase
    aliases, accepts both spellings on input and reads straight from ORM
    objects (`from_attributes`), so services can return
    `JournalEntryResponse.model_validate(entry)`.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    Standard error payload returned by the global exception handlers.

    Example:
        {
            "error": "forbidden",
            "message": "You do not have permission to access this resource",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable explanation")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class SuccessResponse(ApiModel):
    """Acknowledgement for deletes and sign-out."""
    success: bool = True


class HealthResponse(BaseModel):
    status: str = Field(description="healthy | degraded | unhealthy")
    version: str
    database: str = Field(description="connected | disconnected")
    gemini: str = Field(description="available | unavailable | not_configured")
    uptime_seconds: float
