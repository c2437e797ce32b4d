from pydantic import BaseModel, Field
from typing import Optional


class WaitlistIn(BaseModel):
    """Documented request shape. The endpoint reads the raw body itself so
    unknown or mistyped fields degrade to empty strings instead of a 422."""
    name: Optional[str] = Field(None, description="Display name, trimmed")
    email: str = Field(..., description="Contact email, trimmed and lower-cased")
    instagram: Optional[str] = Field(None, description="Instagram handle, trimmed")


class WaitlistAccepted(BaseModel):
    ok: bool = True


class HealthStatus(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str
