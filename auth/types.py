"""Pydantic models for auth domain."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class Session(BaseModel):
    """An active operator session."""

    token: str = Field(..., description="Session token (opaque string)")
    email: str
    created_at: datetime
    expires_at: datetime
    last_activity_at: datetime


class LoginRequest(BaseModel):
    """Request payload for operator login."""

    email: EmailStr
    password: str = Field(..., min_length=1)
