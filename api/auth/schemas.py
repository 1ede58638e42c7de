"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., max_length=320)
    password: str = Field(..., max_length=128)


class TokenResponse(BaseModel):
    token: str


class Identity(BaseModel):
    user_id: str
    username: str | None = None
