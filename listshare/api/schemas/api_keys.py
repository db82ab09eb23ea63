from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CreateApiKeyRequest(BaseModel):
    name: str | None = None
    scopes: list[str] = Field(default_factory=list)


class CreateApiKeyResponse(BaseModel):
    id: str
    token: str


class ApiKeyResponse(BaseModel):
    id: str
    name: str | None = None
    scopes: list[str]
    revoked: bool
    created_at: datetime
