from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateApiKeyInput:
    user_id: str
    name: str | None
    scopes: list[str]


@dataclass(frozen=True)
class CreatedApiKey:
    id: str
    token: str


@dataclass(frozen=True)
class VerifiedApiKey:
    user_id: str
    scopes: list[str]
