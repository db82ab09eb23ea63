from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ApiKey:
    id: str
    user_id: str
    name: str | None
    token_hash: str
    scopes: list[str]
    revoked: bool
    created_at: datetime
