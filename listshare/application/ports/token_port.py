from __future__ import annotations

from datetime import datetime
from typing import Protocol

from listshare.application.dto.auth import SessionClaims
from listshare.domain.entities.user import User


class TokenPort(Protocol):
    def issue(self, *, user: User, now: datetime) -> tuple[str, datetime]:
        ...

    def verify(self, *, token: str) -> SessionClaims:
        ...
