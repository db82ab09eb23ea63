from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from listshare.domain.entities.user import User


@dataclass(frozen=True)
class SessionClaims:
    user_id: str
    twitch_id: str
    username: str
    expires_at: datetime


@dataclass(frozen=True)
class LoginTwitchInput:
    code: str


@dataclass(frozen=True)
class LoginTwitchOutput:
    user: User
    session_token: str
    expires_at: datetime
