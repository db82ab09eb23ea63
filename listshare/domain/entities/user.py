from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    id: str
    twitch_id: str
    username: str
    display_name: str | None
    profile_image_url: str | None
    email: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TwitchProfile:
    twitch_id: str
    username: str
    display_name: str | None
    profile_image_url: str | None
    email: str | None
