from __future__ import annotations

from datetime import datetime
from typing import Protocol

from listshare.domain.entities.user import TwitchProfile, User


class UserPort(Protocol):
    def find_by_id(self, *, user_id: str) -> User | None:
        ...

    def find_by_twitch_id(self, *, twitch_id: str) -> User | None:
        ...

    def create(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        ...

    def update_provider_info(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        ...

    def search(self, *, query: str, exclude_user_id: str, limit: int) -> list[User]:
        ...
