from __future__ import annotations

from typing import Protocol

from listshare.domain.entities.user import TwitchProfile


class TwitchOauthPort(Protocol):
    def authorize_url(self) -> str:
        ...

    def exchange_code(self, *, code: str) -> str:
        ...

    def get_user_profile(self, *, access_token: str) -> TwitchProfile:
        ...
