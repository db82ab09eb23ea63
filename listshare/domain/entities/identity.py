from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass(frozen=True)
class Identity:
    """Identidade resolvida para uma requisicao.

    `scopes` None indica sessao com privilegio total; uma tupla restringe
    a requisicao aos escopos da api key usada.
    """

    user_id: str
    twitch_id: str
    username: str
    expires_at: datetime | None
    scopes: tuple[str, ...] | None

    @property
    def is_session(self) -> bool:
        return self.scopes is None

    def allows(self, scope: str) -> bool:
        if self.scopes is None:
            return True
        return scope in self.scopes


CredentialKind = Literal[
    "api_key_header",
    "api_key_auth",
    "bearer_auth",
    "session_cookie",
    "none",
]


@dataclass(frozen=True)
class CredentialCarrier:
    kind: CredentialKind
    token: str | None = None


NO_CREDENTIAL = CredentialCarrier(kind="none")
