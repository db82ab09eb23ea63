from __future__ import annotations

from datetime import datetime
from typing import Protocol

from listshare.domain.entities.api_key import ApiKey


class ApiKeyPort(Protocol):
    def create(
        self,
        *,
        key_id: str,
        user_id: str,
        name: str | None,
        token_hash: str,
        scopes: list[str],
        created_at: datetime,
    ) -> ApiKey:
        """Persiste a chave; levanta ApiKeyHashCollisionError se o hash ja existir."""
        ...

    def find_by_token_hash(self, *, token_hash: str) -> ApiKey | None:
        ...

    def list_by_user(self, *, user_id: str) -> list[ApiKey]:
        ...

    def revoke(self, *, key_id: str, user_id: str) -> bool:
        ...

    def delete(self, *, key_id: str, user_id: str) -> bool:
        ...
