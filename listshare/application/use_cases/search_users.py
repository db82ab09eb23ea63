from __future__ import annotations

from listshare.application.ports.user_port import UserPort
from listshare.domain.entities.user import User


MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


class SearchUsersUseCase:
    def __init__(self, *, user_port: UserPort):
        self._user_port = user_port

    def execute(self, *, query: str, user_id: str) -> list[User]:
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        return self._user_port.search(query=query, exclude_user_id=user_id, limit=MAX_RESULTS)
