from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.engine import Engine

from listshare.application.ports.user_port import UserPort
from listshare.domain.entities.user import TwitchProfile, User
from listshare.infrastructure.db.mappers.accounts_mapper import map_row_to_user


USER_COLUMNS = "id, twitch_id, username, display_name, profile_image_url, email, created_at, updated_at"


class SqlUsersRepository(UserPort):
    def __init__(self, engine: Engine):
        self._engine = engine

    def find_by_id(self, *, user_id: str) -> User | None:
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE id = :user_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def find_by_twitch_id(self, *, twitch_id: str) -> User | None:
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE twitch_id = :twitch_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"twitch_id": twitch_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def create(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        sql = f"""
            INSERT INTO users (
                id, twitch_id, username, display_name, profile_image_url, email, created_at, updated_at
            ) VALUES (
                :id, :twitch_id, :username, :display_name, :profile_image_url, :email, :now, :now
            )
            RETURNING {USER_COLUMNS}
        """
        params = {
            "id": user_id,
            "twitch_id": profile.twitch_id,
            "username": profile.username,
            "display_name": profile.display_name,
            "profile_image_url": profile.profile_image_url,
            "email": profile.email,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_user(row)

    def update_provider_info(self, *, user_id: str, profile: TwitchProfile, now: datetime) -> User:
        sql = f"""
            UPDATE users
            SET username = :username,
                display_name = :display_name,
                profile_image_url = :profile_image_url,
                email = :email,
                updated_at = :now
            WHERE id = :user_id
            RETURNING {USER_COLUMNS}
        """
        params = {
            "user_id": user_id,
            "username": profile.username,
            "display_name": profile.display_name,
            "profile_image_url": profile.profile_image_url,
            "email": profile.email,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_user(row)

    def search(self, *, query: str, exclude_user_id: str, limit: int) -> list[User]:
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM users
            WHERE id <> :exclude_user_id
              AND (
                LOWER(username) LIKE :pattern ESCAPE '!'
                OR LOWER(COALESCE(display_name, '')) LIKE :pattern ESCAPE '!'
              )
            ORDER BY username
            LIMIT :limit
        """
        params = {
            "exclude_user_id": exclude_user_id,
            "pattern": f"%{_escape_like(query.lower())}%",
            "limit": limit,
        }
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), params).mappings().all()
        return [map_row_to_user(row) for row in rows]


def _escape_like(value: str) -> str:
    return value.replace("!", "!!").replace("%", "!%").replace("_", "!_")
