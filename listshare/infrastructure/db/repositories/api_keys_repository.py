from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from listshare.application.ports.api_key_port import ApiKeyPort
from listshare.domain.entities.api_key import ApiKey
from listshare.domain.exceptions import ApiKeyHashCollisionError
from listshare.domain.services.scopes import encode_scopes
from listshare.infrastructure.db.errors import is_unique_violation
from listshare.infrastructure.db.mappers.accounts_mapper import map_row_to_api_key


API_KEY_COLUMNS = "id, user_id, name, token_hash, scopes, revoked, created_at"


class SqlApiKeysRepository(ApiKeyPort):
    def __init__(self, engine: Engine):
        self._engine = engine

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
        sql = f"""
            INSERT INTO api_keys (id, user_id, name, token_hash, scopes, revoked, created_at)
            VALUES (:id, :user_id, :name, :token_hash, :scopes, :revoked, :created_at)
            RETURNING {API_KEY_COLUMNS}
        """
        params = {
            "id": key_id,
            "user_id": user_id,
            "name": name,
            "token_hash": token_hash,
            "scopes": encode_scopes(scopes),
            "revoked": False,
            "created_at": created_at,
        }
        try:
            with self._engine.begin() as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except IntegrityError as exc:
            if is_unique_violation(exc, column="token_hash"):
                raise ApiKeyHashCollisionError("API key token hash already exists.") from exc
            raise
        return map_row_to_api_key(row)

    def find_by_token_hash(self, *, token_hash: str) -> ApiKey | None:
        sql = f"""
            SELECT {API_KEY_COLUMNS}
            FROM api_keys
            WHERE token_hash = :token_hash
              AND revoked = :revoked
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(
                text(sql),
                {"token_hash": token_hash, "revoked": False},
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_api_key(row)

    def list_by_user(self, *, user_id: str) -> list[ApiKey]:
        sql = f"""
            SELECT {API_KEY_COLUMNS}
            FROM api_keys
            WHERE user_id = :user_id
            ORDER BY created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_api_key(row) for row in rows]

    def revoke(self, *, key_id: str, user_id: str) -> bool:
        sql = """
            UPDATE api_keys
            SET revoked = :revoked
            WHERE id = :key_id
              AND user_id = :user_id
              AND revoked = :not_revoked
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                text(sql),
                {"key_id": key_id, "user_id": user_id, "revoked": True, "not_revoked": False},
            )
            return result.rowcount > 0

    def delete(self, *, key_id: str, user_id: str) -> bool:
        sql = """
            DELETE FROM api_keys
            WHERE id = :key_id
              AND user_id = :user_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), {"key_id": key_id, "user_id": user_id})
            return result.rowcount > 0

