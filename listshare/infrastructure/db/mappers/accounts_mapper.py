from __future__ import annotations

from typing import Any, Mapping

from listshare.domain.entities.api_key import ApiKey
from listshare.domain.entities.user import User
from listshare.domain.services.scopes import decode_scopes

from .common import as_datetime, as_str


def map_row_to_user(row: Mapping[str, Any], *, prefix: str = "") -> User:
    return User(
        id=as_str(row[f"{prefix}id"]),
        twitch_id=as_str(row[f"{prefix}twitch_id"]),
        username=row[f"{prefix}username"],
        display_name=row.get(f"{prefix}display_name"),
        profile_image_url=row.get(f"{prefix}profile_image_url"),
        email=row.get(f"{prefix}email"),
        created_at=as_datetime(row[f"{prefix}created_at"]),
        updated_at=as_datetime(row[f"{prefix}updated_at"]),
    )


def map_row_to_api_key(row: Mapping[str, Any]) -> ApiKey:
    return ApiKey(
        id=as_str(row["id"]),
        user_id=as_str(row["user_id"]),
        name=row.get("name"),
        token_hash=row["token_hash"],
        scopes=decode_scopes(row["scopes"]),
        revoked=bool(row["revoked"]),
        created_at=as_datetime(row["created_at"]),
    )
