from __future__ import annotations

from pydantic import BaseModel

from listshare.domain.entities.user import User


class UserResponse(BaseModel):
    id: str
    twitch_id: str
    username: str
    display_name: str | None = None
    profile_image_url: str | None = None


class MeResponse(UserResponse):
    email: str | None = None


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        twitch_id=user.twitch_id,
        username=user.username,
        display_name=user.display_name,
        profile_image_url=user.profile_image_url,
    )
