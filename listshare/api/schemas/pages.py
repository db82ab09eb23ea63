from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from listshare.api.schemas.users import UserResponse


class CreatePageRequest(BaseModel):
    title: str
    description: str | None = None


class UpdatePageRequest(BaseModel):
    title: str | None = None
    description: str | None = None


class SetPublicSlugRequest(BaseModel):
    public_slug: str | None = None


class PageResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    creator_id: str
    public_slug: str | None = None
    is_creator: bool
    can_edit: bool
    created_at: datetime
    updated_at: datetime


class GrantPermissionRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    can_edit: bool = False


class UpdatePermissionRequest(BaseModel):
    can_edit: bool


class PermissionResponse(BaseModel):
    id: str
    page_id: str
    user: UserResponse
    can_edit: bool
    granted_by: str
    created_at: datetime
