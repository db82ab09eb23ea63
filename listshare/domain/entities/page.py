from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from listshare.domain.entities.user import User


PageRole = Literal["creator", "shared"]


@dataclass(frozen=True)
class Page:
    id: str
    title: str
    description: str | None
    creator_id: str
    public_slug: str | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PageWithRole:
    page: Page
    role: PageRole
    can_edit: bool

    @property
    def is_creator(self) -> bool:
        return self.role == "creator"


@dataclass(frozen=True)
class PagePermission:
    id: str
    page_id: str
    user_id: str
    can_edit: bool
    granted_by: str
    created_at: datetime


@dataclass(frozen=True)
class PermissionWithUser:
    permission: PagePermission
    user: User
