from __future__ import annotations

from datetime import datetime
from typing import Protocol

from listshare.domain.entities.page import (
    Page,
    PagePermission,
    PageWithRole,
    PermissionWithUser,
)


class PagePort(Protocol):
    def list_for_user(self, *, user_id: str) -> list[PageWithRole]:
        ...

    def find_by_id(self, *, page_id: str) -> Page | None:
        ...

    def find_by_public_slug(self, *, slug: str) -> Page | None:
        ...

    def create(
        self,
        *,
        page_id: str,
        title: str,
        description: str | None,
        creator_id: str,
        now: datetime,
    ) -> Page:
        ...

    def update(
        self,
        *,
        page_id: str,
        title: str | None,
        description: str | None,
        now: datetime,
    ) -> Page | None:
        ...

    def delete(self, *, page_id: str) -> bool:
        ...

    def set_public_slug(self, *, page_id: str, slug: str | None, now: datetime) -> Page | None:
        """Levanta SlugTakenError quando outro registro ja usa o slug."""
        ...

    def list_permissions(self, *, page_id: str) -> list[PermissionWithUser]:
        ...

    def create_permission(
        self,
        *,
        permission_id: str,
        page_id: str,
        user_id: str,
        can_edit: bool,
        granted_by: str,
        now: datetime,
    ) -> PagePermission:
        """Levanta PermissionAlreadyExistsError para par (page_id, user_id) repetido."""
        ...

    def update_permission(
        self,
        *,
        page_id: str,
        permission_id: str,
        can_edit: bool,
    ) -> PagePermission | None:
        ...

    def delete_permission(self, *, page_id: str, permission_id: str) -> None:
        ...

    def get_user_permission(self, *, page_id: str, user_id: str) -> PagePermission | None:
        ...
