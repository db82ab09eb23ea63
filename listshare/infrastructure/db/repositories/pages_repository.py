from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from listshare.application.ports.page_port import PagePort
from listshare.domain.entities.page import (
    Page,
    PagePermission,
    PageWithRole,
    PermissionWithUser,
)
from listshare.domain.exceptions import PermissionAlreadyExistsError, SlugTakenError
from listshare.infrastructure.db.errors import is_unique_violation
from listshare.infrastructure.db.mappers.accounts_mapper import map_row_to_user
from listshare.infrastructure.db.mappers.pages_mapper import (
    map_row_to_page,
    map_row_to_permission,
)


PAGE_COLUMNS = "id, title, description, creator_id, public_slug, created_at, updated_at"
PERMISSION_COLUMNS = "id, page_id, user_id, can_edit, granted_by, created_at"


class SqlPagesRepository(PagePort):
    def __init__(self, engine: Engine):
        self._engine = engine

    def list_for_user(self, *, user_id: str) -> list[PageWithRole]:
        created_sql = f"""
            SELECT {PAGE_COLUMNS}
            FROM pages
            WHERE creator_id = :user_id
            ORDER BY created_at DESC
        """
        shared_sql = """
            SELECT
                p.id,
                p.title,
                p.description,
                p.creator_id,
                p.public_slug,
                p.created_at,
                p.updated_at,
                pp.can_edit
            FROM pages p
            JOIN page_permissions pp
              ON pp.page_id = p.id
            WHERE pp.user_id = :user_id
            ORDER BY p.created_at DESC
        """
        with self._engine.connect() as conn:
            created_rows = conn.execute(text(created_sql), {"user_id": user_id}).mappings().all()
            shared_rows = conn.execute(text(shared_sql), {"user_id": user_id}).mappings().all()

        pages = [
            PageWithRole(page=map_row_to_page(row), role="creator", can_edit=True)
            for row in created_rows
        ]
        pages.extend(
            PageWithRole(page=map_row_to_page(row), role="shared", can_edit=bool(row["can_edit"]))
            for row in shared_rows
        )
        return pages

    def find_by_id(self, *, page_id: str) -> Page | None:
        sql = f"""
            SELECT {PAGE_COLUMNS}
            FROM pages
            WHERE id = :page_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"page_id": page_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_page(row)

    def find_by_public_slug(self, *, slug: str) -> Page | None:
        sql = f"""
            SELECT {PAGE_COLUMNS}
            FROM pages
            WHERE public_slug = :slug
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"slug": slug}).mappings().first()
        if row is None:
            return None
        return map_row_to_page(row)

    def create(
        self,
        *,
        page_id: str,
        title: str,
        description: str | None,
        creator_id: str,
        now: datetime,
    ) -> Page:
        sql = f"""
            INSERT INTO pages (id, title, description, creator_id, created_at, updated_at)
            VALUES (:id, :title, :description, :creator_id, :now, :now)
            RETURNING {PAGE_COLUMNS}
        """
        params = {
            "id": page_id,
            "title": title,
            "description": description,
            "creator_id": creator_id,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_page(row)

    def update(
        self,
        *,
        page_id: str,
        title: str | None,
        description: str | None,
        now: datetime,
    ) -> Page | None:
        sql = f"""
            UPDATE pages
            SET title = COALESCE(:title, title),
                description = COALESCE(:description, description),
                updated_at = :now
            WHERE id = :page_id
            RETURNING {PAGE_COLUMNS}
        """
        params = {
            "page_id": page_id,
            "title": title,
            "description": description,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_page(row)

    def delete(self, *, page_id: str) -> bool:
        with self._engine.begin() as conn:
            result = conn.execute(text("DELETE FROM pages WHERE id = :page_id"), {"page_id": page_id})
            return result.rowcount > 0

    def set_public_slug(self, *, page_id: str, slug: str | None, now: datetime) -> Page | None:
        sql = f"""
            UPDATE pages
            SET public_slug = :slug,
                updated_at = :now
            WHERE id = :page_id
            RETURNING {PAGE_COLUMNS}
        """
        try:
            with self._engine.begin() as conn:
                row = conn.execute(
                    text(sql),
                    {"page_id": page_id, "slug": slug, "now": now},
                ).mappings().first()
        except IntegrityError as exc:
            if is_unique_violation(exc, column="public_slug"):
                raise SlugTakenError("This slug is already in use.") from exc
            raise
        if row is None:
            return None
        return map_row_to_page(row)

    def list_permissions(self, *, page_id: str) -> list[PermissionWithUser]:
        sql = """
            SELECT
                pp.id,
                pp.page_id,
                pp.user_id,
                pp.can_edit,
                pp.granted_by,
                pp.created_at,
                u.id AS u_id,
                u.twitch_id AS u_twitch_id,
                u.username AS u_username,
                u.display_name AS u_display_name,
                u.profile_image_url AS u_profile_image_url,
                u.email AS u_email,
                u.created_at AS u_created_at,
                u.updated_at AS u_updated_at
            FROM page_permissions pp
            JOIN users u
              ON u.id = pp.user_id
            WHERE pp.page_id = :page_id
            ORDER BY pp.created_at DESC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"page_id": page_id}).mappings().all()
        return [
            PermissionWithUser(
                permission=map_row_to_permission(row),
                user=map_row_to_user(row, prefix="u_"),
            )
            for row in rows
        ]

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
        sql = f"""
            INSERT INTO page_permissions (id, page_id, user_id, can_edit, granted_by, created_at)
            VALUES (:id, :page_id, :user_id, :can_edit, :granted_by, :now)
            RETURNING {PERMISSION_COLUMNS}
        """
        params = {
            "id": permission_id,
            "page_id": page_id,
            "user_id": user_id,
            "can_edit": can_edit,
            "granted_by": granted_by,
            "now": now,
        }
        try:
            with self._engine.begin() as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise PermissionAlreadyExistsError("Permission already exists.") from exc
            raise
        return map_row_to_permission(row)

    def update_permission(
        self,
        *,
        page_id: str,
        permission_id: str,
        can_edit: bool,
    ) -> PagePermission | None:
        sql = f"""
            UPDATE page_permissions
            SET can_edit = :can_edit
            WHERE id = :permission_id
              AND page_id = :page_id
            RETURNING {PERMISSION_COLUMNS}
        """
        with self._engine.begin() as conn:
            row = conn.execute(
                text(sql),
                {"permission_id": permission_id, "page_id": page_id, "can_edit": can_edit},
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_permission(row)

    def delete_permission(self, *, page_id: str, permission_id: str) -> None:
        sql = """
            DELETE FROM page_permissions
            WHERE id = :permission_id
              AND page_id = :page_id
        """
        with self._engine.begin() as conn:
            conn.execute(text(sql), {"permission_id": permission_id, "page_id": page_id})

    def get_user_permission(self, *, page_id: str, user_id: str) -> PagePermission | None:
        sql = f"""
            SELECT {PERMISSION_COLUMNS}
            FROM page_permissions
            WHERE page_id = :page_id
              AND user_id = :user_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"page_id": page_id, "user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_permission(row)
