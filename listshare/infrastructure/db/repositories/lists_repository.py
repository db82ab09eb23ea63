from __future__ import annotations

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.engine import Engine

from listshare.application.ports.list_port import ListPort
from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.infrastructure.db.mappers.pages_mapper import map_row_to_item, map_row_to_list


LIST_COLUMNS = "id, page_id, title, position, show_checkboxes, show_progress, created_at, updated_at"
ITEM_COLUMNS = "id, list_id, content, checked, position, created_at, updated_at"


class SqlListsRepository(ListPort):
    def __init__(self, engine: Engine):
        self._engine = engine

    def list_by_page(self, *, page_id: str) -> list[ItemList]:
        sql = f"""
            SELECT {LIST_COLUMNS}
            FROM lists
            WHERE page_id = :page_id
            ORDER BY position ASC, created_at ASC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"page_id": page_id}).mappings().all()
        return [map_row_to_list(row) for row in rows]

    def find_by_id(self, *, list_id: str, page_id: str) -> ItemList | None:
        sql = f"""
            SELECT {LIST_COLUMNS}
            FROM lists
            WHERE id = :list_id
              AND page_id = :page_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"list_id": list_id, "page_id": page_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_list(row)

    def get_page_id(self, *, list_id: str) -> str | None:
        with self._engine.connect() as conn:
            page_id = conn.execute(
                text("SELECT page_id FROM lists WHERE id = :list_id"),
                {"list_id": list_id},
            ).scalar_one_or_none()
        return str(page_id) if page_id is not None else None

    def create_list(
        self,
        *,
        list_id: str,
        page_id: str,
        title: str,
        position: int | None,
        show_checkboxes: bool,
        show_progress: bool,
        now: datetime,
    ) -> ItemList:
        sql = f"""
            INSERT INTO lists (
                id, page_id, title, position, show_checkboxes, show_progress, created_at, updated_at
            ) VALUES (
                :id,
                :page_id,
                :title,
                COALESCE(
                    :position,
                    (SELECT COALESCE(MAX(position) + 1, 0) FROM lists WHERE page_id = :page_id)
                ),
                :show_checkboxes,
                :show_progress,
                :now,
                :now
            )
            RETURNING {LIST_COLUMNS}
        """
        params = {
            "id": list_id,
            "page_id": page_id,
            "title": title,
            "position": position,
            "show_checkboxes": show_checkboxes,
            "show_progress": show_progress,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_list(row)

    def update_list(
        self,
        *,
        list_id: str,
        page_id: str,
        title: str | None,
        position: int | None,
        show_checkboxes: bool | None,
        show_progress: bool | None,
        now: datetime,
    ) -> ItemList | None:
        sql = f"""
            UPDATE lists
            SET title = COALESCE(:title, title),
                position = COALESCE(:position, position),
                show_checkboxes = COALESCE(:show_checkboxes, show_checkboxes),
                show_progress = COALESCE(:show_progress, show_progress),
                updated_at = :now
            WHERE id = :list_id
              AND page_id = :page_id
            RETURNING {LIST_COLUMNS}
        """
        params = {
            "list_id": list_id,
            "page_id": page_id,
            "title": title,
            "position": position,
            "show_checkboxes": show_checkboxes,
            "show_progress": show_progress,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_list(row)

    def delete_list(self, *, list_id: str, page_id: str) -> bool:
        sql = """
            DELETE FROM lists
            WHERE id = :list_id
              AND page_id = :page_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), {"list_id": list_id, "page_id": page_id})
            return result.rowcount > 0

    def list_items(self, *, list_id: str) -> list[ListItem]:
        sql = f"""
            SELECT {ITEM_COLUMNS}
            FROM list_items
            WHERE list_id = :list_id
            ORDER BY position ASC, created_at ASC
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"list_id": list_id}).mappings().all()
        return [map_row_to_item(row) for row in rows]

    def find_item(self, *, item_id: str, list_id: str) -> ListItem | None:
        sql = f"""
            SELECT {ITEM_COLUMNS}
            FROM list_items
            WHERE id = :item_id
              AND list_id = :list_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"item_id": item_id, "list_id": list_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_item(row)

    def create_item(
        self,
        *,
        item_id: str,
        list_id: str,
        content: str,
        checked: bool,
        position: int | None,
        now: datetime,
    ) -> ListItem:
        sql = f"""
            INSERT INTO list_items (id, list_id, content, checked, position, created_at, updated_at)
            VALUES (
                :id,
                :list_id,
                :content,
                :checked,
                COALESCE(
                    :position,
                    (SELECT COALESCE(MAX(position) + 1, 0) FROM list_items WHERE list_id = :list_id)
                ),
                :now,
                :now
            )
            RETURNING {ITEM_COLUMNS}
        """
        params = {
            "id": item_id,
            "list_id": list_id,
            "content": content,
            "checked": checked,
            "position": position,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_item(row)

    def update_item(
        self,
        *,
        item_id: str,
        list_id: str,
        content: str | None,
        checked: bool | None,
        position: int | None,
        now: datetime,
    ) -> ListItem | None:
        sql = f"""
            UPDATE list_items
            SET content = COALESCE(:content, content),
                checked = COALESCE(:checked, checked),
                position = COALESCE(:position, position),
                updated_at = :now
            WHERE id = :item_id
              AND list_id = :list_id
            RETURNING {ITEM_COLUMNS}
        """
        params = {
            "item_id": item_id,
            "list_id": list_id,
            "content": content,
            "checked": checked,
            "position": position,
            "now": now,
        }
        with self._engine.begin() as conn:
            row = conn.execute(text(sql), params).mappings().first()
        if row is None:
            return None
        return map_row_to_item(row)

    def delete_item(self, *, item_id: str, list_id: str) -> bool:
        sql = """
            DELETE FROM list_items
            WHERE id = :item_id
              AND list_id = :list_id
        """
        with self._engine.begin() as conn:
            result = conn.execute(text(sql), {"item_id": item_id, "list_id": list_id})
            return result.rowcount > 0
