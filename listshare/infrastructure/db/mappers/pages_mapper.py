from __future__ import annotations

from typing import Any, Mapping

from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.domain.entities.page import Page, PagePermission

from .common import as_datetime, as_str


def map_row_to_page(row: Mapping[str, Any]) -> Page:
    return Page(
        id=as_str(row["id"]),
        title=row["title"],
        description=row.get("description"),
        creator_id=as_str(row["creator_id"]),
        public_slug=row.get("public_slug"),
        created_at=as_datetime(row["created_at"]),
        updated_at=as_datetime(row["updated_at"]),
    )


def map_row_to_permission(row: Mapping[str, Any]) -> PagePermission:
    return PagePermission(
        id=as_str(row["id"]),
        page_id=as_str(row["page_id"]),
        user_id=as_str(row["user_id"]),
        can_edit=bool(row["can_edit"]),
        granted_by=as_str(row["granted_by"]),
        created_at=as_datetime(row["created_at"]),
    )


def map_row_to_list(row: Mapping[str, Any]) -> ItemList:
    return ItemList(
        id=as_str(row["id"]),
        page_id=as_str(row["page_id"]),
        title=row["title"],
        position=int(row["position"]),
        show_checkboxes=bool(row["show_checkboxes"]),
        show_progress=bool(row["show_progress"]),
        created_at=as_datetime(row["created_at"]),
        updated_at=as_datetime(row["updated_at"]),
    )


def map_row_to_item(row: Mapping[str, Any]) -> ListItem:
    return ListItem(
        id=as_str(row["id"]),
        list_id=as_str(row["list_id"]),
        content=row["content"],
        checked=bool(row["checked"]),
        position=int(row["position"]),
        created_at=as_datetime(row["created_at"]),
        updated_at=as_datetime(row["updated_at"]),
    )
