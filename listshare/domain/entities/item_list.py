from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ItemList:
    id: str
    page_id: str
    title: str
    position: int
    show_checkboxes: bool
    show_progress: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ListItem:
    id: str
    list_id: str
    content: str
    checked: bool
    position: int
    created_at: datetime
    updated_at: datetime
