from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreateListInput:
    user_id: str
    page_id: str
    title: str
    position: int | None = None
    show_checkboxes: bool = True
    show_progress: bool = True


@dataclass(frozen=True)
class UpdateListInput:
    user_id: str
    page_id: str
    list_id: str
    title: str | None = None
    position: int | None = None
    show_checkboxes: bool | None = None
    show_progress: bool | None = None


@dataclass(frozen=True)
class CreateItemInput:
    user_id: str
    list_id: str
    content: str
    checked: bool = False
    position: int | None = None


@dataclass(frozen=True)
class UpdateItemInput:
    user_id: str
    list_id: str
    item_id: str
    content: str | None = None
    checked: bool | None = None
    position: int | None = None
