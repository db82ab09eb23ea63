from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CreateListRequest(BaseModel):
    title: str
    position: int | None = None
    show_checkboxes: bool = True
    show_progress: bool = True


class UpdateListRequest(BaseModel):
    title: str | None = None
    position: int | None = None
    show_checkboxes: bool | None = None
    show_progress: bool | None = None


class CreateItemRequest(BaseModel):
    content: str
    checked: bool = False
    position: int | None = None


class UpdateItemRequest(BaseModel):
    content: str | None = None
    checked: bool | None = None
    position: int | None = None


class ItemResponse(BaseModel):
    id: str
    list_id: str
    content: str
    checked: bool
    position: int
    created_at: datetime
    updated_at: datetime


class ListResponse(BaseModel):
    id: str
    page_id: str
    title: str
    position: int
    show_checkboxes: bool
    show_progress: bool
    created_at: datetime
    updated_at: datetime


class ListWithItemsResponse(ListResponse):
    items: list[ItemResponse]


class PublicPageResponse(BaseModel):
    id: str
    title: str
    description: str | None = None
    lists: list[ListWithItemsResponse]
