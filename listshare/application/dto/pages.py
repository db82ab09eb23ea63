from __future__ import annotations

from dataclasses import dataclass

from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.domain.entities.page import Page


@dataclass(frozen=True)
class CreatePageInput:
    user_id: str
    title: str
    description: str | None


@dataclass(frozen=True)
class UpdatePageInput:
    user_id: str
    page_id: str
    title: str | None
    description: str | None


@dataclass(frozen=True)
class SetPublicSlugInput:
    user_id: str
    page_id: str
    public_slug: str | None


@dataclass(frozen=True)
class GrantPermissionInput:
    actor_id: str
    page_id: str
    target_user_id: str
    can_edit: bool


@dataclass(frozen=True)
class UpdatePermissionInput:
    actor_id: str
    page_id: str
    permission_id: str
    can_edit: bool


@dataclass(frozen=True)
class PageAccessOutput:
    page: Page
    is_creator: bool
    can_edit: bool


@dataclass(frozen=True)
class ListWithItems:
    list: ItemList
    items: list[ListItem]


@dataclass(frozen=True)
class PublicPageOutput:
    page: Page
    lists: list[ListWithItems]
