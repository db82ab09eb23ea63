from __future__ import annotations

from datetime import datetime
from typing import Protocol

from listshare.domain.entities.item_list import ItemList, ListItem


class ListPort(Protocol):
    def list_by_page(self, *, page_id: str) -> list[ItemList]:
        ...

    def find_by_id(self, *, list_id: str, page_id: str) -> ItemList | None:
        ...

    def get_page_id(self, *, list_id: str) -> str | None:
        ...

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
        """Sem posicao, a lista vai para o fim (max + 1)."""
        ...

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
        ...

    def delete_list(self, *, list_id: str, page_id: str) -> bool:
        ...

    def list_items(self, *, list_id: str) -> list[ListItem]:
        ...

    def find_item(self, *, item_id: str, list_id: str) -> ListItem | None:
        ...

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
        ...

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
        ...

    def delete_item(self, *, item_id: str, list_id: str) -> bool:
        ...
