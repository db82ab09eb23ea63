from __future__ import annotations

from uuid import uuid4

from listshare.application.dto.lists import (
    CreateItemInput,
    CreateListInput,
    UpdateItemInput,
    UpdateListInput,
)
from listshare.application.dto.pages import ListWithItems
from listshare.application.ports.list_port import ListPort
from listshare.application.services.clock import utcnow
from listshare.application.services.permission_authority import PermissionAuthority
from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.domain.exceptions import ItemNotFoundError, ListNotFoundError
from listshare.domain.services.validation import (
    raise_for_errors,
    validate_content,
    validate_position,
    validate_title,
)


class ListListsUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, page_id: str, user_id: str) -> list[ItemList]:
        self._authority.require_access(page_id=page_id, user_id=user_id)
        return self._list_port.list_by_page(page_id=page_id)


class GetListUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, page_id: str, list_id: str, user_id: str) -> ListWithItems:
        self._authority.require_access(page_id=page_id, user_id=user_id)
        item_list = self._list_port.find_by_id(list_id=list_id, page_id=page_id)
        if item_list is None:
            raise ListNotFoundError("List not found.")
        return ListWithItems(list=item_list, items=self._list_port.list_items(list_id=list_id))


class CreateListUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, command: CreateListInput) -> ItemList:
        self._authority.require_edit(page_id=command.page_id, user_id=command.user_id)
        raise_for_errors(
            validate_title(command.title),
            validate_position(command.position),
        )
        return self._list_port.create_list(
            list_id=str(uuid4()),
            page_id=command.page_id,
            title=command.title.strip(),
            position=command.position,
            show_checkboxes=command.show_checkboxes,
            show_progress=command.show_progress,
            now=utcnow(),
        )


class UpdateListUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, command: UpdateListInput) -> ItemList:
        self._authority.require_edit(page_id=command.page_id, user_id=command.user_id)
        raise_for_errors(
            validate_title(command.title),
            validate_position(command.position),
        )
        item_list = self._list_port.update_list(
            list_id=command.list_id,
            page_id=command.page_id,
            title=command.title.strip() if command.title is not None else None,
            position=command.position,
            show_checkboxes=command.show_checkboxes,
            show_progress=command.show_progress,
            now=utcnow(),
        )
        if item_list is None:
            raise ListNotFoundError("List not found.")
        return item_list


class DeleteListUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, page_id: str, list_id: str, user_id: str) -> None:
        self._authority.require_edit(page_id=page_id, user_id=user_id)
        if not self._list_port.delete_list(list_id=list_id, page_id=page_id):
            raise ListNotFoundError("List not found.")


class ListItemsUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, list_id: str, user_id: str) -> list[ListItem]:
        page_id = self._authority.resolve_list_page(list_id=list_id)
        self._authority.require_access(page_id=page_id, user_id=user_id)
        return self._list_port.list_items(list_id=list_id)


class GetItemUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, list_id: str, item_id: str, user_id: str) -> ListItem:
        page_id = self._authority.resolve_list_page(list_id=list_id)
        self._authority.require_access(page_id=page_id, user_id=user_id)
        item = self._list_port.find_item(item_id=item_id, list_id=list_id)
        if item is None:
            raise ItemNotFoundError("Item not found.")
        return item


class CreateItemUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, command: CreateItemInput) -> ListItem:
        page_id = self._authority.resolve_list_page(list_id=command.list_id)
        self._authority.require_edit(page_id=page_id, user_id=command.user_id)
        raise_for_errors(
            validate_content(command.content),
            validate_position(command.position),
        )
        return self._list_port.create_item(
            item_id=str(uuid4()),
            list_id=command.list_id,
            content=command.content.strip(),
            checked=command.checked,
            position=command.position,
            now=utcnow(),
        )


class UpdateItemUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, command: UpdateItemInput) -> ListItem:
        page_id = self._authority.resolve_list_page(list_id=command.list_id)
        self._authority.require_edit(page_id=page_id, user_id=command.user_id)
        raise_for_errors(
            validate_content(command.content),
            validate_position(command.position),
        )
        item = self._list_port.update_item(
            item_id=command.item_id,
            list_id=command.list_id,
            content=command.content.strip() if command.content is not None else None,
            checked=command.checked,
            position=command.position,
            now=utcnow(),
        )
        if item is None:
            raise ItemNotFoundError("Item not found.")
        return item


class DeleteItemUseCase:
    def __init__(self, *, list_port: ListPort, authority: PermissionAuthority):
        self._list_port = list_port
        self._authority = authority

    def execute(self, *, list_id: str, item_id: str, user_id: str) -> None:
        page_id = self._authority.resolve_list_page(list_id=list_id)
        self._authority.require_edit(page_id=page_id, user_id=user_id)
        if not self._list_port.delete_item(item_id=item_id, list_id=list_id):
            raise ItemNotFoundError("Item not found.")
