from __future__ import annotations

import logging
from uuid import uuid4

from listshare.application.dto.pages import GrantPermissionInput, UpdatePermissionInput
from listshare.application.ports.list_port import ListPort
from listshare.application.ports.page_port import PagePort
from listshare.application.ports.user_port import UserPort
from listshare.application.services.clock import utcnow
from listshare.domain.entities.page import Page, PageWithRole, PermissionWithUser
from listshare.domain.exceptions import (
    BadRequestError,
    ForbiddenError,
    ListNotFoundError,
    PageNotFoundError,
    PermissionNotFoundError,
    UserNotFoundError,
)


logger = logging.getLogger(__name__)


class PermissionAuthority:
    """Decide acesso a paginas e administra o compartilhamento.

    Criador > editor (can_edit) > leitor > sem acesso. Listas e itens herdam
    a permissao da pagina dona; nenhuma ACL propria e armazenada.
    """

    def __init__(self, *, page_port: PagePort, list_port: ListPort, user_port: UserPort):
        self._page_port = page_port
        self._list_port = list_port
        self._user_port = user_port

    def check_access(self, *, page_id: str, user_id: str) -> bool:
        page = self._page_port.find_by_id(page_id=page_id)
        if page is None:
            return False
        if page.creator_id == user_id:
            return True
        permission = self._page_port.get_user_permission(page_id=page_id, user_id=user_id)
        return permission is not None

    def check_edit_permission(self, *, page_id: str, user_id: str) -> bool:
        page = self._page_port.find_by_id(page_id=page_id)
        if page is None:
            return False
        if page.creator_id == user_id:
            return True
        permission = self._page_port.get_user_permission(page_id=page_id, user_id=user_id)
        return permission is not None and permission.can_edit

    def require_access(self, *, page_id: str, user_id: str) -> None:
        if not self.check_access(page_id=page_id, user_id=user_id):
            logger.info("permission_authority: access_denied page_id=%s user_id=%s", page_id, user_id)
            raise ForbiddenError("You don't have access to this page.")

    def require_edit(self, *, page_id: str, user_id: str) -> None:
        if not self.check_edit_permission(page_id=page_id, user_id=user_id):
            logger.info("permission_authority: edit_denied page_id=%s user_id=%s", page_id, user_id)
            raise ForbiddenError("You don't have edit permission on this page.")

    def require_creator(self, *, page_id: str, user_id: str) -> Page:
        page = self._page_port.find_by_id(page_id=page_id)
        if page is None:
            raise PageNotFoundError("Page not found.")
        if page.creator_id != user_id:
            logger.info("permission_authority: creator_required page_id=%s user_id=%s", page_id, user_id)
            raise ForbiddenError("Only the page creator can do this.")
        return page

    def resolve_list_page(self, *, list_id: str) -> str:
        page_id = self._list_port.get_page_id(list_id=list_id)
        if page_id is None:
            raise ListNotFoundError("List not found.")
        return page_id

    def list_for_user(self, *, user_id: str) -> list[PageWithRole]:
        return self._page_port.list_for_user(user_id=user_id)

    def list_permissions(self, *, page_id: str, actor_id: str) -> list[PermissionWithUser]:
        self.require_creator(page_id=page_id, user_id=actor_id)
        return self._page_port.list_permissions(page_id=page_id)

    def grant(self, command: GrantPermissionInput) -> PermissionWithUser:
        page = self.require_creator(page_id=command.page_id, user_id=command.actor_id)
        if command.target_user_id == page.creator_id:
            raise BadRequestError("The page creator already has full access.")
        target = self._user_port.find_by_id(user_id=command.target_user_id)
        if target is None:
            raise UserNotFoundError("User not found.")

        permission = self._page_port.create_permission(
            permission_id=str(uuid4()),
            page_id=command.page_id,
            user_id=command.target_user_id,
            can_edit=command.can_edit,
            granted_by=command.actor_id,
            now=utcnow(),
        )
        logger.info(
            "permission_authority: granted page_id=%s user_id=%s can_edit=%s",
            command.page_id,
            command.target_user_id,
            command.can_edit,
        )
        return PermissionWithUser(permission=permission, user=target)

    def update(self, command: UpdatePermissionInput) -> PermissionWithUser:
        self.require_creator(page_id=command.page_id, user_id=command.actor_id)
        permission = self._page_port.update_permission(
            page_id=command.page_id,
            permission_id=command.permission_id,
            can_edit=command.can_edit,
        )
        if permission is None:
            raise PermissionNotFoundError("Permission not found.")
        user = self._user_port.find_by_id(user_id=permission.user_id)
        if user is None:
            raise UserNotFoundError("User not found.")
        logger.info(
            "permission_authority: updated page_id=%s permission_id=%s can_edit=%s",
            command.page_id,
            command.permission_id,
            command.can_edit,
        )
        return PermissionWithUser(permission=permission, user=user)

    def revoke(self, *, page_id: str, permission_id: str, actor_id: str) -> None:
        self.require_creator(page_id=page_id, user_id=actor_id)
        self._page_port.delete_permission(page_id=page_id, permission_id=permission_id)
        logger.info("permission_authority: revoked page_id=%s permission_id=%s", page_id, permission_id)
