from __future__ import annotations

import logging
from uuid import uuid4

from listshare.application.dto.pages import (
    CreatePageInput,
    PageAccessOutput,
    SetPublicSlugInput,
    UpdatePageInput,
)
from listshare.application.ports.page_port import PagePort
from listshare.application.services.clock import utcnow
from listshare.application.services.permission_authority import PermissionAuthority
from listshare.domain.entities.page import Page, PageWithRole
from listshare.domain.exceptions import PageNotFoundError
from listshare.domain.services.validation import (
    raise_for_errors,
    validate_description,
    validate_public_slug,
    validate_title,
)


logger = logging.getLogger(__name__)


class ListPagesUseCase:
    def __init__(self, *, authority: PermissionAuthority):
        self._authority = authority

    def execute(self, *, user_id: str) -> list[PageWithRole]:
        return self._authority.list_for_user(user_id=user_id)


class CreatePageUseCase:
    def __init__(self, *, page_port: PagePort):
        self._page_port = page_port

    def execute(self, command: CreatePageInput) -> Page:
        raise_for_errors(
            validate_title(command.title),
            validate_description(command.description),
        )
        page = self._page_port.create(
            page_id=str(uuid4()),
            title=command.title.strip(),
            description=command.description,
            creator_id=command.user_id,
            now=utcnow(),
        )
        logger.info("pages: created page_id=%s creator_id=%s", page.id, command.user_id)
        return page


class GetPageUseCase:
    def __init__(self, *, page_port: PagePort, authority: PermissionAuthority):
        self._page_port = page_port
        self._authority = authority

    def execute(self, *, page_id: str, user_id: str) -> PageAccessOutput:
        page = self._page_port.find_by_id(page_id=page_id)
        if page is None:
            raise PageNotFoundError("Page not found.")
        self._authority.require_access(page_id=page_id, user_id=user_id)
        return PageAccessOutput(
            page=page,
            is_creator=page.creator_id == user_id,
            can_edit=self._authority.check_edit_permission(page_id=page_id, user_id=user_id),
        )


class UpdatePageUseCase:
    def __init__(self, *, page_port: PagePort, authority: PermissionAuthority):
        self._page_port = page_port
        self._authority = authority

    def execute(self, command: UpdatePageInput) -> PageAccessOutput:
        if self._page_port.find_by_id(page_id=command.page_id) is None:
            raise PageNotFoundError("Page not found.")
        self._authority.require_edit(page_id=command.page_id, user_id=command.user_id)
        raise_for_errors(
            validate_title(command.title),
            validate_description(command.description),
        )

        page = self._page_port.update(
            page_id=command.page_id,
            title=command.title.strip() if command.title is not None else None,
            description=command.description,
            now=utcnow(),
        )
        if page is None:
            raise PageNotFoundError("Page not found.")
        return PageAccessOutput(
            page=page,
            is_creator=page.creator_id == command.user_id,
            can_edit=True,
        )


class DeletePageUseCase:
    def __init__(self, *, page_port: PagePort, authority: PermissionAuthority):
        self._page_port = page_port
        self._authority = authority

    def execute(self, *, page_id: str, user_id: str) -> None:
        self._authority.require_creator(page_id=page_id, user_id=user_id)
        if not self._page_port.delete(page_id=page_id):
            raise PageNotFoundError("Page not found.")
        logger.info("pages: deleted page_id=%s user_id=%s", page_id, user_id)


class SetPublicSlugUseCase:
    def __init__(self, *, page_port: PagePort, authority: PermissionAuthority):
        self._page_port = page_port
        self._authority = authority

    def execute(self, command: SetPublicSlugInput) -> Page:
        self._authority.require_creator(page_id=command.page_id, user_id=command.user_id)
        raise_for_errors(validate_public_slug(command.public_slug))
        page = self._page_port.set_public_slug(
            page_id=command.page_id,
            slug=command.public_slug,
            now=utcnow(),
        )
        if page is None:
            raise PageNotFoundError("Page not found.")
        logger.info(
            "pages: public_slug_%s page_id=%s",
            "set" if command.public_slug else "cleared",
            command.page_id,
        )
        return page
