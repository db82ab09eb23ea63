from __future__ import annotations

from listshare.application.dto.pages import ListWithItems, PublicPageOutput
from listshare.application.ports.list_port import ListPort
from listshare.application.ports.page_port import PagePort
from listshare.domain.exceptions import PageNotFoundError


class GetPublicPageUseCase:
    def __init__(self, *, page_port: PagePort, list_port: ListPort):
        self._page_port = page_port
        self._list_port = list_port

    def execute(self, *, slug: str) -> PublicPageOutput:
        page = self._page_port.find_by_public_slug(slug=slug)
        if page is None:
            raise PageNotFoundError("Page not found.")
        lists = [
            ListWithItems(list=item_list, items=self._list_port.list_items(list_id=item_list.id))
            for item_list in self._list_port.list_by_page(page_id=page.id)
        ]
        return PublicPageOutput(page=page, lists=lists)
