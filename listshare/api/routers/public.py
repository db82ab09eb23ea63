from __future__ import annotations

from fastapi import APIRouter, Depends

from listshare.api.deps import get_public_page_use_case
from listshare.api.routers.lists import list_with_items_response
from listshare.api.schemas.lists import PublicPageResponse
from listshare.application.use_cases.get_public_page import GetPublicPageUseCase


router = APIRouter()


@router.get("/api/public/{slug}", response_model=PublicPageResponse)
def get_public_page(
    slug: str,
    use_case: GetPublicPageUseCase = Depends(get_public_page_use_case),
):
    output = use_case.execute(slug=slug)
    return PublicPageResponse(
        id=output.page.id,
        title=output.page.title,
        description=output.page.description,
        lists=[list_with_items_response(entry) for entry in output.lists],
    )
