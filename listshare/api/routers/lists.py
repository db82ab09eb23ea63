from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from listshare.api.deps import (
    get_create_item_use_case,
    get_create_list_use_case,
    get_delete_item_use_case,
    get_delete_list_use_case,
    get_get_item_use_case,
    get_get_list_use_case,
    get_list_items_use_case,
    get_list_lists_use_case,
    get_update_item_use_case,
    get_update_list_use_case,
    require_scope,
)
from listshare.api.schemas.lists import (
    CreateItemRequest,
    CreateListRequest,
    ItemResponse,
    ListResponse,
    ListWithItemsResponse,
    UpdateItemRequest,
    UpdateListRequest,
)
from listshare.application.dto.lists import (
    CreateItemInput,
    CreateListInput,
    UpdateItemInput,
    UpdateListInput,
)
from listshare.application.dto.pages import ListWithItems
from listshare.application.use_cases.lists import (
    CreateItemUseCase,
    CreateListUseCase,
    DeleteItemUseCase,
    DeleteListUseCase,
    GetItemUseCase,
    GetListUseCase,
    ListItemsUseCase,
    ListListsUseCase,
    UpdateItemUseCase,
    UpdateListUseCase,
)
from listshare.domain.entities.identity import Identity
from listshare.domain.entities.item_list import ItemList, ListItem
from listshare.domain.services.scopes import SCOPE_READ, SCOPE_WRITE


router = APIRouter()


def list_response(item_list: ItemList) -> ListResponse:
    return ListResponse(
        id=item_list.id,
        page_id=item_list.page_id,
        title=item_list.title,
        position=item_list.position,
        show_checkboxes=item_list.show_checkboxes,
        show_progress=item_list.show_progress,
        created_at=item_list.created_at,
        updated_at=item_list.updated_at,
    )


def item_response(item: ListItem) -> ItemResponse:
    return ItemResponse(
        id=item.id,
        list_id=item.list_id,
        content=item.content,
        checked=item.checked,
        position=item.position,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def list_with_items_response(entry: ListWithItems) -> ListWithItemsResponse:
    return ListWithItemsResponse(
        **list_response(entry.list).model_dump(),
        items=[item_response(item) for item in entry.items],
    )


@router.get("/api/pages/{page_id}/lists", response_model=list[ListResponse])
def list_lists(
    page_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: ListListsUseCase = Depends(get_list_lists_use_case),
):
    lists = use_case.execute(page_id=page_id, user_id=identity.user_id)
    return [list_response(item_list) for item_list in lists]


@router.post("/api/pages/{page_id}/lists", response_model=ListResponse, status_code=201)
def create_list(
    page_id: str,
    req: CreateListRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: CreateListUseCase = Depends(get_create_list_use_case),
):
    item_list = use_case.execute(
        CreateListInput(
            user_id=identity.user_id,
            page_id=page_id,
            title=req.title,
            position=req.position,
            show_checkboxes=req.show_checkboxes,
            show_progress=req.show_progress,
        )
    )
    return list_response(item_list)


@router.get("/api/pages/{page_id}/lists/{list_id}", response_model=ListWithItemsResponse)
def get_list(
    page_id: str,
    list_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: GetListUseCase = Depends(get_get_list_use_case),
):
    return list_with_items_response(
        use_case.execute(page_id=page_id, list_id=list_id, user_id=identity.user_id)
    )


@router.patch("/api/pages/{page_id}/lists/{list_id}", response_model=ListResponse)
def update_list(
    page_id: str,
    list_id: str,
    req: UpdateListRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: UpdateListUseCase = Depends(get_update_list_use_case),
):
    item_list = use_case.execute(
        UpdateListInput(
            user_id=identity.user_id,
            page_id=page_id,
            list_id=list_id,
            title=req.title,
            position=req.position,
            show_checkboxes=req.show_checkboxes,
            show_progress=req.show_progress,
        )
    )
    return list_response(item_list)


@router.delete("/api/pages/{page_id}/lists/{list_id}", status_code=204)
def delete_list(
    page_id: str,
    list_id: str,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: DeleteListUseCase = Depends(get_delete_list_use_case),
):
    use_case.execute(page_id=page_id, list_id=list_id, user_id=identity.user_id)
    return Response(status_code=204)


@router.get("/api/lists/{list_id}/items", response_model=list[ItemResponse])
def list_items(
    list_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: ListItemsUseCase = Depends(get_list_items_use_case),
):
    items = use_case.execute(list_id=list_id, user_id=identity.user_id)
    return [item_response(item) for item in items]


@router.post("/api/lists/{list_id}/items", response_model=ItemResponse, status_code=201)
def create_item(
    list_id: str,
    req: CreateItemRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: CreateItemUseCase = Depends(get_create_item_use_case),
):
    item = use_case.execute(
        CreateItemInput(
            user_id=identity.user_id,
            list_id=list_id,
            content=req.content,
            checked=req.checked,
            position=req.position,
        )
    )
    return item_response(item)


@router.get("/api/lists/{list_id}/items/{item_id}", response_model=ItemResponse)
def get_item(
    list_id: str,
    item_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: GetItemUseCase = Depends(get_get_item_use_case),
):
    return item_response(use_case.execute(list_id=list_id, item_id=item_id, user_id=identity.user_id))


@router.patch("/api/lists/{list_id}/items/{item_id}", response_model=ItemResponse)
def update_item(
    list_id: str,
    item_id: str,
    req: UpdateItemRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: UpdateItemUseCase = Depends(get_update_item_use_case),
):
    item = use_case.execute(
        UpdateItemInput(
            user_id=identity.user_id,
            list_id=list_id,
            item_id=item_id,
            content=req.content,
            checked=req.checked,
            position=req.position,
        )
    )
    return item_response(item)


@router.delete("/api/lists/{list_id}/items/{item_id}", status_code=204)
def delete_item(
    list_id: str,
    item_id: str,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: DeleteItemUseCase = Depends(get_delete_item_use_case),
):
    use_case.execute(list_id=list_id, item_id=item_id, user_id=identity.user_id)
    return Response(status_code=204)
