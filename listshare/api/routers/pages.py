from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from listshare.api.deps import (
    get_create_page_use_case,
    get_delete_page_use_case,
    get_get_page_use_case,
    get_list_pages_use_case,
    get_permission_authority,
    get_set_public_slug_use_case,
    get_update_page_use_case,
    require_scope,
)
from listshare.api.schemas.pages import (
    CreatePageRequest,
    GrantPermissionRequest,
    PageResponse,
    PermissionResponse,
    SetPublicSlugRequest,
    UpdatePageRequest,
    UpdatePermissionRequest,
)
from listshare.api.schemas.users import user_response
from listshare.application.dto.pages import (
    CreatePageInput,
    GrantPermissionInput,
    SetPublicSlugInput,
    UpdatePageInput,
    UpdatePermissionInput,
)
from listshare.application.services.permission_authority import PermissionAuthority
from listshare.application.use_cases.pages import (
    CreatePageUseCase,
    DeletePageUseCase,
    GetPageUseCase,
    ListPagesUseCase,
    SetPublicSlugUseCase,
    UpdatePageUseCase,
)
from listshare.domain.entities.identity import Identity
from listshare.domain.entities.page import Page, PermissionWithUser
from listshare.domain.services.scopes import SCOPE_READ, SCOPE_WRITE


router = APIRouter()


def page_response(page: Page, *, is_creator: bool, can_edit: bool) -> PageResponse:
    return PageResponse(
        id=page.id,
        title=page.title,
        description=page.description,
        creator_id=page.creator_id,
        public_slug=page.public_slug,
        is_creator=is_creator,
        can_edit=can_edit,
        created_at=page.created_at,
        updated_at=page.updated_at,
    )


def permission_response(entry: PermissionWithUser) -> PermissionResponse:
    return PermissionResponse(
        id=entry.permission.id,
        page_id=entry.permission.page_id,
        user=user_response(entry.user),
        can_edit=entry.permission.can_edit,
        granted_by=entry.permission.granted_by,
        created_at=entry.permission.created_at,
    )


@router.get("/api/pages", response_model=list[PageResponse])
def list_pages(
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: ListPagesUseCase = Depends(get_list_pages_use_case),
):
    return [
        page_response(entry.page, is_creator=entry.is_creator, can_edit=entry.can_edit)
        for entry in use_case.execute(user_id=identity.user_id)
    ]


@router.post("/api/pages", response_model=PageResponse, status_code=201)
def create_page(
    req: CreatePageRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: CreatePageUseCase = Depends(get_create_page_use_case),
):
    page = use_case.execute(
        CreatePageInput(user_id=identity.user_id, title=req.title, description=req.description)
    )
    return page_response(page, is_creator=True, can_edit=True)


@router.get("/api/pages/{page_id}", response_model=PageResponse)
def get_page(
    page_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: GetPageUseCase = Depends(get_get_page_use_case),
):
    output = use_case.execute(page_id=page_id, user_id=identity.user_id)
    return page_response(output.page, is_creator=output.is_creator, can_edit=output.can_edit)


@router.patch("/api/pages/{page_id}", response_model=PageResponse)
def update_page(
    page_id: str,
    req: UpdatePageRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: UpdatePageUseCase = Depends(get_update_page_use_case),
):
    output = use_case.execute(
        UpdatePageInput(
            user_id=identity.user_id,
            page_id=page_id,
            title=req.title,
            description=req.description,
        )
    )
    return page_response(output.page, is_creator=output.is_creator, can_edit=output.can_edit)


@router.delete("/api/pages/{page_id}", status_code=204)
def delete_page(
    page_id: str,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: DeletePageUseCase = Depends(get_delete_page_use_case),
):
    use_case.execute(page_id=page_id, user_id=identity.user_id)
    return Response(status_code=204)


@router.put("/api/pages/{page_id}/public-slug", response_model=PageResponse)
def set_public_slug(
    page_id: str,
    req: SetPublicSlugRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    use_case: SetPublicSlugUseCase = Depends(get_set_public_slug_use_case),
):
    page = use_case.execute(
        SetPublicSlugInput(user_id=identity.user_id, page_id=page_id, public_slug=req.public_slug)
    )
    return page_response(page, is_creator=True, can_edit=True)


@router.get("/api/pages/{page_id}/permissions", response_model=list[PermissionResponse])
def list_permissions(
    page_id: str,
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    authority: PermissionAuthority = Depends(get_permission_authority),
):
    entries = authority.list_permissions(page_id=page_id, actor_id=identity.user_id)
    return [permission_response(entry) for entry in entries]


@router.post(
    "/api/pages/{page_id}/permissions",
    response_model=PermissionResponse,
    status_code=201,
)
def grant_permission(
    page_id: str,
    req: GrantPermissionRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    authority: PermissionAuthority = Depends(get_permission_authority),
):
    entry = authority.grant(
        GrantPermissionInput(
            actor_id=identity.user_id,
            page_id=page_id,
            target_user_id=req.user_id,
            can_edit=req.can_edit,
        )
    )
    return permission_response(entry)


@router.patch(
    "/api/pages/{page_id}/permissions/{permission_id}",
    response_model=PermissionResponse,
)
def update_permission(
    page_id: str,
    permission_id: str,
    req: UpdatePermissionRequest,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    authority: PermissionAuthority = Depends(get_permission_authority),
):
    entry = authority.update(
        UpdatePermissionInput(
            actor_id=identity.user_id,
            page_id=page_id,
            permission_id=permission_id,
            can_edit=req.can_edit,
        )
    )
    return permission_response(entry)


@router.delete("/api/pages/{page_id}/permissions/{permission_id}", status_code=204)
def revoke_permission(
    page_id: str,
    permission_id: str,
    identity: Identity = Depends(require_scope(SCOPE_WRITE)),
    authority: PermissionAuthority = Depends(get_permission_authority),
):
    authority.revoke(page_id=page_id, permission_id=permission_id, actor_id=identity.user_id)
    return Response(status_code=204)
