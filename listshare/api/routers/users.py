from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from listshare.api.deps import get_search_users_use_case, require_scope
from listshare.api.schemas.users import UserResponse, user_response
from listshare.application.use_cases.search_users import SearchUsersUseCase
from listshare.domain.entities.identity import Identity
from listshare.domain.services.scopes import SCOPE_READ


router = APIRouter()


@router.get("/api/users/search", response_model=list[UserResponse])
def search_users(
    q: str = Query(""),
    identity: Identity = Depends(require_scope(SCOPE_READ)),
    use_case: SearchUsersUseCase = Depends(get_search_users_use_case),
):
    users = use_case.execute(query=q, user_id=identity.user_id)
    return [user_response(user) for user in users]
