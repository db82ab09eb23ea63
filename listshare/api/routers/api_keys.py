from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from listshare.api.deps import get_api_key_service, require_session_identity
from listshare.api.schemas.api_keys import (
    ApiKeyResponse,
    CreateApiKeyRequest,
    CreateApiKeyResponse,
)
from listshare.application.dto.api_keys import CreateApiKeyInput
from listshare.application.services.api_key_service import ApiKeyService
from listshare.domain.entities.identity import Identity
from listshare.domain.exceptions import ApiKeyNotFoundError


router = APIRouter()


@router.post("/api/settings/api-keys", response_model=CreateApiKeyResponse, status_code=201)
def create_api_key(
    req: CreateApiKeyRequest,
    identity: Identity = Depends(require_session_identity),
    service: ApiKeyService = Depends(get_api_key_service),
):
    created = service.create(
        CreateApiKeyInput(user_id=identity.user_id, name=req.name, scopes=req.scopes)
    )
    return CreateApiKeyResponse(id=created.id, token=created.token)


@router.get("/api/settings/api-keys", response_model=list[ApiKeyResponse])
def list_api_keys(
    identity: Identity = Depends(require_session_identity),
    service: ApiKeyService = Depends(get_api_key_service),
):
    return [
        ApiKeyResponse(
            id=api_key.id,
            name=api_key.name,
            scopes=api_key.scopes,
            revoked=api_key.revoked,
            created_at=api_key.created_at,
        )
        for api_key in service.list(user_id=identity.user_id)
    ]


@router.delete("/api/settings/api-keys/{key_id}", status_code=204)
def delete_api_key(
    key_id: str,
    hard: bool = Query(False),
    identity: Identity = Depends(require_session_identity),
    service: ApiKeyService = Depends(get_api_key_service),
):
    if hard:
        removed = service.delete(key_id=key_id, user_id=identity.user_id)
    else:
        removed = service.revoke(key_id=key_id, user_id=identity.user_id)
    if not removed:
        raise ApiKeyNotFoundError("API key not found.")
    return Response(status_code=204)
