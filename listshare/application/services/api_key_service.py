from __future__ import annotations

import logging
from uuid import uuid4

from listshare.application.dto.api_keys import CreateApiKeyInput, CreatedApiKey, VerifiedApiKey
from listshare.application.ports.api_key_port import ApiKeyPort
from listshare.application.ports.api_key_token_port import ApiKeyTokenPort
from listshare.application.services.clock import utcnow
from listshare.domain.entities.api_key import ApiKey
from listshare.domain.exceptions import ApiKeyCreationError, ApiKeyHashCollisionError
from listshare.domain.services.scopes import normalize_scopes
from listshare.domain.services.validation import (
    raise_for_errors,
    validate_api_key_name,
    validate_scopes,
)


logger = logging.getLogger(__name__)

MAX_CREATE_ATTEMPTS = 3


class ApiKeyService:
    """Ciclo de vida das api keys: emissao, verificacao, listagem e revogacao.

    O token em texto puro so existe no retorno de `create`; o banco guarda
    apenas o hash.
    """

    def __init__(self, *, api_key_port: ApiKeyPort, token_port: ApiKeyTokenPort):
        self._api_key_port = api_key_port
        self._token_port = token_port

    def create(self, command: CreateApiKeyInput) -> CreatedApiKey:
        scopes = normalize_scopes(command.scopes)
        raise_for_errors(
            validate_api_key_name(command.name),
            validate_scopes(scopes),
        )

        for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
            token = self._token_port.generate()
            token_hash = self._token_port.hash(token=token)
            try:
                api_key = self._api_key_port.create(
                    key_id=str(uuid4()),
                    user_id=command.user_id,
                    name=command.name,
                    token_hash=token_hash,
                    scopes=scopes,
                    created_at=utcnow(),
                )
            except ApiKeyHashCollisionError:
                logger.warning(
                    "api_key_service: token_hash_collision attempt=%s/%s user_id=%s",
                    attempt,
                    MAX_CREATE_ATTEMPTS,
                    command.user_id,
                )
                continue

            logger.info(
                "api_key_service: created key_id=%s user_id=%s scopes=%s",
                api_key.id,
                command.user_id,
                ",".join(scopes),
            )
            return CreatedApiKey(id=api_key.id, token=token)

        raise ApiKeyCreationError(
            f"Failed to generate a unique API key after {MAX_CREATE_ATTEMPTS} attempts."
        )

    def verify(self, *, token: str) -> VerifiedApiKey | None:
        token_hash = self._token_port.hash(token=token)
        api_key = self._api_key_port.find_by_token_hash(token_hash=token_hash)
        if api_key is None or api_key.revoked:
            return None
        return VerifiedApiKey(user_id=api_key.user_id, scopes=list(api_key.scopes))

    def list(self, *, user_id: str) -> list[ApiKey]:
        return self._api_key_port.list_by_user(user_id=user_id)

    def revoke(self, *, key_id: str, user_id: str) -> bool:
        revoked = self._api_key_port.revoke(key_id=key_id, user_id=user_id)
        if revoked:
            logger.info("api_key_service: revoked key_id=%s user_id=%s", key_id, user_id)
        return revoked

    def delete(self, *, key_id: str, user_id: str) -> bool:
        deleted = self._api_key_port.delete(key_id=key_id, user_id=user_id)
        if deleted:
            logger.info("api_key_service: deleted key_id=%s user_id=%s", key_id, user_id)
        return deleted
