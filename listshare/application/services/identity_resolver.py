from __future__ import annotations

import logging

from listshare.application.ports.token_port import TokenPort
from listshare.application.ports.user_port import UserPort
from listshare.application.services.api_key_service import ApiKeyService
from listshare.domain.entities.identity import CredentialCarrier, Identity
from listshare.domain.exceptions import InvalidCredentialError, MissingCredentialError


logger = logging.getLogger(__name__)


class IdentityResolver:
    def __init__(
        self,
        *,
        api_key_service: ApiKeyService,
        token_port: TokenPort,
        user_port: UserPort,
    ):
        self._api_key_service = api_key_service
        self._token_port = token_port
        self._user_port = user_port

    def resolve(self, carrier: CredentialCarrier) -> Identity:
        if carrier.kind == "none":
            raise MissingCredentialError("No credentials provided.")
        if not carrier.token:
            raise InvalidCredentialError("Empty credential.")

        if carrier.kind in ("api_key_header", "api_key_auth"):
            identity = self._resolve_api_key(carrier.token)
        elif carrier.kind in ("bearer_auth", "session_cookie"):
            identity = self._resolve_session(carrier.token)
        else:
            raise MissingCredentialError("No credentials provided.")

        logger.debug(
            "identity_resolver: resolved kind=%s user_id=%s",
            carrier.kind,
            identity.user_id,
        )
        return identity

    def _resolve_api_key(self, token: str) -> Identity:
        verified = self._api_key_service.verify(token=token)
        if verified is None:
            raise InvalidCredentialError("Invalid API key.")

        # Falha no lookup do usuario tambem vira credencial invalida.
        try:
            user = self._user_port.find_by_id(user_id=verified.user_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "identity_resolver: api_key_user_lookup_failed user_id=%s error=%s",
                verified.user_id,
                type(exc).__name__,
            )
            raise InvalidCredentialError("Invalid API key.") from exc
        if user is None:
            raise InvalidCredentialError("Invalid API key.")

        return Identity(
            user_id=user.id,
            twitch_id=user.twitch_id,
            username=user.username,
            expires_at=None,
            scopes=tuple(verified.scopes),
        )

    def _resolve_session(self, token: str) -> Identity:
        claims = self._token_port.verify(token=token)
        user = self._user_port.find_by_id(user_id=claims.user_id)
        if user is None:
            raise InvalidCredentialError("Invalid session.")
        return Identity(
            user_id=user.id,
            twitch_id=claims.twitch_id,
            username=claims.username,
            expires_at=claims.expires_at,
            scopes=None,
        )
