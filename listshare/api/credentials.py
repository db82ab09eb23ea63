from __future__ import annotations

from starlette.requests import cookie_parser

from listshare.domain.entities.identity import NO_CREDENTIAL, CredentialCarrier


API_KEY_HEADER = "x-api-key"
SESSION_COOKIE_NAME = "auth_token"
API_KEY_SCHEME = "ApiKey "
BEARER_SCHEME = "Bearer "


def parse_credential_carrier(
    *,
    x_api_key: str | None,
    authorization: str | None,
    cookie_header: str | None,
) -> CredentialCarrier:
    """Escolhe a credencial da requisicao na ordem fixa de prioridade.

    x-api-key > Authorization ApiKey > Authorization Bearer > cookie de sessao.
    Um Authorization com outro esquema e ignorado.
    """
    if x_api_key:
        return CredentialCarrier(kind="api_key_header", token=x_api_key.strip())

    if authorization:
        if authorization.startswith(API_KEY_SCHEME):
            return CredentialCarrier(
                kind="api_key_auth",
                token=authorization[len(API_KEY_SCHEME):].strip(),
            )
        if authorization.startswith(BEARER_SCHEME):
            return CredentialCarrier(
                kind="bearer_auth",
                token=authorization[len(BEARER_SCHEME):].strip(),
            )

    if cookie_header:
        session_token = cookie_parser(cookie_header).get(SESSION_COOKIE_NAME)
        if session_token:
            return CredentialCarrier(kind="session_cookie", token=session_token)

    return NO_CREDENTIAL
