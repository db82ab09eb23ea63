from __future__ import annotations

from datetime import datetime, timezone

import pytest

from listshare.api.credentials import parse_credential_carrier
from listshare.application.dto.api_keys import CreateApiKeyInput
from listshare.application.services.api_key_service import ApiKeyService
from listshare.application.services.identity_resolver import IdentityResolver
from listshare.domain.entities.identity import CredentialCarrier
from listshare.domain.exceptions import InvalidCredentialError, MissingCredentialError
from listshare.infrastructure.security.api_key_token_service import ApiKeyTokenService
from listshare.infrastructure.security.token_service import JwtTokenService


@pytest.fixture
def token_service() -> JwtTokenService:
    return JwtTokenService(jwt_secret="secret")


@pytest.fixture
def api_key_service(api_keys) -> ApiKeyService:
    return ApiKeyService(api_key_port=api_keys, token_port=ApiKeyTokenService())


@pytest.fixture
def resolver(api_key_service, token_service, users) -> IdentityResolver:
    return IdentityResolver(
        api_key_service=api_key_service,
        token_port=token_service,
        user_port=users,
    )


def _session_token(token_service, user) -> str:
    token, _ = token_service.issue(user=user, now=datetime.now(timezone.utc))
    return token


def test_bearer_session_yields_full_privilege_identity(resolver, token_service, users):
    user = users.add("user-1", "alice")
    token = _session_token(token_service, user)

    identity = resolver.resolve(CredentialCarrier(kind="bearer_auth", token=token))

    assert identity.user_id == "user-1"
    assert identity.username == "alice"
    assert identity.twitch_id == "tw-user-1"
    assert identity.scopes is None
    assert identity.expires_at is not None
    assert identity.allows("write")


def test_session_cookie_resolves(resolver, token_service, users):
    user = users.add("user-1")
    carrier = parse_credential_carrier(
        x_api_key=None,
        authorization=None,
        cookie_header=f"a=b; auth_token={_session_token(token_service, user)}",
    )

    assert resolver.resolve(carrier).user_id == "user-1"


def test_api_key_header_yields_scoped_identity(resolver, api_key_service, users):
    users.add("user-1")
    created = api_key_service.create(CreateApiKeyInput(user_id="user-1", name=None, scopes=["read"]))

    identity = resolver.resolve(CredentialCarrier(kind="api_key_header", token=created.token))

    assert identity.user_id == "user-1"
    assert identity.scopes == ("read",)
    assert identity.expires_at is None
    assert identity.allows("read")
    assert not identity.allows("write")


def test_authorization_api_key_scheme_resolves(resolver, api_key_service, users):
    users.add("user-1")
    created = api_key_service.create(CreateApiKeyInput(user_id="user-1", name=None, scopes=["write"]))
    carrier = parse_credential_carrier(
        x_api_key=None,
        authorization=f"ApiKey {created.token}",
        cookie_header=None,
    )

    assert resolver.resolve(carrier).scopes == ("write",)


def test_no_carrier_is_missing_credential(resolver):
    carrier = parse_credential_carrier(x_api_key=None, authorization="sometoken", cookie_header=None)

    with pytest.raises(MissingCredentialError):
        resolver.resolve(carrier)


def test_invalid_api_key_header_does_not_fall_back_to_valid_cookie(resolver, token_service, users):
    user = users.add("user-1")
    carrier = parse_credential_carrier(
        x_api_key="bogus",
        authorization=None,
        cookie_header=f"auth_token={_session_token(token_service, user)}",
    )

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(carrier)


def test_invalid_bearer_does_not_fall_back_to_valid_cookie(resolver, token_service, users):
    user = users.add("user-1")
    carrier = parse_credential_carrier(
        x_api_key=None,
        authorization="Bearer tampered",
        cookie_header=f"auth_token={_session_token(token_service, user)}",
    )

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(carrier)


def test_session_for_deleted_user_is_invalid(resolver, token_service, users):
    user = users.add("user-1")
    token = _session_token(token_service, user)
    del users.users["user-1"]

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(CredentialCarrier(kind="bearer_auth", token=token))


def test_api_key_for_deleted_user_is_invalid(resolver, api_key_service, users):
    users.add("user-1")
    created = api_key_service.create(CreateApiKeyInput(user_id="user-1", name=None, scopes=["read"]))
    del users.users["user-1"]

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(CredentialCarrier(kind="api_key_header", token=created.token))


def test_revoked_api_key_is_invalid(resolver, api_key_service, users):
    users.add("user-1")
    created = api_key_service.create(CreateApiKeyInput(user_id="user-1", name=None, scopes=["read"]))
    api_key_service.revoke(key_id=created.id, user_id="user-1")

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(CredentialCarrier(kind="api_key_auth", token=created.token))


def test_user_store_failure_during_api_key_auth_is_invalid_credential(api_key_service, token_service, users):
    class FailingUsers:
        def find_by_id(self, *, user_id):
            raise RuntimeError("db down")

    users.add("user-1")
    created = api_key_service.create(CreateApiKeyInput(user_id="user-1", name=None, scopes=["read"]))
    resolver = IdentityResolver(
        api_key_service=api_key_service,
        token_port=token_service,
        user_port=FailingUsers(),
    )

    with pytest.raises(InvalidCredentialError):
        resolver.resolve(CredentialCarrier(kind="api_key_header", token=created.token))


def test_empty_token_is_invalid_not_missing(resolver):
    with pytest.raises(InvalidCredentialError):
        resolver.resolve(CredentialCarrier(kind="bearer_auth", token=""))
