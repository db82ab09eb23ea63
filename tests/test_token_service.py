from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from listshare.domain.entities.user import User
from listshare.domain.exceptions import InvalidCredentialError
from listshare.infrastructure.security.api_key_token_service import ApiKeyTokenService
from listshare.infrastructure.security.token_service import JwtTokenService


def _user() -> User:
    now = datetime.now(timezone.utc)
    return User(
        id="user-1",
        twitch_id="tw-1",
        username="alice",
        display_name="Alice",
        profile_image_url=None,
        email=None,
        created_at=now,
        updated_at=now,
    )


def test_issue_and_verify_roundtrip_claims():
    service = JwtTokenService(jwt_secret="secret")
    now = datetime.now(timezone.utc)

    token, expires_at = service.issue(user=_user(), now=now)
    claims = service.verify(token=token)

    assert claims.user_id == "user-1"
    assert claims.twitch_id == "tw-1"
    assert claims.username == "alice"
    assert expires_at - now == timedelta(days=7)
    assert claims.expires_at == datetime.fromtimestamp(int(expires_at.timestamp()), tz=timezone.utc)


def test_token_still_valid_just_before_expiry():
    service = JwtTokenService(jwt_secret="secret")
    issued_at = datetime.now(timezone.utc) - timedelta(days=7) + timedelta(minutes=5)

    token, _ = service.issue(user=_user(), now=issued_at)

    assert service.verify(token=token).user_id == "user-1"


def test_expired_token_is_invalid():
    service = JwtTokenService(jwt_secret="secret")
    issued_at = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)

    token, _ = service.issue(user=_user(), now=issued_at)

    with pytest.raises(InvalidCredentialError):
        service.verify(token=token)


def test_token_signed_with_other_secret_is_invalid():
    token, _ = JwtTokenService(jwt_secret="other").issue(user=_user(), now=datetime.now(timezone.utc))

    with pytest.raises(InvalidCredentialError):
        JwtTokenService(jwt_secret="secret").verify(token=token)


def test_malformed_token_is_invalid():
    with pytest.raises(InvalidCredentialError):
        JwtTokenService(jwt_secret="secret").verify(token="not-a-jwt")


def test_token_without_username_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode(
        {"sub": "user-1", "twitch_id": "tw-1", "exp": int(exp.timestamp())},
        "secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidCredentialError):
        JwtTokenService(jwt_secret="secret").verify(token=token)


def test_session_token_never_carries_scopes():
    service = JwtTokenService(jwt_secret="secret")
    token, _ = service.issue(user=_user(), now=datetime.now(timezone.utc))

    payload = jwt.decode(token, "secret", algorithms=["HS256"])

    assert "scopes" not in payload
    assert set(payload) == {"sub", "twitch_id", "username", "iat", "exp"}


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        JwtTokenService(jwt_secret="")


def test_api_key_token_is_64_alphanumeric_chars():
    service = ApiKeyTokenService()

    token = service.generate()

    assert len(token) == 64
    assert token.isalnum()
    assert service.generate() != token


def test_api_key_hash_is_deterministic_sha256_hex():
    service = ApiKeyTokenService()

    digest = service.hash(token="abc")

    assert digest == service.hash(token="abc")
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert service.hash(token="abd") != digest
