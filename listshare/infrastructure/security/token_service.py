from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from listshare.application.dto.auth import SessionClaims
from listshare.application.ports.token_port import TokenPort
from listshare.domain.entities.user import User
from listshare.domain.exceptions import InvalidCredentialError


JWT_ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    def __init__(self, *, jwt_secret: str, session_ttl_days: int = 7):
        if not jwt_secret:
            raise ValueError("JWT secret is required.")
        self._jwt_secret = jwt_secret
        self._session_ttl_days = session_ttl_days

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(days=self._session_ttl_days)

    def issue(self, *, user: User, now: datetime) -> tuple[str, datetime]:
        exp = now + self.session_ttl
        payload = {
            "sub": user.id,
            "twitch_id": user.twitch_id,
            "username": user.username,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._jwt_secret, algorithm=JWT_ALGORITHM)
        return token, exp

    def verify(self, *, token: str) -> SessionClaims:
        try:
            payload = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidCredentialError("Invalid session token.") from exc

        user_id = payload.get("sub")
        twitch_id = payload.get("twitch_id")
        username = payload.get("username")
        if not all(isinstance(value, str) and value for value in (user_id, twitch_id, username)):
            raise InvalidCredentialError("Invalid session token.")

        return SessionClaims(
            user_id=user_id,
            twitch_id=twitch_id,
            username=username,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
