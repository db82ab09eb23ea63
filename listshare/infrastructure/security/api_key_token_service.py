from __future__ import annotations

import hashlib
import secrets
import string

from listshare.application.ports.api_key_token_port import ApiKeyTokenPort


TOKEN_LENGTH = 64
TOKEN_ALPHABET = string.ascii_letters + string.digits


class ApiKeyTokenService(ApiKeyTokenPort):
    def generate(self) -> str:
        return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))

    def hash(self, *, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
