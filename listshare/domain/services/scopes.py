from __future__ import annotations

from typing import Iterable


SCOPE_READ = "read"
SCOPE_WRITE = "write"

SCOPE_SEPARATOR = ","


def normalize_scopes(scopes: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for scope in scopes:
        value = scope.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


def encode_scopes(scopes: Iterable[str]) -> str:
    return SCOPE_SEPARATOR.join(scopes)


def decode_scopes(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(SCOPE_SEPARATOR) if part.strip()]
