from __future__ import annotations

from sqlalchemy.exc import IntegrityError


def is_unique_violation(exc: IntegrityError, *, column: str | None = None) -> bool:
    """Reconhece violacao de unicidade em postgres e sqlite pela mensagem do driver."""
    message = str(exc.orig).lower()
    if "unique" not in message and "duplicate" not in message:
        return False
    return column is None or column in message
