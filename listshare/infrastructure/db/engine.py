from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str) -> Engine:
    # hide_parameters evita hashes de token nas mensagens de erro.
    return create_engine(dsn, pool_pre_ping=True, hide_parameters=True)
