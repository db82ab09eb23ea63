from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def parse_origin(url: str | None) -> str | None:
    """Retorna scheme://host[:port] ou None quando a URL nao e valida."""
    if not url:
        return None
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError:
        return None
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    origin = f"{parts.scheme}://{parts.hostname}"
    if port is not None:
        origin = f"{origin}:{port}"
    return origin


@dataclass(frozen=True)
class Settings:
    database_url: str
    server_host: str
    server_port: int
    jwt_secret: str
    session_ttl_days: int
    twitch_client_id: str
    twitch_client_secret: str
    twitch_redirect_uri: str
    twitch_timeout_seconds: float
    frontend_url: str
    log_level: str

    @property
    def cors_origins(self) -> tuple[str, ...]:
        # URL invalida nao libera nenhuma origem.
        origin = parse_origin(self.frontend_url)
        return (origin,) if origin else ()

    @property
    def cookie_secure(self) -> bool:
        return self.frontend_url.strip().lower().startswith("https://")

    @property
    def frontend_base_url(self) -> str:
        return self.frontend_url.rstrip("/")


def get_settings() -> Settings:
    return Settings(
        database_url=_env("DATABASE_URL", ""),
        server_host=_env("SERVER_HOST", "0.0.0.0"),
        server_port=int(_env("SERVER_PORT", "3000")),
        jwt_secret=_env("JWT_SECRET", ""),
        session_ttl_days=int(_env("SESSION_TTL_DAYS", "7")),
        twitch_client_id=_env("TWITCH_CLIENT_ID", ""),
        twitch_client_secret=_env("TWITCH_CLIENT_SECRET", ""),
        twitch_redirect_uri=_env("TWITCH_REDIRECT_URI", ""),
        twitch_timeout_seconds=float(_env("TWITCH_TIMEOUT_SECONDS", "10")),
        frontend_url=_env("FRONTEND_URL", "http://localhost:5173"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
    )
