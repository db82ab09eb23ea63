from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from listshare.api.errors import install_error_handlers
from listshare.api.routers import api_keys, auth, lists, pages, public, users
from listshare.shared.config import Settings, get_settings
from listshare.shared.logging_config import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Listshare API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Api-Key"],
    )
    install_error_handlers(app)

    app.include_router(auth.router, tags=["auth"])
    app.include_router(pages.router, tags=["pages"])
    app.include_router(lists.router, tags=["lists"])
    app.include_router(public.router, tags=["public"])
    app.include_router(users.router, tags=["users"])
    app.include_router(api_keys.router, tags=["api-keys"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
