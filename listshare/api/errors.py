from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from listshare.domain.exceptions import (
    BadRequestError,
    DomainError,
    ForbiddenError,
    InvalidCredentialError,
    MissingCredentialError,
    NotFoundError,
    ValidationError,
)


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def domain_error_response(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, (MissingCredentialError, InvalidCredentialError)):
        # Motivo real fica so no log; o cliente recebe sempre a mesma resposta.
        logger.info(
            "auth: denied reason=%s kind=%s path=%s",
            type(exc).__name__,
            getattr(request.state, "credential_kind", "none"),
            request.url.path,
        )
        return _error(401, "Unauthorized")
    if isinstance(exc, ForbiddenError):
        return _error(403, "Forbidden")
    if isinstance(exc, NotFoundError):
        return _error(404, str(exc) or "Not found")
    if isinstance(exc, ValidationError):
        return _error(
            400,
            "Validation failed",
            fields=[{"field": error.field, "message": error.message} for error in exc.errors],
        )
    if isinstance(exc, BadRequestError):
        return _error(400, str(exc))

    logger.error("internal_error: %s path=%s", type(exc).__name__, request.url.path, exc_info=exc)
    return _error(500, "Internal server error")


def request_validation_response(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return _error(400, "Validation failed", fields=fields)


def database_error_response(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error: %s path=%s", type(exc).__name__, request.url.path, exc_info=exc)
    return _error(500, "Internal server error")


def http_error_response(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_response)
    app.add_exception_handler(RequestValidationError, request_validation_response)
    app.add_exception_handler(SQLAlchemyError, database_error_response)
    app.add_exception_handler(StarletteHTTPException, http_error_response)
