"""
Response envelopes and the central error-to-response mapping.

Success: {"message": str, "data": ...}   (data omitted when None)
Failure: {"message": str, "error": str}  (error omitted when None)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import asyncpg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import dependencies as auth_dependencies

from .errors import ApiError, Conflict, InternalError

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def envelope(message: str, data: Any = None, *, status_code: int = 200) -> JSONResponse:
    content: dict[str, Any] = {"message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def error_envelope(message: str, *, status_code: int, error: str | None = None) -> JSONResponse:
    content: dict[str, Any] = {"message": message}
    if error:
        content["error"] = error
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def preflight(methods: Iterable[str]) -> JSONResponse:
    allowed = ", ".join([*methods, "OPTIONS"])
    return JSONResponse(
        content=None,
        status_code=200,
        headers={
            **CORS_HEADERS,
            "Access-Control-Allow-Methods": allowed,
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        },
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        where = ".".join(loc) or "body"
        parts.append(f"{where}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("internal_error message=%s", exc.message)
    return error_envelope(exc.message, status_code=exc.status_code, error=exc.error)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body parsing runs before route dependencies, so auth is checked here first.
    try:
        auth_dependencies.authorize(request.headers.get("Authorization"))
    except ApiError as auth_exc:
        return await _api_error_handler(request, auth_exc)

    return error_envelope(
        "Invalid request body.",
        status_code=400,
        error=_describe_validation_errors(exc),
    )


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_envelope(str(exc.detail), status_code=exc.status_code)


async def _unique_violation_handler(request: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    logger.info("unique_violation path=%s constraint=%s", request.url.path, getattr(exc, "constraint_name", None))
    return error_envelope(Conflict.default_message, status_code=Conflict.status_code)


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    # Details stay in the server log only.
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return error_envelope(InternalError.default_message, status_code=InternalError.status_code)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(asyncpg.UniqueViolationError, _unique_violation_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
