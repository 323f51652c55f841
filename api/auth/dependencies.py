"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header

from core.errors import AuthInvalid, AuthMissing

from . import security

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthMissing()

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthMissing()

    scheme, token = parts[0], parts[1].strip()
    if scheme != "Bearer" or not token:
        raise AuthMissing()
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


def _decode_claims(access_token: str) -> dict:
    try:
        return security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.info("auth_rejected reason=%s", exc)
        raise AuthInvalid(str(exc)) from exc


def authorize(authorization: str | None) -> dict:
    """
    Check a raw `Authorization` header outside the dependency chain.

    Used by error handlers that fire before route dependencies run.
    """
    return _decode_claims(_extract_bearer_token(authorization))


async def get_current_claims(access_token: str = Depends(get_bearer_token)) -> dict:
    return _decode_claims(access_token)


async def get_current_user_id(claims: dict = Depends(get_current_claims)) -> int:
    return int(claims["user_id"])
