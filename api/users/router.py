"""
User profile endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core import responses

from . import schemas, service

router = APIRouter()


@router.options("/EditUser")
async def edit_user_preflight() -> JSONResponse:
    return responses.preflight(("PUT",))


@router.put("/EditUser")
async def edit_user(
    request: schemas.EditUserRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.edit_user(request, user_id=user_id)
    return responses.envelope("User updated successfully")


@router.options("/DeleteUser")
async def delete_user_preflight() -> JSONResponse:
    return responses.preflight(("DELETE",))


@router.delete("/DeleteUser")
async def delete_user(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.delete_user(user_id=user_id)
    return responses.envelope("User deleted successfully")
