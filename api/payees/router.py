"""
Payee API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core import responses

from . import schemas, service

router = APIRouter()


@router.options("/Payees")
async def payees_preflight() -> JSONResponse:
    return responses.preflight(("GET", "POST", "PUT", "DELETE"))


@router.get("/Payees")
async def list_payees(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    rows = await service.list_payees(user_id=user_id)
    return responses.envelope("Payees fetched successfully", rows)


@router.post("/Payees")
async def create_payee(
    request: schemas.PayeeCreateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    row = await service.create_payee(request, user_id=user_id)
    return responses.envelope("Payee created successfully", row, status_code=201)


@router.put("/Payees")
async def update_payee(
    request: schemas.PayeeUpdateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.update_payee(request, user_id=user_id)
    return responses.envelope("Payee updated successfully")


@router.delete("/Payees")
async def delete_payee(
    request: schemas.PayeeDeleteRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.delete_payee(request, user_id=user_id)
    return responses.envelope("Payee and all associated subscriptions deleted successfully")
