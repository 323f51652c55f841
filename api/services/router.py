"""
Service API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core import responses

from . import schemas, service

router = APIRouter()


@router.options("/Services")
async def services_preflight() -> JSONResponse:
    return responses.preflight(("GET", "POST", "PUT", "DELETE"))


@router.get("/Services")
async def list_services(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    rows = await service.list_services(user_id=user_id)
    return responses.envelope("Services fetched successfully", rows)


@router.post("/Services")
async def create_service(
    request: schemas.ServiceCreateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    row = await service.create_service(request, user_id=user_id)
    return responses.envelope("Service created successfully", row, status_code=201)


@router.put("/Services")
async def update_service(
    request: schemas.ServiceUpdateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.update_service(request, user_id=user_id)
    return responses.envelope("Service updated successfully")


@router.delete("/Services")
async def delete_service(
    request: schemas.ServiceDeleteRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.delete_service(request, user_id=user_id)
    return responses.envelope("Service and related records deleted successfully.")
