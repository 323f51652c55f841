"""
Entity API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core import responses

from . import schemas, service

router = APIRouter()


@router.options("/Entities")
async def entities_preflight() -> JSONResponse:
    return responses.preflight(("GET", "POST", "PUT", "DELETE"))


@router.get("/Entities")
async def list_entities(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    rows = await service.list_entities(user_id=user_id)
    return responses.envelope("Entities fetched successfully", rows)


@router.post("/Entities")
async def create_entity(
    request: schemas.EntityCreateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    row = await service.create_entity(request, user_id=user_id)
    return responses.envelope("Entity created successfully", row, status_code=201)


@router.put("/Entities")
async def update_entity(
    request: schemas.EntityUpdateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.update_entity(request, user_id=user_id)
    return responses.envelope("Entity updated successfully")


@router.delete("/Entities")
async def delete_entity(
    request: schemas.EntityDeleteRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.delete_entity(request, user_id=user_id)
    return responses.envelope("Entity and related records deleted successfully.")
