"""
Subscription API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import dependencies as auth_dependencies
from core import responses

from . import schemas, service

router = APIRouter()


@router.options("/Subscriptions")
async def subscriptions_preflight() -> JSONResponse:
    return responses.preflight(("GET", "POST", "PUT", "DELETE"))


@router.get("/Subscriptions")
async def list_subscriptions(
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    rows = await service.list_subscriptions(user_id=user_id)
    return responses.envelope("Subscriptions fetched successfully", rows)


@router.post("/Subscriptions")
async def create_subscription(
    request: schemas.SubscriptionCreateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    row = await service.create_subscription(request, user_id=user_id)
    return responses.envelope("Subscription created successfully", row, status_code=201)


@router.put("/Subscriptions")
async def update_subscription(
    request: schemas.SubscriptionUpdateRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.update_subscription(request, user_id=user_id)
    return responses.envelope("Subscription updated successfully")


@router.delete("/Subscriptions")
async def delete_subscription(
    request: schemas.SubscriptionDeleteRequest,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> JSONResponse:
    await service.delete_subscription(request, user_id=user_id)
    return responses.envelope("Subscription deleted successfully")
