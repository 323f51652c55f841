import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, responses
from core.logging_config import setup_logging
from entities import router as entities_router
from payees import router as payees_router
from services import router as services_router
from subscriptions import router as subscriptions_router
from users import router as users_router

setup_logging()


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*").strip() or "*"
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="finance-tracker-api", lifespan=lifespan)

# Browser clients call this API cross-origin with a bearer token.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

responses.install_error_handlers(app)

app.include_router(entities_router.router, tags=["entities"])
app.include_router(services_router.router, tags=["services"])
app.include_router(payees_router.router, tags=["payees"])
app.include_router(subscriptions_router.router, tags=["subscriptions"])
app.include_router(users_router.router, tags=["users"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
