"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api import catalog, health, orders
from app.core.dependencies import get_catalog_repository
from app.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    await get_catalog_repository().refresh()
    yield


app = FastAPI(
    title="Voice Order Bridge",
    description="Turns voice-agent conversations into point-of-sale order requests",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["health"])
app.include_router(catalog.router, tags=["catalog"])
app.include_router(orders.router, tags=["orders"])


@app.get("/")
async def root():
    """Service information."""
    return {
        "message": "Voice Order Bridge API",
        "version": "0.1.0",
    }
