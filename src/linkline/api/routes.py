"""API route registration."""

from fastapi import APIRouter

from linkline.api.handlers.health import router as health_router
from linkline.api.handlers.links import router as links_router
from linkline.api.handlers.title import router as title_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(title_router, tags=["titles"])
api_router.include_router(links_router, tags=["links"])
