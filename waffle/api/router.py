from fastapi import APIRouter

from waffle.api.routes import health, puzzles

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(puzzles.router)

__all__ = ["api_router"]
