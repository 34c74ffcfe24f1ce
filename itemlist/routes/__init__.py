"""APIRouter registration for the item list service."""

from __future__ import annotations

from fastapi import APIRouter

from itemlist.routes.items import router as items_router

api_router = APIRouter()
api_router.include_router(items_router, tags=["Items"])

__all__ = ["api_router"]
