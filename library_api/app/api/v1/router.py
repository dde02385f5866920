"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import books, info

router = APIRouter()

router.include_router(books.router, prefix="/books", tags=["books"])
router.include_router(info.router, prefix="/info", tags=["info"])
