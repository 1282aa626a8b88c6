"""
Top-level router for the API.

This router aggregates the domain routers under one object that
``main.create_app`` mounts below ``settings.api_prefix``.
"""

from fastapi import APIRouter

from .endpoints import books

router = APIRouter()

router.include_router(books.router, prefix="/books", tags=["books"])
