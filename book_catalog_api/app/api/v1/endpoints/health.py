"""
Health endpoint.

Reports the API version and how many books the data file currently
holds.  An unreadable data file counts as empty, so this endpoint
only fails if the process itself is broken.
"""

from fastapi import APIRouter, Depends

from book_catalog_api.app.core.config import settings
from book_catalog_api.app.schemas.book import HealthResponse
from book_catalog_api.app.services.book_service import BookService, get_book_service

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def health(service: BookService = Depends(get_book_service)) -> HealthResponse:
    books = await service.list_books()
    return HealthResponse(status="ok", version=settings.api_version, count=len(books))
