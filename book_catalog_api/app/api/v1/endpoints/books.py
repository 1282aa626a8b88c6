"""
Book endpoints.

These routes expose the CRUD and search API for books.  Handlers are
thin: they call ``BookService`` and wrap the result in the response
envelope.  Service errors propagate to the exception handlers
registered in ``main.create_app``, which produce the error envelope
and status code.

The search route has two path segments and therefore never clashes
with ``/{book_id}``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from book_catalog_api.app.schemas.book import (
    BookDetailResponse,
    BookListResponse,
    BookMutationResponse,
    BookPayload,
    BookSearchResponse,
)
from book_catalog_api.app.services.book_service import BookService, get_book_service

router = APIRouter()


@router.get("", response_model=BookListResponse)
async def list_books(service: BookService = Depends(get_book_service)) -> BookListResponse:
    """Return every book with the total count."""
    books = await service.list_books()
    return BookListResponse(count=len(books), data=books)


@router.get("/search/{query}", response_model=BookSearchResponse)
async def search_books(
    query: str,
    service: BookService = Depends(get_book_service),
) -> BookSearchResponse:
    """Search title, author and genre; echoes the query as received."""
    books = await service.search_books(query)
    return BookSearchResponse(count=len(books), query=query, data=books)


@router.get("/{book_id}", response_model=BookDetailResponse)
async def get_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> BookDetailResponse:
    """Retrieve a single book.  Returns HTTP 404 if it does not exist."""
    book = await service.get_book(book_id)
    return BookDetailResponse(data=book)


@router.post("", response_model=BookMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: Optional[BookPayload] = None,
    service: BookService = Depends(get_book_service),
) -> BookMutationResponse:
    """Create a book.  A missing body is treated like an empty one."""
    book = await service.create_book(payload or BookPayload())
    return BookMutationResponse(message="Book created successfully", data=book)


@router.put("/{book_id}", response_model=BookMutationResponse)
async def update_book(
    book_id: str,
    payload: Optional[BookPayload] = None,
    service: BookService = Depends(get_book_service),
) -> BookMutationResponse:
    book = await service.update_book(book_id, payload or BookPayload())
    return BookMutationResponse(message="Book updated successfully", data=book)


@router.delete("/{book_id}", response_model=BookMutationResponse)
async def delete_book(
    book_id: str,
    service: BookService = Depends(get_book_service),
) -> BookMutationResponse:
    """Delete a book and return it as it was before removal."""
    book = await service.delete_book(book_id)
    return BookMutationResponse(message="Book deleted successfully", data=book)
