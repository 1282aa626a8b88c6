"""
Business logic for books.

``BookService`` implements validation, ISBN uniqueness, field
defaulting and search on top of ``JSONBookStore``.  Every call loads
the full collection afresh; mutating calls save the full collection
back before returning.  Validation and conflict checks happen before
anything is written, so a rejected request leaves the file untouched.
"""

import logging
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Callable, List, Tuple

from ..core.config import get_data_file_path
from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..core.store import JSONBookStore
from ..schemas.book import Book, BookPayload

logger = logging.getLogger(__name__)

CREATE_REQUIRED_MESSAGE = "Title and author are required fields"
UPDATE_REQUIRED_MESSAGE = "Title and author are required fields, please fill in the required fields"
DUPLICATE_ISBN_MESSAGE = "Book with this ISBN already exists"
NOT_FOUND_MESSAGE = "Book not found"


def utc_now_iso() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_book_id() -> str:
    return str(uuid.uuid4())


class BookService:
    """Service class for managing the book collection."""

    def __init__(
        self,
        store: JSONBookStore,
        clock: Callable[[], str] = utc_now_iso,
        id_factory: Callable[[], str] = new_book_id,
    ) -> None:
        self.store = store
        self.clock = clock
        self.id_factory = id_factory

    async def list_books(self) -> List[Book]:
        """Return every book in insertion order."""
        return self.store.load()

    async def get_book(self, book_id: str) -> Book:
        """Return the book with ``book_id`` or raise ``NotFoundError``."""
        books = self.store.load()
        _, book = self._find(books, book_id)
        return book

    async def create_book(self, payload: BookPayload) -> Book:
        """Validate ``payload``, append a new book and persist.

        Absent or empty optional fields take their defaults: ``isbn``
        and ``publishedYear`` become ``None``, ``genre`` becomes
        ``"Unknown"`` and ``description`` the empty string.
        """
        if not payload.title or not payload.author:
            raise ValidationError(CREATE_REQUIRED_MESSAGE)

        with self.store.mutation():
            books = self.store.load()
            if payload.isbn and any(book.isbn == payload.isbn for book in books):
                raise ConflictError(DUPLICATE_ISBN_MESSAGE)

            now = self.clock()
            book = Book(
                id=self.id_factory(),
                title=payload.title,
                author=payload.author,
                isbn=payload.isbn or None,
                genre=payload.genre or "Unknown",
                published_year=payload.published_year or None,
                description=payload.description or "",
                created_at=now,
                updated_at=now,
            )
            books.append(book)
            self.store.save(books)

        logger.info("Created book %s (%r by %r)", book.id, book.title, book.author)
        return book

    async def update_book(self, book_id: str, payload: BookPayload) -> Book:
        """Apply ``payload`` to an existing book and persist.

        ``title``, ``author`` and ``isbn`` are always replaced (an
        empty ``isbn`` clears it).  ``genre``, ``publishedYear`` and
        ``description`` are only replaced by non-empty values; an
        empty or missing value keeps what is stored.
        """
        with self.store.mutation():
            books = self.store.load()
            index, current = self._find(books, book_id)

            if not payload.title or not payload.author:
                raise ValidationError(UPDATE_REQUIRED_MESSAGE)

            if (
                payload.isbn
                and payload.isbn != current.isbn
                and any(book.isbn == payload.isbn for book in books)
            ):
                raise ConflictError(DUPLICATE_ISBN_MESSAGE)

            updated = current.model_copy(
                update={
                    "title": payload.title,
                    "author": payload.author,
                    "isbn": payload.isbn or None,
                    "genre": payload.genre or current.genre,
                    "published_year": payload.published_year or current.published_year,
                    "description": payload.description or current.description,
                    "updated_at": self.clock(),
                }
            )
            books[index] = updated
            self.store.save(books)

        logger.info("Updated book %s", book_id)
        return updated

    async def delete_book(self, book_id: str) -> Book:
        """Remove a book and persist; return it as it was stored."""
        with self.store.mutation():
            books = self.store.load()
            index, _ = self._find(books, book_id)
            removed = books.pop(index)
            self.store.save(books)

        logger.info("Deleted book %s", book_id)
        return removed

    async def search_books(self, query: str) -> List[Book]:
        """Case-insensitive substring search over title, author and genre."""
        needle = query.lower()
        return [
            book
            for book in self.store.load()
            if needle in book.title.lower()
            or needle in book.author.lower()
            or needle in book.genre.lower()
        ]

    @staticmethod
    def _find(books: List[Book], book_id: str) -> Tuple[int, Book]:
        for index, book in enumerate(books):
            if book.id == book_id:
                return index, book
        raise NotFoundError(NOT_FOUND_MESSAGE)


@lru_cache(maxsize=None)
def get_book_service() -> BookService:
    """FastAPI dependency returning the process-wide service.

    One instance means one store and therefore one mutation lock for
    every request handled by this process.
    """
    return BookService(JSONBookStore(get_data_file_path()))
