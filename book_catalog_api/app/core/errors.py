"""Error hierarchy for the book catalog.

Every failure of a service operation is one of the four kinds below.
Each class carries the HTTP status the transport layer answers with;
the mapping to a JSON response lives in ``main.create_app``.

Problems while *reading* the data file are not errors: the store
treats them as an empty collection.
"""

from typing import Optional


class BookCatalogError(Exception):
    """Base class for all book catalog errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(BookCatalogError):
    """Required input is missing or invalid."""

    status_code = 400


class ConflictError(BookCatalogError):
    """A uniqueness rule (ISBN) would be violated."""

    status_code = 400


class NotFoundError(BookCatalogError):
    """No book with the requested id."""

    status_code = 404


class PersistenceError(BookCatalogError):
    """Writing the collection to storage failed."""

    status_code = 500

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
