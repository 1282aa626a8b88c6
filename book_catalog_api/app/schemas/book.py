"""
Pydantic schemas for books.

Attribute names are snake_case in Python and camelCase on the wire
and on disk (``publishedYear``, ``createdAt``, ``updatedAt``).  Both
spellings are accepted on input; output is always by alias.

Input is lenient in the same places the browser form is: an empty
``publishedYear`` means "no year", and a numeric ``isbn`` is kept as
its string form.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _isbn_to_str(v: Any) -> Any:
    # bool is an int subclass but never an ISBN
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Book(CamelModel):
    """A stored book record."""

    id: str
    title: str
    author: str
    isbn: Optional[str] = None
    genre: str = "Unknown"
    published_year: Optional[int] = None
    description: str = ""
    created_at: str
    updated_at: str

    @field_validator("isbn", mode="before")
    @classmethod
    def numeric_isbn_as_text(cls, v):
        return _isbn_to_str(v)


class BookPayload(CamelModel):
    """Request body for creating or updating a book.

    Every member is optional here.  Whether ``title`` and ``author``
    are present is decided by ``BookService`` so that clients get
    the service's fixed error messages rather than schema errors.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = Field(None, description="Year of publication")
    description: Optional[str] = None

    @field_validator("isbn", mode="before")
    @classmethod
    def numeric_isbn_as_text(cls, v):
        return _isbn_to_str(v)

    @field_validator("published_year", mode="before")
    @classmethod
    def blank_year_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BookListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[Book]


class BookDetailResponse(BaseModel):
    success: bool = True
    data: Book


class BookMutationResponse(BaseModel):
    success: bool = True
    message: str
    data: Book


class BookSearchResponse(BaseModel):
    success: bool = True
    count: int
    query: str
    data: List[Book]


class HealthResponse(BaseModel):
    status: str
    version: str
    count: int
