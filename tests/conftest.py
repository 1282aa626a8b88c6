import itertools
import json

import pytest
from fastapi.testclient import TestClient

from book_catalog_api.app.core.store import JSONBookStore
from book_catalog_api.app.main import app
from book_catalog_api.app.services.book_service import BookService, get_book_service


SAMPLE_BOOKS = [
    {
        "id": "test-id-1",
        "title": "Test Book 1",
        "author": "Test Author 1",
        "isbn": "978-0-123456-78-9",
        "genre": "Fiction",
        "publishedYear": 2020,
        "description": "A test book for testing purposes",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    },
    {
        "id": "test-id-2",
        "title": "Test Book 2",
        "author": "Test Author 2",
        "isbn": "978-0-987654-32-1",
        "genre": "Non-Fiction",
        "publishedYear": 2021,
        "description": "Another test book",
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-01T00:00:00.000Z",
    },
]


def ticking_clock():
    """Clock returning a strictly increasing timestamp on every call."""
    seconds = itertools.count(1)
    return lambda: f"2025-01-01T00:00:{next(seconds):02d}.000Z"


def sequential_ids():
    counter = itertools.count(1)
    return lambda: f"book-{next(counter)}"


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "books.json"


@pytest.fixture
def seeded_file(data_file):
    data_file.write_text(json.dumps(SAMPLE_BOOKS, indent=2), encoding="utf-8")
    return data_file


@pytest.fixture
def store(data_file):
    return JSONBookStore(data_file)


@pytest.fixture
def service(store):
    return BookService(store, clock=ticking_clock(), id_factory=sequential_ids())


@pytest.fixture
def client(service):
    app.dependency_overrides[get_book_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def read_file(path):
    return json.loads(path.read_text(encoding="utf-8"))
