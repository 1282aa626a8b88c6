import json
import os
from unittest.mock import patch

import pytest

from book_catalog_api.app.core.errors import PersistenceError
from book_catalog_api.app.core.store import JSONBookStore
from book_catalog_api.app.schemas.book import Book

from .conftest import SAMPLE_BOOKS, read_file


def test_load_returns_books_from_file(seeded_file):
    books = JSONBookStore(seeded_file).load()

    assert [b.id for b in books] == ["test-id-1", "test-id-2"]
    assert books[0].published_year == 2020
    assert books[1].created_at == "2024-01-01T00:00:00.000Z"


def test_load_missing_file_is_empty(store):
    assert store.load() == []


def test_load_empty_file_is_empty(data_file, store):
    data_file.write_text("", encoding="utf-8")
    assert store.load() == []


def test_load_corrupt_json_is_empty(data_file, store):
    data_file.write_text("{ invalid json content", encoding="utf-8")
    assert store.load() == []


def test_load_wrong_shape_is_empty(data_file, store):
    data_file.write_text(json.dumps({"books": SAMPLE_BOOKS}), encoding="utf-8")
    assert store.load() == []

    data_file.write_text(json.dumps([{"title": "no id"}]), encoding="utf-8")
    assert store.load() == []


def test_load_fills_optional_fields(data_file, store):
    data_file.write_text(
        json.dumps([{
            "id": "1",
            "title": "T",
            "author": "A",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        }]),
        encoding="utf-8",
    )
    (book,) = store.load()
    assert book.isbn is None
    assert book.genre == "Unknown"
    assert book.published_year is None
    assert book.description == ""


def test_load_numeric_isbn_as_text(data_file, store):
    record = dict(SAMPLE_BOOKS[0], isbn=9780123456789)
    data_file.write_text(json.dumps([record]), encoding="utf-8")

    (book,) = store.load()
    assert book.isbn == "9780123456789"


def test_save_writes_camel_case_array(data_file, store):
    books = [Book.model_validate(raw) for raw in SAMPLE_BOOKS]
    store.save(books)

    assert read_file(data_file) == SAMPLE_BOOKS
    assert data_file.read_text(encoding="utf-8").startswith("[\n  {")


def test_save_then_load_round_trip(seeded_file):
    store = JSONBookStore(seeded_file)
    first = store.load()
    store.save(first)

    assert store.load() == first
    assert read_file(seeded_file) == SAMPLE_BOOKS


def test_save_preserves_special_characters(data_file, store):
    book = Book.model_validate({
        **SAMPLE_BOOKS[0],
        "title": "Ünïcödé ☃",
        "description": 'quotes "test" and apostrophes\'s\nnewline',
    })
    store.save([book])

    (loaded,) = store.load()
    assert loaded.title == "Ünïcödé ☃"
    assert loaded.description == 'quotes "test" and apostrophes\'s\nnewline'


def test_save_creates_parent_directories(tmp_path):
    store = JSONBookStore(tmp_path / "nested" / "dir" / "books.json")
    store.save([])
    assert read_file(store.path) == []


def test_save_failure_raises_persistence_error(seeded_file):
    store = JSONBookStore(seeded_file)
    books = store.load()

    with patch("book_catalog_api.app.core.store.os.replace", side_effect=PermissionError("denied")):
        with pytest.raises(PersistenceError) as excinfo:
            store.save(books[:1])

    assert excinfo.value.message == "Failed to write to database"
    assert isinstance(excinfo.value.cause, PermissionError)
    assert excinfo.value.__cause__ is excinfo.value.cause
    # Old contents intact and no temporary files left behind.
    assert read_file(seeded_file) == SAMPLE_BOOKS
    assert os.listdir(seeded_file.parent) == ["books.json"]


def test_save_into_directory_path_fails(tmp_path):
    target = tmp_path / "is-a-directory"
    target.mkdir()
    with pytest.raises(PersistenceError):
        JSONBookStore(target).save([])
