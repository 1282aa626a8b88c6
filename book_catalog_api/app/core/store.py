"""
Flat-file JSON storage for the book collection.

The whole collection is stored as one JSON array in a single file and
is always read and written in full.  Reading is forgiving: a missing
file or content that is not a valid list of books yields an empty
collection.  Writing is strict: failures raise ``PersistenceError``.

Writes go to a temporary file in the target directory which then
replaces the data file with ``os.replace``, so a concurrent reader
sees either the old or the new collection, never a partial one.

Mutating callers wrap their load-modify-save cycle in ``mutation()``
to serialize cycles inside one process.  Separate processes sharing
a file are not coordinated; the last save wins.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from .errors import PersistenceError
from ..schemas.book import Book

logger = logging.getLogger(__name__)

_collection_adapter = TypeAdapter(List[Book])


class JSONBookStore:
    """Load and save the book collection as a JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> List[Book]:
        """Return the stored collection, or ``[]`` if there is none."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Data file %s does not exist yet", self.path)
            return []
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read data file %s: %s", self.path, exc)
            return []
        try:
            return _collection_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, SchemaError) as exc:
            logger.warning("Ignoring unparsable data file %s: %s", self.path, exc)
            return []

    def save(self, books: List[Book]) -> None:
        """Replace the stored collection with ``books``."""
        payload = json.dumps(
            [book.model_dump(by_alias=True) for book in books],
            indent=2,
            ensure_ascii=False,
        )
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            logger.error("Failed to write data file %s: %s", self.path, exc)
            raise PersistenceError("Failed to write to database", cause=exc) from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

    @contextmanager
    def mutation(self) -> Iterator[None]:
        """Hold the store's lock for one load-modify-save cycle."""
        with self._lock:
            yield
