"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables, the same way for the server, the tests and
the command line helpers.  Defaults are provided for all fields so
the API starts without any configuration at all.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Book Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON file holding the whole book collection.  A
    # relative path is resolved against the project root by
    # ``get_data_file_path``.
    data_file: str = os.getenv("DATA_FILE", "books.json")

    # Prefix under which the books router is mounted.  The browser
    # front-end expects ``/api/books``.
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # Directory with the static front-end.  Mounted at ``/`` only if
    # it exists.
    static_dir: str = os.getenv("STATIC_DIR", "public")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*"))
    )


# Directory holding ``run.py`` and the ``book_catalog_api`` package.
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _resolve(path: str) -> Path:
    """Resolve ``path`` against the project root unless it is absolute."""
    if os.path.isabs(path):
        return Path(path)
    return (PROJECT_ROOT / path).resolve()


def get_data_file_path() -> Path:
    """Return the absolute path of the JSON data file."""
    return _resolve(settings.data_file)


def get_static_dir() -> Path:
    """Return the absolute path of the static front-end directory."""
    return _resolve(settings.static_dir)


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must therefore be set before this module is imported.
settings = Settings()
