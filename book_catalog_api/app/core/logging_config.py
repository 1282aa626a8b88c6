"""
Logging setup for the book catalog.

Everything the process logs, including uvicorn's server and access
lines, ends up in the same handlers on the root logger: a console
handler and, when ``LOG_FILE`` is set, a file handler.  ``run.py``
starts uvicorn with ``log_config=None`` so uvicorn keeps its hands
off and its loggers simply propagate to the root.

``DEBUG=true`` forces the ``DEBUG`` level regardless of ``LOG_LEVEL``.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "book_catalog.console"
FILE_HANDLER_NAME = "book_catalog.file"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str, debug: bool = False) -> int:
    """Map a level name to its number; unknown names mean ``INFO``."""
    if debug:
        return logging.DEBUG
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else logging.INFO


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(h.get_name() == name for h in logger.handlers)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Attach the book catalog handlers to the root logger.

    Safe to call repeatedly: handlers are recognised by name and never
    added twice, while the level is re-applied on every call.  Handlers
    installed by someone else (pytest, an embedding application) are
    left alone.
    """
    root = logging.getLogger()
    root.setLevel(resolve_level(level, debug))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(root, CONSOLE_HANDLER_NAME):
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile and not _has_handler(root, FILE_HANDLER_NAME):
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
