import logging

import pytest

from book_catalog_api.app.core.logging_config import (
    CONSOLE_HANDLER_NAME,
    FILE_HANDLER_NAME,
    UVICORN_LOGGERS,
    resolve_level,
    setup_logging,
)


def _named(logger, name):
    return [h for h in logger.handlers if h.get_name() == name]


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_repeated_setup_adds_one_console_handler(root_logger):
    setup_logging("INFO")
    setup_logging("WARNING")

    assert len(_named(root_logger, CONSOLE_HANDLER_NAME)) == 1
    assert root_logger.level == logging.WARNING


def test_debug_flag_forces_debug_level(root_logger):
    setup_logging("ERROR", debug=True)
    assert root_logger.level == logging.DEBUG


@pytest.mark.parametrize("name, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("chatty", logging.INFO),
])
def test_resolve_level(name, expected):
    assert resolve_level(name) == expected


def test_log_file_receives_records(root_logger, tmp_path):
    logfile = tmp_path / "logs" / "catalog.log"
    setup_logging("INFO", str(logfile))
    setup_logging("INFO", str(logfile))

    assert len(_named(root_logger, FILE_HANDLER_NAME)) == 1
    logging.getLogger("book_catalog_api.test").info("stored a book")
    for handler in _named(root_logger, FILE_HANDLER_NAME):
        handler.flush()

    assert "stored a book" in logfile.read_text(encoding="utf-8")


def test_uvicorn_loggers_propagate_to_root(root_logger):
    access = logging.getLogger("uvicorn.access")
    stray = logging.StreamHandler()
    access.addHandler(stray)
    access.propagate = False

    setup_logging("INFO")

    for name in UVICORN_LOGGERS:
        logger = logging.getLogger(name)
        assert logger.handlers == []
        assert logger.propagate is True
