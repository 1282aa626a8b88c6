"""
Main entrypoint for the Book Catalog API.

This module assembles the FastAPI application: logging, CORS, the
books router, error handlers and, when present, the static
front-end.  ``create_app`` builds the app, which is then instantiated
at module import time as ``app``, so it can be served with::

    uvicorn book_catalog_api.app.main:app --reload

Every error leaves the API as ``{"success": false, "message": ...}``
with the status code carried by the error class.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.v1.endpoints import health
from .api.v1.router import router as api_router
from .core.config import get_data_file_path, get_static_dir, settings
from .core.errors import BookCatalogError, PersistenceError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def book_catalog_error_handler(request: Request, exc: BookCatalogError) -> JSONResponse:
    body = {"success": False, "message": exc.message}
    if isinstance(exc, PersistenceError) and exc.cause is not None:
        body["error"] = str(exc.cause)
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Invalid request payload",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error", "error": str(exc)},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None, debug=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BookCatalogError, book_catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix="/health", tags=["health"])

    # Mounted last: a mount at "/" matches every path, so the API
    # routes above must be registered before it.
    static_dir = get_static_dir()
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        logger.info("Serving front-end from %s", static_dir)

    logger.info("Book data file: %s", get_data_file_path())
    return app


app = create_app()
