"""
Top-level package for the Book Catalog API.

All functionality lives in submodules under ``app``; the ASGI
application is ``book_catalog_api.app.main:app``.
"""

__all__ = []
