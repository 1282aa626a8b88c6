"""
Application package initializer.

The project is split into ``core`` (configuration, logging, errors
and the JSON store), ``schemas`` (pydantic models), ``services``
(business rules) and ``api`` (FastAPI routers).
"""

from .main import app  # noqa: F401
