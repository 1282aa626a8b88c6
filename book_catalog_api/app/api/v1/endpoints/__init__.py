"""
Endpoint subpackage.

Each module defines an APIRouter for one domain.  Routers are
aggregated in ``router.py`` and included in the main application.
"""
