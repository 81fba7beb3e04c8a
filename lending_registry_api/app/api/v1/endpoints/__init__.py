"""
Endpoint subpackage for API v1.

Each module in this package defines an APIRouter for one kind of
record (items, principals, loans).  The routers are aggregated in
``router.py`` at the package level and then included in the main
application.

Handlers are plain ``def`` functions so that uvicorn runs them in its
worker threadpool; concurrent requests therefore reach the store from
several threads at once, and rely on the store lock for consistency.
"""
