"""
Main entrypoint for the Lending Registry API.

This module assembles the FastAPI application, sets up logging, CORS
and error rendering, and includes versioned routers.  The
``create_app`` function builds and configures the app around a
``LendingStore``; the module-level ``app`` uses the process-wide store
so it can be served directly, e.g.::

    uvicorn lending_registry_api.app.main:app --reload

``run.py`` instead passes the store it shares with the console loop.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import LendingError
from .core.logging_config import setup_logging
from .core.store import LendingStore, get_store

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Render registry failures as ``{"error": {"code", "message"}}``."""

    @app.exception_handler(LendingError)
    async def lending_error_handler(request: Request, exc: LendingError) -> JSONResponse:
        logger.warning("%s on %s: %s", exc.code, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def create_app(store: Optional[LendingStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[LendingStore]
        The store requests operate on.  Defaults to the process-wide
        store returned by ``get_store``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the store and
    # routers can log during setup.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.store = store if store is not None else get_store()

    # Browser clients call the API from other origins; preflight
    # OPTIONS requests are answered by the middleware.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
