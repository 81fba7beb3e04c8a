"""Unified entry point for the console and the HTTP API.

This script builds the single in-memory ``LendingStore`` for the
process, serves the FastAPI application on it from a background thread
and runs the interactive console in the main thread.  Both entry
points operate on the same store.

Host and port are read from the ``API_HOST`` and ``API_PORT``
environment variables (defaults ``0.0.0.0`` and ``8080``).  See
``lending_registry_api/app/core/config.py`` for the other settings.

Usage:
    python run.py
"""
import logging
import threading

from uvicorn import Config, Server

from lending_registry_api.app.console import ConsoleApp
from lending_registry_api.app.core.config import settings
from lending_registry_api.app.core.logging_config import DEFAULT_LOGFILE, setup_logging
from lending_registry_api.app.core.store import get_store
from lending_registry_api.app.main import create_app


def start_api(store) -> tuple:
    """Start uvicorn on ``store`` in a daemon thread and return (server, thread)."""
    config = Config(
        app=create_app(store),
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Logging is already routed to the log file by setup_logging.
        log_config=None,
        access_log=False,
    )
    server = Server(config)
    thread = threading.Thread(target=server.run, name="lending-api", daemon=True)
    thread.start()
    return server, thread


def main() -> None:
    """Run the API server and the console until the console exits."""
    # The console owns the terminal, so log lines go to a file only.
    setup_logging(settings.log_level, settings.log_file or DEFAULT_LOGFILE, console=False)
    store = get_store()
    server, thread = start_api(store)
    console = ConsoleApp(store, api_url=f"http://localhost:{settings.api_port}")
    try:
        console.run()
    finally:
        server.should_exit = True
        thread.join(timeout=5)
        logging.getLogger(__name__).info("Lending registry stopped")


if __name__ == "__main__":
    main()
