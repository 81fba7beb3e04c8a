"""
Application package initializer.

This package contains the FastAPI entrypoint, the interactive console
and the in-memory lending store they share.  The code is organised
into ``core`` (configuration, logging, errors, security, the store),
``services`` (catalog, principal directory, ledger, sessions),
``schemas`` (API payloads) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
