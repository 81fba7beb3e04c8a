"""
Typed failures of the lending registry.

Every failure the catalog, directory or ledger can report is a
subclass of ``LendingError``.  Each carries a stable ``code`` and the
HTTP status the API renders it with, so both entry points can tell the
cases apart without parsing messages:

============================  =========================  ======
Exception                     code                       status
============================  =========================  ======
``DuplicateIdentifier``       ``DUPLICATE_IDENTIFIER``   409
``NotFound``                  ``NOT_FOUND``              404
``ItemNotFound``              ``ITEM_NOT_FOUND``         404
``ItemUnavailable``           ``ITEM_UNAVAILABLE``       409
``AuthenticationFailed``      ``AUTHENTICATION_FAILED``  401
``NoActiveTransaction``       ``NO_ACTIVE_TRANSACTION``  409
============================  =========================  ======
"""

from typing import Any, Dict, Optional


class LendingError(Exception):
    """Base class for all recoverable registry failures."""

    code = "LENDING_ERROR"
    http_status = 400

    def __init__(self, message: str, identifier: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def to_response(self) -> Dict[str, Any]:
        """Convert to the REST error envelope."""
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.identifier is not None:
            error["identifier"] = self.identifier
        return {"error": error}


class DuplicateIdentifier(LendingError):
    code = "DUPLICATE_IDENTIFIER"
    http_status = 409

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} {identifier} already exists", identifier)
        self.kind = kind


class NotFound(LendingError):
    code = "NOT_FOUND"
    http_status = 404


class ItemNotFound(NotFound):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} not found", item_id)


class ItemUnavailable(LendingError):
    code = "ITEM_UNAVAILABLE"
    http_status = 409

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} is currently unavailable", item_id)


class AuthenticationFailed(LendingError):
    code = "AUTHENTICATION_FAILED"
    http_status = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class NoActiveTransaction(LendingError):
    code = "NO_ACTIVE_TRANSACTION"
    http_status = 409

    def __init__(self, item_id: str) -> None:
        super().__init__(f"No active transaction found for item {item_id}", item_id)
