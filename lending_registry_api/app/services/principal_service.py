"""
Business logic for principals.

The ``PrincipalDirectory`` stores registered identities in memory and
checks credentials.  Secrets are hashed on registration with the
PBKDF2 helpers from ``core.security``; authentication succeeds only
when the identifier exists and the given secret matches exactly.
There is no lockout or rate limiting.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from ..core.errors import AuthenticationFailed, DuplicateIdentifier
from .records import Principal

logger = logging.getLogger(__name__)


class PrincipalDirectory:
    """Directory of registered principals."""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock or threading.RLock()
        self._principals: Dict[str, Principal] = {}

    def register(self, principal: Principal, secret: Optional[str] = None) -> Principal:
        """Register ``principal`` and return it without its secret.

        ``secret`` is the plain credential; when omitted,
        ``principal.secret`` is taken as the plain credential.  Raises
        ``DuplicateIdentifier`` if the identifier is already registered.
        """
        from lending_registry_api.app.core.security import hash_password

        plain = secret if secret is not None else principal.secret
        # Hash outside the lock; PBKDF2 is deliberately slow.
        stored = replace(principal, secret=hash_password(plain))
        with self._lock:
            if principal.principal_id in self._principals:
                raise DuplicateIdentifier("Principal", principal.principal_id)
            self._principals[principal.principal_id] = stored
        logger.info("Registered principal %s with role %s", principal.principal_id, principal.role)
        return replace(stored, secret="")

    def authenticate(self, principal_id: str, secret: str) -> Principal:
        """Return the principal if ``secret`` matches, else raise ``AuthenticationFailed``."""
        from lending_registry_api.app.core.security import verify_password

        with self._lock:
            stored = self._principals.get(principal_id)
        if stored is None or not verify_password(secret or "", stored.secret):
            raise AuthenticationFailed()
        return replace(stored, secret="")

    def get(self, principal_id: str) -> Optional[Principal]:
        with self._lock:
            stored = self._principals.get(principal_id)
        return replace(stored, secret="") if stored is not None else None

    def all(self) -> List[Principal]:
        with self._lock:
            return [replace(p, secret="") for p in self._principals.values()]
