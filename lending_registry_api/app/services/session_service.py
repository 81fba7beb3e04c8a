"""
Interactive session state.

An ``InteractiveSession`` belongs to exactly one console loop and
remembers at most one logged-in principal.  Each console owns its own
session object; the API never reads one and resolves identity per
request instead.
"""

import logging
from typing import Optional

from .principal_service import PrincipalDirectory
from .records import Principal

logger = logging.getLogger(__name__)


class InteractiveSession:
    """Login state of a single console session."""

    def __init__(self, directory: PrincipalDirectory) -> None:
        self._directory = directory
        self._current: Optional[Principal] = None

    @property
    def current(self) -> Optional[Principal]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def login(self, principal_id: str, secret: str) -> Principal:
        """Authenticate and make the principal current.

        A failed attempt raises ``AuthenticationFailed`` and leaves the
        previous state untouched.
        """
        principal = self._directory.authenticate(principal_id, secret)
        self._current = principal
        logger.info("Principal %s started an interactive session", principal.principal_id)
        return principal

    def end_session(self) -> None:
        if self._current is not None:
            logger.info("Principal %s ended the interactive session", self._current.principal_id)
        self._current = None
