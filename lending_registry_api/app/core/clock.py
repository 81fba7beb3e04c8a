"""
Collaborators the ledger consumes: a clock and an identifier factory.

Both are substitutable so tests can pin "today" and produce
predictable transaction identifiers.
"""

import itertools
import uuid
from datetime import date
from typing import Callable, Iterator

IdFactory = Callable[[], str]


class SystemClock:
    """Clock backed by the local calendar date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock that always reports the same day until moved with ``set``."""

    def __init__(self, today: date) -> None:
        self._today = today

    def today(self) -> date:
        return self._today

    def set(self, today: date) -> None:
        self._today = today


def random_transaction_id() -> str:
    """Return an opaque 8 character token from a random UUID."""
    return uuid.uuid4().hex[:8]


def sequential_ids(prefix: str = "T", start: int = 1, width: int = 7) -> IdFactory:
    """Return a factory producing ``T0000001``, ``T0000002`` and so on."""
    counter: Iterator[int] = itertools.count(start)
    return lambda: f"{prefix}{next(counter):0{width}d}"
