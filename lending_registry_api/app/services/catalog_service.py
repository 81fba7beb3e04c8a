"""
Business logic for the item catalog.

The ``CatalogService`` owns every ``Item`` record and its availability
flag.  Items are kept in a dict so lookups are direct and iteration
follows insertion order.  All access goes through the store lock
passed in at construction; availability is only ever changed by the
ledger through ``set_availability``.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Sequence

from ..core.errors import DuplicateIdentifier, ItemNotFound
from .records import Item

logger = logging.getLogger(__name__)


class ItemSearch:
    """Result of a catalog search.

    Holds a snapshot of the catalog taken when the search was issued and
    filters it lazily each time it is iterated, so the result can be
    walked any number of times and never reflects later mutations.
    """

    def __init__(self, snapshot: Sequence[Item], query: str) -> None:
        self._snapshot = tuple(snapshot)
        self.query = query
        self._needle = query.lower()

    def _matches(self, item: Item) -> bool:
        if not self._needle:
            return True
        return self._needle in item.title.lower() or self._needle in item.author.lower()

    def __iter__(self) -> Iterator[Item]:
        return (replace(item) for item in self._snapshot if self._matches(item))

    def __repr__(self) -> str:
        return f"ItemSearch(query={self.query!r})"


class CatalogService:
    """Catalog of loanable items."""

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock or threading.RLock()
        self._items: Dict[str, Item] = {}

    def add(self, item: Item) -> Item:
        """Insert ``item``; raise ``DuplicateIdentifier`` if its id is taken."""
        with self._lock:
            if item.item_id in self._items:
                raise DuplicateIdentifier("Item", item.item_id)
            self._items[item.item_id] = replace(item)
        logger.info("Added item %s '%s'", item.item_id, item.title)
        return replace(item)

    def remove(self, item_id: str) -> bool:
        """Remove the item if present and report whether anything was removed."""
        with self._lock:
            removed = self._items.pop(item_id, None) is not None
        if removed:
            logger.info("Removed item %s", item_id)
        return removed

    def find(self, item_id: str) -> Optional[Item]:
        with self._lock:
            item = self._items.get(item_id)
            return replace(item) if item is not None else None

    def search(self, query: str = "") -> ItemSearch:
        """Return items whose title or author contains ``query``, ignoring case.

        An empty query matches every item.  Matching happens lazily over
        a snapshot taken now, in catalog insertion order.
        """
        with self._lock:
            snapshot = [replace(item) for item in self._items.values()]
        return ItemSearch(snapshot, query or "")

    def set_availability(self, item_id: str, value: bool) -> None:
        """Flip the availability flag.  Reserved for the ledger."""
        with self._lock:
            item = self._items.get(item_id)
            if item is None:
                raise ItemNotFound(item_id)
            item.available = value

    def all(self) -> List[Item]:
        with self._lock:
            return [replace(item) for item in self._items.values()]

    def __contains__(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
