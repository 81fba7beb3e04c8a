"""
The in-memory store shared by the console and the API.

There is exactly one ``LendingStore`` per process.  It owns the
catalog, the principal directory and the ledger, and the single
reentrant lock all three use.  Every mutation (and every read) runs
inside that lock; ``issue`` and ``return_item`` hold it for their whole
duration, so the "at most one open transaction per item" rule holds no
matter how console input and concurrent requests interleave.

``init_store`` seeds the demo catalog and principals on startup and
``get_request_store`` is a helper dependency for FastAPI routes.
"""

import logging
import threading
from dataclasses import replace
from typing import List, Optional

from fastapi import Request

from .clock import IdFactory, SystemClock
from .config import settings
from ..services.catalog_service import CatalogService, ItemSearch
from ..services.ledger_service import LedgerService
from ..services.principal_service import PrincipalDirectory
from ..services.records import Item, Principal, Transaction, TransactionStatus
from ..services.session_service import InteractiveSession

logger = logging.getLogger(__name__)


DEMO_ITEMS = (
    Item("B001", "Wings of Fire", "A.P.J. Abdul Kalam", "Autobiography"),
    Item("B002", "The White Tiger", "Aravind Adiga", "Fiction"),
    Item("B003", "Malgudi Days", "R.K. Narayan", "Short Stories"),
    Item("B004", "The God of Small Things", "Arundhati Roy", "Drama"),
    Item("B005", "Train to Pakistan", "Khushwant Singh", "Historical Fiction"),
)

# (principal, plain secret)
DEMO_PRINCIPALS = (
    (Principal("A001", "Admin User", "ADMIN"), "admin123"),
    (Principal("S001", "John Doe", "STUDENT"), "student123"),
)


class LendingStore:
    """Catalog, directory and ledger behind one mutual-exclusion scope."""

    def __init__(self, clock=None, id_factory: Optional[IdFactory] = None) -> None:
        self.lock = threading.RLock()
        self.catalog = CatalogService(self.lock)
        self.directory = PrincipalDirectory(self.lock)
        self.ledger = LedgerService(
            self.catalog,
            self.lock,
            clock=clock or SystemClock(),
            id_factory=id_factory,
        )

    # Principals -------------------------------------------------------

    def register_principal(self, principal: Principal, secret: Optional[str] = None) -> Principal:
        return self.directory.register(principal, secret)

    def authenticate(self, principal_id: str, secret: str) -> Principal:
        return self.directory.authenticate(principal_id, secret)

    def open_session(self) -> InteractiveSession:
        return InteractiveSession(self.directory)

    def end_session(self, session: InteractiveSession) -> None:
        session.end_session()

    # Catalog ----------------------------------------------------------

    def search_items(self, query: str = "") -> ItemSearch:
        return self.catalog.search(query)

    def list_items(self) -> List[Item]:
        return self.catalog.all()

    def find_item(self, item_id: str) -> Optional[Item]:
        return self.catalog.find(item_id)

    def add_item(self, item: Item) -> Item:
        """Catalogue ``item``; its availability follows the ledger, not the caller."""
        with self.lock:
            available = self.ledger.open_transaction(item.item_id) is None
            return self.catalog.add(replace(item, available=available))

    def remove_item(self, item_id: str) -> bool:
        return self.catalog.remove(item_id)

    # Ledger -----------------------------------------------------------

    def issue(self, principal_id: str, item_id: str) -> str:
        return self.ledger.issue(principal_id, item_id)

    def return_item(self, item_id: str) -> Transaction:
        return self.ledger.return_item(item_id)

    def transactions(
        self,
        principal_id: Optional[str] = None,
        status: Optional[TransactionStatus] = None,
    ) -> List[Transaction]:
        return self.ledger.transactions(principal_id=principal_id, status=status)


def init_store(store: LendingStore) -> LendingStore:
    """Populate ``store`` with the demo items and principals."""
    for item in DEMO_ITEMS:
        store.add_item(item)
    for principal, secret in DEMO_PRINCIPALS:
        store.register_principal(principal, secret)
    logger.info(
        "Seeded store with %d items and %d principals", len(DEMO_ITEMS), len(DEMO_PRINCIPALS)
    )
    return store


_store: Optional[LendingStore] = None
_store_lock = threading.Lock()


def get_store() -> LendingStore:
    """Return the process-wide store, creating (and seeding) it on first use."""
    global _store
    with _store_lock:
        if _store is None:
            store = LendingStore()
            if settings.seed_demo_data:
                init_store(store)
            _store = store
        return _store


def get_request_store(request: Request) -> LendingStore:
    """FastAPI dependency returning the store the application was built with."""
    return request.app.state.store
