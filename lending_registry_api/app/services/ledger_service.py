"""
Business logic for loan transactions.

The ``LedgerService`` is the only component that mutates two kinds of
state at once: it creates or closes a ``Transaction`` and flips the
availability of the matching catalog item.  Both happen while holding
the store lock, which is the same lock the catalog uses, so no reader
ever sees an item marked unavailable without its open transaction or
the other way round.

Transaction lifecycle::

    issue ──> OPEN ──return──> CLOSED

No transition leaves CLOSED and transactions are never deleted.  Any
caller may return any item; the ledger does not check who borrowed it.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from ..core.clock import IdFactory, SystemClock, random_transaction_id
from ..core.errors import (
    DuplicateIdentifier,
    ItemNotFound,
    ItemUnavailable,
    NoActiveTransaction,
)
from .catalog_service import CatalogService
from .records import Transaction, TransactionStatus

logger = logging.getLogger(__name__)


class LedgerService:
    """Ledger of loan transactions coordinated with catalog availability."""

    def __init__(
        self,
        catalog: CatalogService,
        lock: Optional[threading.RLock] = None,
        clock=None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._catalog = catalog
        self._lock = lock or threading.RLock()
        self._clock = clock or SystemClock()
        self._new_id = id_factory or random_transaction_id
        self._transactions: Dict[str, Transaction] = {}
        # item_id -> transaction_id of its OPEN transaction
        self._open_by_item: Dict[str, str] = {}

    def issue(self, principal_id: str, item_id: str) -> str:
        """Loan ``item_id`` to ``principal_id`` and return the transaction id.

        Raises ``ItemNotFound`` if the item is not catalogued,
        ``ItemUnavailable`` if it is already on loan and
        ``DuplicateIdentifier`` if the id factory returns an id that is
        already in the ledger.
        """
        with self._lock:
            item = self._catalog.find(item_id)
            if item is None:
                raise ItemNotFound(item_id)
            if not item.available or item_id in self._open_by_item:
                raise ItemUnavailable(item_id)
            transaction_id = self._new_id()
            if transaction_id in self._transactions:
                raise DuplicateIdentifier("Transaction", transaction_id)
            self._catalog.set_availability(item_id, False)
            self._transactions[transaction_id] = Transaction(
                transaction_id=transaction_id,
                principal_id=principal_id,
                item_id=item_id,
                issue_date=self._clock.today(),
            )
            self._open_by_item[item_id] = transaction_id
        logger.info("Issued item %s to %s (transaction %s)", item_id, principal_id, transaction_id)
        return transaction_id

    def return_item(self, item_id: str) -> Transaction:
        """Close the open transaction of ``item_id`` and make the item available.

        Raises ``NoActiveTransaction`` if the item has no open loan.  An
        item removed from the catalog while on loan still has its
        transaction closed.
        """
        with self._lock:
            transaction_id = self._open_by_item.get(item_id)
            if transaction_id is None:
                raise NoActiveTransaction(item_id)
            if item_id in self._catalog:
                self._catalog.set_availability(item_id, True)
            transaction = self._transactions[transaction_id]
            transaction.return_date = self._clock.today()
            transaction.status = TransactionStatus.CLOSED
            del self._open_by_item[item_id]
            closed = replace(transaction)
        logger.info("Returned item %s (transaction %s)", item_id, transaction_id)
        return closed

    def find(self, transaction_id: str) -> Optional[Transaction]:
        with self._lock:
            transaction = self._transactions.get(transaction_id)
            return replace(transaction) if transaction is not None else None

    def open_transaction(self, item_id: str) -> Optional[Transaction]:
        """Return the open transaction for ``item_id``, if any."""
        with self._lock:
            transaction_id = self._open_by_item.get(item_id)
            if transaction_id is None:
                return None
            return replace(self._transactions[transaction_id])

    def transactions(
        self,
        principal_id: Optional[str] = None,
        status: Optional[TransactionStatus] = None,
    ) -> List[Transaction]:
        """List transactions in creation order, optionally filtered."""
        with self._lock:
            return [
                replace(t)
                for t in self._transactions.values()
                if (principal_id is None or t.principal_id == principal_id)
                and (status is None or t.status == status)
            ]
