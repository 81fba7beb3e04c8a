"""Interactive console for the lending registry.

The console is the second entry point next to the HTTP API.  It runs
a text menu in the main thread and talks to the same ``LendingStore``
the API serves, so loans made here are immediately visible to API
clients and the other way round.

Each console owns one :class:`InteractiveSession`; logging out ends it.
Failures are shown as messages and the loop continues:

* Login menu: ``1`` login, ``2`` exit.
* Main menu: ``1`` search, ``2`` issue, ``3`` return, ``4`` list all
  items, ``5`` my loans, ``0`` logout.

Input and output are injectable so the loop can be driven by a script.
"""

import logging
from typing import Callable, Iterable, Optional

from .core.errors import (
    AuthenticationFailed,
    ItemNotFound,
    ItemUnavailable,
    LendingError,
    NoActiveTransaction,
)
from .core.store import LendingStore
from .services.records import Item, TransactionStatus

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
WriteLine = Callable[[str], None]


def format_item(item: Item) -> str:
    state = "available" if item.available else "on loan"
    return f"{item.item_id}  {item.title} by {item.author} [{item.category}] ({state})"


def describe_error(exc: LendingError) -> str:
    """Turn a registry failure into a console message."""
    if isinstance(exc, AuthenticationFailed):
        return "Invalid credentials."
    if isinstance(exc, ItemNotFound):
        return f"Item {exc.identifier} not found."
    if isinstance(exc, ItemUnavailable):
        return f"Item {exc.identifier} is currently unavailable."
    if isinstance(exc, NoActiveTransaction):
        return f"No active transaction found for item {exc.identifier}."
    return f"{exc.code}: {exc.message}"


class ConsoleApp:
    """Text-menu session loop over a shared store."""

    def __init__(
        self,
        store: LendingStore,
        read_line: Optional[ReadLine] = None,
        write_line: Optional[WriteLine] = None,
        api_url: Optional[str] = None,
    ) -> None:
        self.store = store
        self.session = store.open_session()
        self._read = read_line or input
        self._write = write_line or print
        self.api_url = api_url

    # ------------------------------------------------------------------
    # Menu handlers
    # ------------------------------------------------------------------
    def _handle_login(self) -> None:
        principal_id = self._read("Enter principal ID: ").strip()
        secret = self._read("Enter secret: ")
        try:
            principal = self.session.login(principal_id, secret)
        except AuthenticationFailed as exc:
            self._write(describe_error(exc))
            return
        self._write(f"Login successful! Welcome, {principal.name}")

    def _handle_search(self) -> None:
        query = self._read("Search query: ").strip()
        self._print_items(self.store.search_items(query))

    def _handle_list(self) -> None:
        self._print_items(self.store.list_items())

    def _handle_issue(self) -> None:
        item_id = self._read("Item ID: ").strip()
        principal = self.session.current
        try:
            transaction_id = self.store.issue(principal.principal_id, item_id)
        except LendingError as exc:
            self._write(describe_error(exc))
            return
        self._write(f"Item issued successfully! Transaction ID: {transaction_id}")

    def _handle_return(self) -> None:
        item_id = self._read("Item ID: ").strip()
        try:
            self.store.return_item(item_id)
        except LendingError as exc:
            self._write(describe_error(exc))
            return
        self._write("Item returned successfully.")

    def _handle_my_loans(self) -> None:
        principal = self.session.current
        loans = self.store.transactions(principal_id=principal.principal_id, status=TransactionStatus.OPEN)
        if not loans:
            self._write("You have no items on loan.")
            return
        for loan in loans:
            self._write(f"{loan.transaction_id}  {loan.item_id} since {loan.issue_date.isoformat()}")

    def _handle_logout(self) -> None:
        self.store.end_session(self.session)
        self._write("Logged out.")

    def _print_items(self, items: Iterable[Item]) -> None:
        found = False
        for item in items:
            found = True
            self._write(format_item(item))
        if not found:
            self._write("No matching items.")

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def _login_menu(self) -> bool:
        self._write("\n--- Login Menu ---")
        self._write("1. Login")
        self._write("2. Exit")
        choice = self._read("Enter choice: ").strip()
        if choice == "1":
            self._handle_login()
        elif choice == "2":
            return False
        else:
            self._write("Unknown choice.")
        return True

    def _main_menu(self) -> None:
        self._write("\n--- Main Menu ---")
        self._write("1. Search Items")
        self._write("2. Issue Item")
        self._write("3. Return Item")
        self._write("4. List All Items")
        self._write("5. My Loans")
        self._write("0. Logout")
        choice = self._read("Enter choice: ").strip()
        handlers = {
            "1": self._handle_search,
            "2": self._handle_issue,
            "3": self._handle_return,
            "4": self._handle_list,
            "5": self._handle_my_loans,
            "0": self._handle_logout,
        }
        handler = handlers.get(choice)
        if handler is None:
            self._write("Unknown choice.")
            return
        handler()

    def run(self) -> None:
        """Run until the user exits or input is exhausted."""
        self._write("Welcome to the Lending Registry (console)")
        if self.api_url:
            self._write(f"API server running on {self.api_url}")
        try:
            while True:
                if not self.session.is_authenticated:
                    if not self._login_menu():
                        break
                else:
                    self._main_menu()
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed")
        finally:
            self.session.end_session()
