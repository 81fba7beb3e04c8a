"""
In-memory records owned by the registry services.

Records refer to each other by identifier only: a transaction stores
the ``item_id`` and ``principal_id`` it links, never the objects.
Services hand out copies (``dataclasses.replace``) so callers cannot
mutate stored state behind the lock.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class TransactionStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass
class Item:
    item_id: str
    title: str
    author: str
    category: str = ""
    available: bool = True


@dataclass
class Principal:
    principal_id: str
    name: str
    role: str = "STUDENT"
    # PBKDF2 hash of the credential, see core.security.hash_password.
    secret: str = ""


@dataclass
class Transaction:
    transaction_id: str
    principal_id: str
    item_id: str
    issue_date: date
    return_date: Optional[date] = None
    status: TransactionStatus = TransactionStatus.OPEN
