"""
Loan endpoints for API v1.

These routes issue and return items and list the ledger.  They rely on
the store to check availability and record the transaction under one
lock; concurrent issue requests for the same item therefore succeed
for exactly one caller, the rest receive ``ITEM_UNAVAILABLE``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from lending_registry_api.app.core.security import get_current_principal
from lending_registry_api.app.core.store import LendingStore, get_request_store
from lending_registry_api.app.schemas.transaction import (
    IssueRequest,
    IssueResponse,
    ReturnRequest,
    TransactionRead,
)
from lending_registry_api.app.services.records import Principal, TransactionStatus


router = APIRouter()


@router.post("/issue", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
def issue_item(
    payload: IssueRequest,
    current_principal: Principal = Depends(get_current_principal),
    store: LendingStore = Depends(get_request_store),
) -> IssueResponse:
    """Loan an item to the authenticated principal.

    Unknown items yield 404 (``ITEM_NOT_FOUND``); items already on loan
    yield 409 (``ITEM_UNAVAILABLE``).
    """
    transaction_id = store.issue(current_principal.principal_id, payload.item_id)
    return IssueResponse(
        transaction_id=transaction_id,
        item_id=payload.item_id,
        principal_id=current_principal.principal_id,
    )


@router.post("/return", response_model=TransactionRead)
def return_item(
    payload: ReturnRequest,
    current_principal: Principal = Depends(get_current_principal),
    store: LendingStore = Depends(get_request_store),
) -> TransactionRead:
    """Return an item and get back the closed transaction.

    Any authenticated principal may return any item.  If the item has
    no open loan, 409 with ``NO_ACTIVE_TRANSACTION`` is returned.
    """
    return TransactionRead.model_validate(store.return_item(payload.item_id))


@router.get("/", response_model=List[TransactionRead])
def list_transactions(
    principal_id: Optional[str] = Query(None),
    status_filter: Optional[TransactionStatus] = Query(None, alias="status"),
    current_principal: Principal = Depends(get_current_principal),
    store: LendingStore = Depends(get_request_store),
) -> List[TransactionRead]:
    """List ledger transactions in creation order.

    - **principal_id**: only loans of this principal.
    - **status**: ``OPEN`` or ``CLOSED``.
    """
    return [
        TransactionRead.model_validate(t)
        for t in store.transactions(principal_id=principal_id, status=status_filter)
    ]
