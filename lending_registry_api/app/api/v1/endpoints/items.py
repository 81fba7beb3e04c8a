"""
Catalog endpoints for API v1.

Searching and reading items is public.  Adding and removing items
requires a valid bearer token; no role is checked beyond identity.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from lending_registry_api.app.core.errors import ItemNotFound
from lending_registry_api.app.core.security import get_current_principal
from lending_registry_api.app.core.store import LendingStore, get_request_store
from lending_registry_api.app.schemas.item import ItemCreate, ItemRead, ItemRemoved
from lending_registry_api.app.services.records import Item, Principal


router = APIRouter()


@router.get("/", response_model=List[ItemRead])
def search_items(
    q: Optional[str] = Query(None, description="Case-insensitive title or author fragment"),
    store: LendingStore = Depends(get_request_store),
) -> List[ItemRead]:
    """Search the catalog by title or author.

    Without ``q`` every item is returned, in catalog order.
    """
    items = store.search_items(q) if q else store.list_items()
    return [ItemRead.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=ItemRead)
def get_item(
    item_id: str = Path(..., description="Identifier of the item"),
    store: LendingStore = Depends(get_request_store),
) -> ItemRead:
    """Retrieve a single item.  Raises 404 if it is not catalogued."""
    item = store.find_item(item_id)
    if item is None:
        raise ItemNotFound(item_id)
    return ItemRead.model_validate(item)


@router.post("/", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
def add_item(
    payload: ItemCreate,
    current_principal: Principal = Depends(get_current_principal),
    store: LendingStore = Depends(get_request_store),
) -> ItemRead:
    """Add an item to the catalog.  A duplicate identifier yields 409."""
    item = store.add_item(Item(**payload.model_dump()))
    return ItemRead.model_validate(item)


@router.delete("/{item_id}", response_model=ItemRemoved)
def remove_item(
    item_id: str = Path(..., description="Identifier of the item"),
    current_principal: Principal = Depends(get_current_principal),
    store: LendingStore = Depends(get_request_store),
) -> ItemRemoved:
    """Remove an item.  Removing an unknown item is not an error."""
    return ItemRemoved(item_id=item_id, removed=store.remove_item(item_id))
