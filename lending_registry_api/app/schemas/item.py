"""
Pydantic models for catalog items.

``ItemCreate`` is accepted when adding an item; availability is not
part of it, a new item is available unless the ledger still holds an
open loan for its identifier.  ``ItemRead`` adds the availability flag for
responses.
"""

from pydantic import BaseModel, Field


class ItemBase(BaseModel):
    item_id: str = Field(..., min_length=1, examples=["B006"])
    title: str = Field(..., min_length=1, examples=["The Guide"])
    author: str = Field(..., examples=["R.K. Narayan"])
    category: str = Field("", examples=["Fiction"])


class ItemCreate(ItemBase):
    """Schema for adding an item to the catalog."""
    pass


class ItemRead(ItemBase):
    """Schema for reading an item from the API."""

    available: bool

    model_config = {
        "from_attributes": True,
    }


class ItemRemoved(BaseModel):
    item_id: str
    removed: bool
