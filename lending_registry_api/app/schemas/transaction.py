"""
Pydantic models for loan transactions.

Issuing needs only the item; the borrowing principal is the one the
request's bearer token resolves to.  Returning is by item as well.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from lending_registry_api.app.services.records import TransactionStatus


class IssueRequest(BaseModel):
    item_id: str = Field(..., min_length=1, examples=["B001"])


class IssueResponse(BaseModel):
    transaction_id: str
    item_id: str
    principal_id: str


class ReturnRequest(BaseModel):
    item_id: str = Field(..., min_length=1, examples=["B001"])


class TransactionRead(BaseModel):
    transaction_id: str
    principal_id: str
    item_id: str
    issue_date: date
    return_date: Optional[date] = None
    status: TransactionStatus

    model_config = {
        "from_attributes": True,
    }
