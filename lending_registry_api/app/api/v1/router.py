"""
Top‑level router for version 1 of the API.

This router aggregates the item, principal and loan routers under a
unified prefix.
"""

from fastapi import APIRouter

from .endpoints import items, loans, principals

router = APIRouter()

router.include_router(items.router, prefix="/items", tags=["items"])
router.include_router(principals.router, prefix="/principals", tags=["principals"])
router.include_router(loans.router, prefix="/loans", tags=["loans"])
