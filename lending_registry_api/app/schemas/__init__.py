"""
Pydantic schema definitions for API payloads.

Each record kind (items, principals, transactions) defines its own
Pydantic models for request and response bodies.  Schemas are kept
separate from the in-memory records so the API representation never
leaks stored secrets.
"""
