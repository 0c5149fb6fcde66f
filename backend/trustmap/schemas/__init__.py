"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, seed files, API responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core records: schemas are API contracts, records are in-memory state
"""
