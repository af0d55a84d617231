"""Pydantic Schemas — request/response validation for API endpoints and stored records.

Invariants:
    - Schemas validate at system boundary (stored JSON, user input, API responses)
    - Domain types from core/ used for enum fields
    - Wire format is camelCase; Python attributes are snake_case

Design Decisions:
    - Separate from models: schemas are API/file contracts, models are SQL persistence
"""
