"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules stay in core/
    - Enum-valued fields arrive as plain strings; core parses them into domain enums

Design Decisions:
    - Separate from core records: schemas are API contracts, records are domain state
"""
