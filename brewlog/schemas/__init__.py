"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules live in core/enforce_*
    - Symbolic fields (roast level, brew method, equipment type) bound through symbolic_fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
