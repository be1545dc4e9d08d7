"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - u64 fields bounded 0..U64_MAX; byte-length limits re-checked by the core

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - u64 values serialized as JSON integers (Python ints are unbounded)
"""
