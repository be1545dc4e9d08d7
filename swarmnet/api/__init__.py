"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Mutating routes commit the session only after the handler returns

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
