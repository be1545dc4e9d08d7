"""Services Layer — per-component handlers wrapping the pure core (impureim sandwich).

Invariants:
    - Handlers read records, call one core rule, execute its transfers, write records, flush
    - Handlers never commit: the route owns the transaction boundary
    - Handlers depend on core Protocols, not on SQLAlchemy

Design Decisions:
    - One handler class per component for locality (max ~5 methods each)
"""
