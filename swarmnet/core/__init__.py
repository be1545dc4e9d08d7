"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Rules raise SwarmNetError subclasses or return new frozen records
    - Token movements are returned as TokenTransfer instructions, never executed here

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
