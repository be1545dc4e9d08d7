"""SwarmNet Ledger — state-transition and accounting service for a GPU compute marketplace.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
