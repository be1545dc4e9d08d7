"""Infrastructure Layer — implementations of the core boundary protocols.

Invariants:
    - SqlRecordStore, SqlTokenLedger and SystemClock satisfy the Protocols in
      core/repository_protocols.py structurally
    - Everything here shares the operation's AsyncSession: one transaction per operation

Design Decisions:
    - SQL-backed token ledger as the reference adapter for the external ledger service
"""
