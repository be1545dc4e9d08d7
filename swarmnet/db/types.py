"""Column Types — unsigned 64-bit integers for ledger counters.

Invariants:
    - Values round-trip as Python int, never Decimal or float
    - PostgreSQL stores NUMERIC(20, 0), wide enough for 2**64 - 1

Design Decisions:
    - TypeDecorator over BigInteger: BIGINT is signed and tops out at 2**63 - 1
    - SQLite (tests) uses INTEGER affinity to avoid the Decimal-as-float bind path
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric
from sqlalchemy.types import TypeDecorator


class U64(TypeDecorator):
    """Unsigned 64-bit integer column."""

    impl = Numeric(20, 0)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(Integer())
        return dialect.type_descriptor(Numeric(20, 0))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return int(value)
        return Decimal(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
