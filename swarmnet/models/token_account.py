"""Token Ledger ORM — mints and balance accounts behind the SQL TokenLedger adapter.

Invariants:
    - Every account belongs to exactly one mint and one owner
    - balance is a u64 and never goes negative (checked before UPDATE)
    - version increments on every UPDATE; concurrent debits raise StaleDataError
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, SmallInteger, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from swarmnet.db.base import Base
from swarmnet.db.types import U64


class TokenMint(Base):
    __tablename__ = "token_mints"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    decimals: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    authority: Mapped[str] = mapped_column(String(64), nullable=False)
    supply: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


class TokenAccount(Base):
    __tablename__ = "token_accounts"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    mint: Mapped[str] = mapped_column(
        String(64), ForeignKey("token_mints.address"), nullable=False,
    )
    owner: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    balance: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
