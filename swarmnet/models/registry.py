"""Registry ORM — the global registry singleton row.

Invariants:
    - Exactly one row, keyed by REGISTRY_KEY ("state")
    - Counters are u64 (NUMERIC(20, 0))
    - version increments on every UPDATE; a stale write raises StaleDataError

Design Decisions:
    - Singleton as a keyed row rather than a config table: same store contract as devices/tasks
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from swarmnet.db.base import Base
from swarmnet.db.types import U64


class Registry(Base):
    """Global registry — admin identity, token references, running totals."""
    __tablename__ = "registry"

    key: Mapped[str] = mapped_column(String(16), primary_key=True)
    admin_identity: Mapped[str] = mapped_column(String(64), nullable=False)
    token_reference: Mapped[str] = mapped_column(String(64), nullable=False)
    reward_pool_reference: Mapped[str] = mapped_column(String(64), nullable=False)
    stake_pool_reference: Mapped[str] = mapped_column(String(64), nullable=False)
    total_staked: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    total_rewards_distributed: Mapped[int] = mapped_column(
        U64, nullable=False, default=0,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
