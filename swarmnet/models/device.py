"""Device ORM — one row per device owner.

Invariants:
    - owner_identity is the primary key (at most one device per owner)
    - gpu_model column is sized for 64 bytes of UTF-8
    - version increments on every UPDATE; a stale write raises StaleDataError
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from swarmnet.db.base import Base
from swarmnet.db.types import U64


class Device(Base):
    """Registered GPU device with staking and reward accumulators."""
    __tablename__ = "devices"

    owner_identity: Mapped[str] = mapped_column(String(64), primary_key=True)
    gpu_model: Mapped[str] = mapped_column(String(64), nullable=False)
    vram: Mapped[int] = mapped_column(U64, nullable=False)
    hash_rate: Mapped[int] = mapped_column(U64, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_active: Mapped[int] = mapped_column(U64, nullable=False)
    total_rewards: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    referrer: Mapped[str | None] = mapped_column(String(64), nullable=True)
    referral_rewards: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    staked_amount: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __mapper_args__ = {"version_id_col": version}
