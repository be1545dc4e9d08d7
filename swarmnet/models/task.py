"""Task ORM — compute tasks keyed by (owner_identity, task_id).

Invariants:
    - Composite primary key: one task per (owner, task_id)
    - status is one of TaskStatus values
    - result_* columns are all NULL until completion
    - version increments on every UPDATE; a concurrent transition raises StaleDataError

Design Decisions:
    - Requirements and result flattened into columns: fixed shape, filterable
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, SmallInteger, Boolean, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from swarmnet.db.base import Base
from swarmnet.db.types import U64


class Task(Base):
    """Compute task and its lifecycle state."""
    __tablename__ = "tasks"

    owner_identity: Mapped[str] = mapped_column(String(64), primary_key=True)
    task_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    min_vram: Mapped[int] = mapped_column(U64, nullable=False)
    min_hash_rate: Mapped[int] = mapped_column(U64, nullable=False)
    priority: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    assigned_device: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    start_time: Mapped[int] = mapped_column(U64, nullable=False)
    end_time: Mapped[int | None] = mapped_column(U64, nullable=True)
    result_compute_time: Mapped[int | None] = mapped_column(U64, nullable=True)
    result_hash_rate: Mapped[int | None] = mapped_column(U64, nullable=True)
    result_success: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    reward_amount: Mapped[int] = mapped_column(U64, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_assigned_device", "assigned_device"),
    )
    __mapper_args__ = {"version_id_col": version}
