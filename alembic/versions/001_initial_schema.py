"""Initial schema — registry, devices, tasks, token_mints, token_accounts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

U64 = sa.Numeric(20, 0)


def upgrade() -> None:
    op.create_table(
        "registry",
        sa.Column("key", sa.String(16), primary_key=True),
        sa.Column("admin_identity", sa.String(64), nullable=False),
        sa.Column("token_reference", sa.String(64), nullable=False),
        sa.Column("reward_pool_reference", sa.String(64), nullable=False),
        sa.Column("stake_pool_reference", sa.String(64), nullable=False),
        sa.Column("total_staked", U64, nullable=False, server_default="0"),
        sa.Column("total_rewards_distributed", U64, nullable=False, server_default="0"),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "devices",
        sa.Column("owner_identity", sa.String(64), primary_key=True),
        sa.Column("gpu_model", sa.String(64), nullable=False),
        sa.Column("vram", U64, nullable=False),
        sa.Column("hash_rate", U64, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("last_active", U64, nullable=False),
        sa.Column("total_rewards", U64, nullable=False, server_default="0"),
        sa.Column("referrer", sa.String(64), nullable=True),
        sa.Column("referral_rewards", U64, nullable=False, server_default="0"),
        sa.Column("staked_amount", U64, nullable=False, server_default="0"),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "tasks",
        sa.Column("owner_identity", sa.String(64), primary_key=True),
        sa.Column("task_id", sa.String(64), primary_key=True),
        sa.Column("min_vram", U64, nullable=False),
        sa.Column("min_hash_rate", U64, nullable=False),
        sa.Column("priority", sa.SmallInteger, nullable=False),
        sa.Column("assigned_device", sa.String(64), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("start_time", U64, nullable=False),
        sa.Column("end_time", U64, nullable=True),
        sa.Column("result_compute_time", U64, nullable=True),
        sa.Column("result_hash_rate", U64, nullable=True),
        sa.Column("result_success", sa.Boolean, nullable=True),
        sa.Column("reward_amount", U64, nullable=False, server_default="0"),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tasks_status", "tasks", ["status"])
    op.create_index("ix_tasks_assigned_device", "tasks", ["assigned_device"])

    op.create_table(
        "token_mints",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("decimals", sa.SmallInteger, nullable=False),
        sa.Column("authority", sa.String(64), nullable=False),
        sa.Column("supply", U64, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "token_accounts",
        sa.Column("address", sa.String(64), primary_key=True),
        sa.Column("mint", sa.String(64), sa.ForeignKey("token_mints.address"), nullable=False),
        sa.Column("owner", sa.String(64), nullable=False),
        sa.Column("balance", U64, nullable=False, server_default="0"),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_token_accounts_owner", "token_accounts", ["owner"])


def downgrade() -> None:
    op.drop_index("ix_token_accounts_owner", table_name="token_accounts")
    op.drop_table("token_accounts")
    op.drop_table("token_mints")
    op.drop_index("ix_tasks_assigned_device", table_name="tasks")
    op.drop_index("ix_tasks_status", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("devices")
    op.drop_table("registry")
