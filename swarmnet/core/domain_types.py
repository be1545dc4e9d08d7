"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Identity and AccountAddress are opaque strings compared only for equality
    - Every counter is a u64: 0 <= value <= U64_MAX
    - gpu_model and task_id never exceed MAX_STRING_BYTES (UTF-8 encoded)
    - All valid task states encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Referral rate expressed as integer percent: payout math stays in integers
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Identity = NewType("Identity", str)
AccountAddress = NewType("AccountAddress", str)


# ─── Numeric Limits ──────────────────────────────────────────────

U8_MAX: int = 2**8 - 1
U64_MAX: int = 2**64 - 1

MAX_STRING_BYTES: int = 64

REFERRAL_PERCENT: int = 5

REGISTRY_KEY: str = "state"


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — maps to DB `status` column."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


# Each state has at most one successor; COMPLETED is terminal.
NEXT_TASK_STATUS: dict[TaskStatus, TaskStatus] = {
    TaskStatus.PENDING: TaskStatus.PROCESSING,
    TaskStatus.PROCESSING: TaskStatus.COMPLETED,
}


class Operation(str, Enum):
    """Mutating operations — used as the `operation` log field."""
    INITIALIZE = "initialize"
    REGISTER_DEVICE = "register_device"
    UPDATE_DEVICE_STATUS = "update_device_status"
    CREATE_TASK = "create_task"
    ASSIGN_TASK = "assign_task"
    COMPLETE_TASK = "complete_task"
    STAKE_TOKENS = "stake_tokens"
    DISTRIBUTE_REWARD = "distribute_reward"
    CLAIM_REFERRAL_REWARDS = "claim_referral_rewards"
