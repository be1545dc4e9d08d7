"""Records — pure dataclasses for every keyed record the core mutates.

Invariants:
    - Records are frozen: core rules return new instances via dataclasses.replace
    - Device is keyed by owner; Task by (owner, task_id); GlobalRegistry is a singleton
    - TokenAccount is a read-only view of a ledger account (owned by the TokenLedger)
    - TokenTransfer is an instruction; the shell executes it, the core never does

Design Decisions:
    - Frozen dataclasses over ORM objects: core stays free of IO and session state
    - `version` is carried through unchanged so the shell can detect concurrent writes
"""

from dataclasses import dataclass

from swarmnet.core.domain_types import AccountAddress, Identity, TaskStatus


@dataclass(frozen=True)
class GlobalRegistry:
    """Singleton holding admin identity, token references and running totals."""
    admin_identity: Identity
    token_reference: AccountAddress
    reward_pool_reference: AccountAddress
    stake_pool_reference: AccountAddress
    total_staked: int = 0
    total_rewards_distributed: int = 0
    version: int | None = None


@dataclass(frozen=True)
class Device:
    """One GPU device per owner."""
    owner_identity: Identity
    gpu_model: str
    vram: int
    hash_rate: int
    is_active: bool
    last_active: int
    total_rewards: int = 0
    referrer: Identity | None = None
    referral_rewards: int = 0
    staked_amount: int = 0
    version: int | None = None


@dataclass(frozen=True)
class TaskRequirements:
    min_vram: int
    min_hash_rate: int
    priority: int


@dataclass(frozen=True)
class TaskResult:
    compute_time: int
    hash_rate: int
    success: bool


@dataclass(frozen=True)
class TaskKey:
    owner_identity: Identity
    task_id: str

    def __str__(self) -> str:
        return f"{self.owner_identity}/{self.task_id}"


@dataclass(frozen=True)
class Task:
    """Compute task driven through pending -> processing -> completed."""
    owner_identity: Identity
    task_id: str
    requirements: TaskRequirements
    status: TaskStatus
    start_time: int
    assigned_device: Identity | None = None
    end_time: int | None = None
    result: TaskResult | None = None
    reward_amount: int = 0
    version: int | None = None

    @property
    def key(self) -> TaskKey:
        return TaskKey(self.owner_identity, self.task_id)


@dataclass(frozen=True)
class TokenAccount:
    address: AccountAddress
    owner: Identity
    mint: AccountAddress
    balance: int = 0


@dataclass(frozen=True)
class TokenTransfer:
    """Exact-amount transfer instruction for the TokenLedger."""
    source: AccountAddress
    destination: AccountAddress
    authority: Identity
    amount: int
