"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record storage, token movements and time are accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - put_* never commits: the caller owns the transaction boundary

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core rules that consume their results are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from typing import Protocol

from swarmnet.core.domain_types import AccountAddress, Identity, TaskStatus
from swarmnet.core.records import (
    Device, GlobalRegistry, Task, TaskKey, TokenAccount, TokenTransfer,
)


class RecordStore(Protocol):
    """Keyed record storage: registry singleton, devices by owner, tasks by (owner, task_id)."""
    async def get_registry(self) -> GlobalRegistry | None: ...
    async def put_registry(self, registry: GlobalRegistry) -> None: ...
    async def get_device(self, owner: Identity) -> Device | None: ...
    async def put_device(self, device: Device) -> None: ...
    async def list_devices(
        self, active: bool | None = None, limit: int | None = 50, offset: int = 0,
    ) -> list[Device]: ...
    async def get_task(self, key: TaskKey) -> Task | None: ...
    async def put_task(self, task: Task) -> None: ...
    async def list_tasks(
        self,
        owner: Identity | None = None,
        status: TaskStatus | None = None,
        assigned_device: Identity | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[Task]: ...
    async def flush(self) -> None: ...


class TokenLedger(Protocol):
    """Exact-amount, authority-checked token movements."""
    async def create_mint(self, decimals: int, authority: Identity) -> AccountAddress: ...
    async def open_account(
        self, mint: AccountAddress, owner: Identity,
    ) -> AccountAddress: ...
    async def get_account(self, address: AccountAddress) -> TokenAccount | None: ...
    async def transfer(self, transfer: TokenTransfer) -> None: ...


class Clock(Protocol):
    """Unix timestamp source."""
    def now(self) -> int: ...
