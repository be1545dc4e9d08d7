"""Route Dependencies — caller identity and handler construction.

Invariants:
    - Mutating routes require X-Caller-Identity; its absence is UnauthorizedError
    - Caller identity and path identities are at most 64 bytes (400 otherwise)
    - Every handler built for a request shares that request's AsyncSession
    - The task policy is read from settings once per request

Design Decisions:
    - Identity header over in-process signature checks: the gateway in front of the
      service authenticates callers; this service only compares identities
"""

from typing import Annotated

from fastapi import Depends, Header, Path
from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.config import Settings, get_settings
from swarmnet.core.checked_math import require_max_bytes
from swarmnet.core.domain_types import MAX_STRING_BYTES, Identity
from swarmnet.core.errors import UnauthorizedError
from swarmnet.infrastructure.clock import SystemClock
from swarmnet.infrastructure.database import get_db
from swarmnet.infrastructure.record_store import SqlRecordStore
from swarmnet.infrastructure.token_ledger import SqlTokenLedger
from swarmnet.services.handle_devices import DeviceHandlers
from swarmnet.services.handle_network import NetworkHandlers
from swarmnet.services.handle_registry import RegistryHandlers
from swarmnet.services.handle_rewards import RewardHandlers
from swarmnet.services.handle_staking import StakingHandlers
from swarmnet.services.handle_tasks import TaskHandlers

CALLER_HEADER = "X-Caller-Identity"

# Identities and task ids land in String(64) columns.
OwnerPath = Annotated[str, Path(min_length=1, max_length=MAX_STRING_BYTES)]
TaskIdPath = Annotated[str, Path(min_length=1, max_length=MAX_STRING_BYTES)]


def get_clock() -> SystemClock:
    return SystemClock()


async def get_caller(
    caller: str | None = Header(None, alias=CALLER_HEADER),
) -> Identity:
    if not caller or not caller.strip():
        raise UnauthorizedError(f"Missing {CALLER_HEADER} header", http_status=401)
    return Identity(require_max_bytes("caller_identity", caller.strip()))


def registry_handlers(db: AsyncSession = Depends(get_db)) -> RegistryHandlers:
    return RegistryHandlers(SqlRecordStore(db), SqlTokenLedger(db))


def device_handlers(
    db: AsyncSession = Depends(get_db), clock=Depends(get_clock),
) -> DeviceHandlers:
    return DeviceHandlers(SqlRecordStore(db), clock)


def task_handlers(
    db: AsyncSession = Depends(get_db),
    clock=Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> TaskHandlers:
    return TaskHandlers(SqlRecordStore(db), clock, settings.task_policy())


def staking_handlers(db: AsyncSession = Depends(get_db)) -> StakingHandlers:
    return StakingHandlers(SqlRecordStore(db), SqlTokenLedger(db))


def reward_handlers(db: AsyncSession = Depends(get_db)) -> RewardHandlers:
    return RewardHandlers(SqlRecordStore(db), SqlTokenLedger(db))


def network_handlers(db: AsyncSession = Depends(get_db)) -> NetworkHandlers:
    return NetworkHandlers(SqlRecordStore(db))
