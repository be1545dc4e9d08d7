"""SQL Record Store — RecordStore protocol over the async SQLAlchemy session.

Invariants:
    - Rows are looked up by key only: registry by REGISTRY_KEY, devices by owner,
      tasks by (owner, task_id)
    - put_* stages changes in the session; flush() sends them, the route commits
    - A record whose version differs from the stored row is rejected (ConflictError)
    - StaleDataError / IntegrityError at flush become ConflictError: another
      operation touched the same record first

Design Decisions:
    - session.get() for reads: the identity map keeps the loaded row, so the
      UPDATE carries the version that was read (optimistic lock per record)
    - Mapping functions kept private here: core records never see ORM objects
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from swarmnet.core.domain_types import REGISTRY_KEY, Identity, TaskStatus
from swarmnet.core.errors import ConflictError
from swarmnet.core.records import (
    Device, GlobalRegistry, Task, TaskKey, TaskRequirements, TaskResult,
)
from swarmnet.models.device import Device as DeviceModel
from swarmnet.models.registry import Registry as RegistryModel
from swarmnet.models.task import Task as TaskModel

logger = logging.getLogger(__name__)


# ─── Row <-> record mapping ─────────────────────────────────────

def _registry_record(row: RegistryModel) -> GlobalRegistry:
    return GlobalRegistry(
        admin_identity=Identity(row.admin_identity),
        token_reference=row.token_reference,
        reward_pool_reference=row.reward_pool_reference,
        stake_pool_reference=row.stake_pool_reference,
        total_staked=row.total_staked,
        total_rewards_distributed=row.total_rewards_distributed,
        version=row.version,
    )


def _device_record(row: DeviceModel) -> Device:
    return Device(
        owner_identity=Identity(row.owner_identity),
        gpu_model=row.gpu_model,
        vram=row.vram,
        hash_rate=row.hash_rate,
        is_active=row.is_active,
        last_active=row.last_active,
        total_rewards=row.total_rewards,
        referrer=Identity(row.referrer) if row.referrer else None,
        referral_rewards=row.referral_rewards,
        staked_amount=row.staked_amount,
        version=row.version,
    )


def _task_record(row: TaskModel) -> Task:
    result = None
    if row.result_success is not None:
        result = TaskResult(
            compute_time=row.result_compute_time,
            hash_rate=row.result_hash_rate,
            success=row.result_success,
        )
    return Task(
        owner_identity=Identity(row.owner_identity),
        task_id=row.task_id,
        requirements=TaskRequirements(
            min_vram=row.min_vram,
            min_hash_rate=row.min_hash_rate,
            priority=row.priority,
        ),
        status=TaskStatus(row.status),
        start_time=row.start_time,
        assigned_device=(
            Identity(row.assigned_device) if row.assigned_device else None
        ),
        end_time=row.end_time,
        result=result,
        reward_amount=row.reward_amount,
        version=row.version,
    )


def _check_version(kind: str, key: str, row, record_version: int | None) -> None:
    if row is None:
        return
    if record_version is None or record_version != row.version:
        raise ConflictError(f"{kind} '{key}' was modified concurrently")


class SqlRecordStore:
    """Keyed record storage backed by one AsyncSession (one transaction)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- registry -----------------------------------------------------------

    async def get_registry(self) -> GlobalRegistry | None:
        row = await self.db.get(RegistryModel, REGISTRY_KEY)
        return _registry_record(row) if row else None

    async def put_registry(self, registry: GlobalRegistry) -> None:
        row = await self.db.get(RegistryModel, REGISTRY_KEY)
        _check_version("Registry", REGISTRY_KEY, row, registry.version)
        if row is None:
            row = RegistryModel(key=REGISTRY_KEY)
            self.db.add(row)
        row.admin_identity = registry.admin_identity
        row.token_reference = registry.token_reference
        row.reward_pool_reference = registry.reward_pool_reference
        row.stake_pool_reference = registry.stake_pool_reference
        row.total_staked = registry.total_staked
        row.total_rewards_distributed = registry.total_rewards_distributed

    # --- devices ------------------------------------------------------------

    async def get_device(self, owner: Identity) -> Device | None:
        row = await self.db.get(DeviceModel, owner)
        return _device_record(row) if row else None

    async def put_device(self, device: Device) -> None:
        row = await self.db.get(DeviceModel, device.owner_identity)
        _check_version("Device", device.owner_identity, row, device.version)
        if row is None:
            row = DeviceModel(owner_identity=device.owner_identity)
            self.db.add(row)
        row.gpu_model = device.gpu_model
        row.vram = device.vram
        row.hash_rate = device.hash_rate
        row.is_active = device.is_active
        row.last_active = device.last_active
        row.total_rewards = device.total_rewards
        row.referrer = device.referrer
        row.referral_rewards = device.referral_rewards
        row.staked_amount = device.staked_amount

    async def list_devices(
        self, active: bool | None = None, limit: int | None = 50, offset: int = 0,
    ) -> list[Device]:
        query = select(DeviceModel).order_by(
            DeviceModel.created_at, DeviceModel.owner_identity,
        )
        if active is not None:
            query = query.where(DeviceModel.is_active == active)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        result = await self.db.execute(query)
        return [_device_record(row) for row in result.scalars().all()]

    # --- tasks --------------------------------------------------------------

    async def get_task(self, key: TaskKey) -> Task | None:
        row = await self.db.get(TaskModel, (key.owner_identity, key.task_id))
        return _task_record(row) if row else None

    async def put_task(self, task: Task) -> None:
        row = await self.db.get(TaskModel, (task.owner_identity, task.task_id))
        _check_version("Task", str(task.key), row, task.version)
        if row is None:
            row = TaskModel(owner_identity=task.owner_identity, task_id=task.task_id)
            self.db.add(row)
        row.min_vram = task.requirements.min_vram
        row.min_hash_rate = task.requirements.min_hash_rate
        row.priority = task.requirements.priority
        row.assigned_device = task.assigned_device
        row.status = task.status.value
        row.start_time = task.start_time
        row.end_time = task.end_time
        row.result_compute_time = task.result.compute_time if task.result else None
        row.result_hash_rate = task.result.hash_rate if task.result else None
        row.result_success = task.result.success if task.result else None
        row.reward_amount = task.reward_amount

    async def list_tasks(
        self,
        owner: Identity | None = None,
        status: TaskStatus | None = None,
        assigned_device: Identity | None = None,
        limit: int | None = 50,
        offset: int = 0,
    ) -> list[Task]:
        query = select(TaskModel).order_by(
            TaskModel.created_at, TaskModel.owner_identity, TaskModel.task_id,
        )
        if owner is not None:
            query = query.where(TaskModel.owner_identity == owner)
        if status is not None:
            query = query.where(TaskModel.status == status.value)
        if assigned_device is not None:
            query = query.where(TaskModel.assigned_device == assigned_device)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        result = await self.db.execute(query)
        return [_task_record(row) for row in result.scalars().all()]

    # --- unit of work -------------------------------------------------------

    async def flush(self) -> None:
        try:
            await self.db.flush()
        except StaleDataError as e:
            logger.warning(f"Stale write rejected: {e}")
            raise ConflictError("Record was modified by a concurrent operation")
        except IntegrityError as e:
            logger.warning(f"Duplicate insert rejected: {e}")
            raise ConflictError("Record was created by a concurrent operation")
