"""Task Handlers — task creation and lifecycle transitions.

Invariants:
    - The TaskPolicy comes from settings; handlers never decide guard mode themselves
    - assign_task loads both the task and the device (NotFound for either)
    - A transition that races another one on the same task fails at flush with ConflictError
"""

import logging

from swarmnet.core import task_lifecycle
from swarmnet.core.device_registry import require_device
from swarmnet.core.domain_types import Identity, Operation, TaskStatus
from swarmnet.core.records import Task, TaskKey, TaskRequirements, TaskResult
from swarmnet.core.repository_protocols import Clock, RecordStore
from swarmnet.core.task_lifecycle import TaskPolicy
from swarmnet.services.operation_context import tag_operation

logger = logging.getLogger(__name__)


class TaskHandlers:
    """Task marketplace operations."""

    def __init__(self, store: RecordStore, clock: Clock, policy: TaskPolicy):
        self.store = store
        self.clock = clock
        self.policy = policy

    @tag_operation(Operation.CREATE_TASK)
    async def create_task(
        self,
        owner: Identity,
        task_id: str,
        requirements: TaskRequirements,
        reward_amount: int = 0,
    ) -> Task:
        key = TaskKey(owner, task_id)
        task = task_lifecycle.create_task(
            await self.store.get_task(key), owner, task_id, requirements,
            self.clock.now(), reward_amount,
        )
        await self.store.put_task(task)
        await self.store.flush()
        logger.info(
            "Task created",
            extra={
                "operation": Operation.CREATE_TASK.value,
                "identity": owner, "task_id": task_id,
            },
        )
        return await self.get_task(key)

    @tag_operation(Operation.ASSIGN_TASK)
    async def assign_task(
        self, caller: Identity, key: TaskKey, device_owner: Identity,
    ) -> Task:
        task = task_lifecycle.require_task(await self.store.get_task(key), key)
        device = require_device(await self.store.get_device(device_owner), device_owner)
        task = task_lifecycle.assign_task(task, device, caller, self.policy)
        await self.store.put_task(task)
        await self.store.flush()
        logger.info(
            f"Task assigned to {device_owner}",
            extra={
                "operation": Operation.ASSIGN_TASK.value,
                "identity": caller, "task_id": key.task_id,
            },
        )
        return await self.get_task(key)

    @tag_operation(Operation.COMPLETE_TASK)
    async def complete_task(
        self, caller: Identity, key: TaskKey, result: TaskResult,
    ) -> Task:
        task = task_lifecycle.require_task(await self.store.get_task(key), key)
        task = task_lifecycle.complete_task(
            task, result, caller, self.clock.now(), self.policy,
        )
        await self.store.put_task(task)
        await self.store.flush()
        logger.info(
            f"Task completed (success={result.success})",
            extra={
                "operation": Operation.COMPLETE_TASK.value,
                "identity": caller, "task_id": key.task_id,
            },
        )
        return await self.get_task(key)

    async def get_task(self, key: TaskKey) -> Task:
        return task_lifecycle.require_task(await self.store.get_task(key), key)

    async def list_tasks(
        self,
        owner: Identity | None,
        status: TaskStatus | None,
        assigned_device: Identity | None,
        limit: int,
        offset: int,
    ) -> list[Task]:
        return await self.store.list_tasks(
            owner=owner, status=status, assigned_device=assigned_device,
            limit=limit, offset=offset,
        )
