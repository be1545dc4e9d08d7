"""Task Handlers — lifecycle through the record store under both policies."""

import pytest

from swarmnet.core.domain_types import Identity, TaskStatus
from swarmnet.core.errors import (
    AlreadyExistsError, ConflictError, InsufficientCapabilityError,
    ResourceNotFoundError,
)
from swarmnet.core.records import TaskKey, TaskRequirements, TaskResult
from swarmnet.core.task_lifecycle import PERMISSIONLESS
from swarmnet.services.handle_tasks import TaskHandlers

from tests.services.ledger_helpers import NOW

OWNER = Identity("owner")
WORKER = Identity("worker")
REQS = TaskRequirements(min_vram=8, min_hash_rate=100, priority=2)
RESULT = TaskResult(compute_time=60, hash_rate=150, success=True)
KEY = TaskKey(OWNER, "job-1")


@pytest.fixture
async def worker(device_handlers):
    return await device_handlers.register_device(WORKER, "A100", 16, 200)


async def test_full_guarded_lifecycle(task_handlers, worker, clock):
    task = await task_handlers.create_task(OWNER, "job-1", REQS)
    assert task.status == TaskStatus.PENDING

    task = await task_handlers.assign_task(OWNER, KEY, WORKER)
    assert task.status == TaskStatus.PROCESSING
    assert task.assigned_device == WORKER

    clock.advance(60)
    task = await task_handlers.complete_task(WORKER, KEY, RESULT)
    assert task.status == TaskStatus.COMPLETED
    assert task.result == RESULT
    assert task.end_time == NOW + 60


async def test_duplicate_task_rejected(task_handlers):
    await task_handlers.create_task(OWNER, "job-1", REQS)
    with pytest.raises(AlreadyExistsError):
        await task_handlers.create_task(OWNER, "job-1", REQS)


async def test_assign_unknown_device(task_handlers):
    await task_handlers.create_task(OWNER, "job-1", REQS)
    with pytest.raises(ResourceNotFoundError):
        await task_handlers.assign_task(OWNER, KEY, Identity("ghost"))


async def test_assign_underpowered_device(task_handlers, device_handlers):
    await device_handlers.register_device(WORKER, "GTX 1060", 6, 200)
    await task_handlers.create_task(OWNER, "job-1", REQS)
    with pytest.raises(InsufficientCapabilityError):
        await task_handlers.assign_task(OWNER, KEY, WORKER)
    assert (await task_handlers.get_task(KEY)).status == TaskStatus.PENDING


async def test_guarded_complete_before_assign(task_handlers):
    await task_handlers.create_task(OWNER, "job-1", REQS)
    with pytest.raises(ConflictError):
        await task_handlers.complete_task(OWNER, KEY, RESULT)


async def test_permissionless_complete_before_assign(store, clock):
    handlers = TaskHandlers(store, clock, PERMISSIONLESS)
    await handlers.create_task(OWNER, "job-1", REQS)
    task = await handlers.complete_task(Identity("anyone"), KEY, RESULT)
    assert task.status == TaskStatus.COMPLETED
    assert task.assigned_device is None


async def test_list_tasks_by_status_and_device(task_handlers, worker):
    await task_handlers.create_task(OWNER, "job-1", REQS)
    await task_handlers.create_task(OWNER, "job-2", REQS)
    await task_handlers.assign_task(OWNER, KEY, WORKER)

    pending = await task_handlers.list_tasks(None, TaskStatus.PENDING, None, 50, 0)
    assert [t.task_id for t in pending] == ["job-2"]
    on_worker = await task_handlers.list_tasks(None, None, WORKER, 50, 0)
    assert [t.task_id for t in on_worker] == ["job-1"]
