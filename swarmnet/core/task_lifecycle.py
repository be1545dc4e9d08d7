"""Task Lifecycle — state machine for compute tasks.

Invariants:
    - New tasks start PENDING with no device, no end time, no result
    - task_id is at most 64 UTF-8 bytes; (owner, task_id) is unique
    - Guarded policy: status advances only PENDING -> PROCESSING -> COMPLETED,
      each transition accepted only from its exact prior state (ConflictError)
    - Guarded assignment requires an authorized caller, an active device and a
      device that meets min_vram / min_hash_rate
    - Permissionless policy accepts any caller, any device and any prior status

Design Decisions:
    - Policy object over module flags: the shell reads settings once and passes
      the policy in, so rules stay pure and both modes are testable side by side
    - Dispatchers are a configured identity set, not a role stored on records
"""

from dataclasses import dataclass, field, replace

from swarmnet.core.checked_math import require_max_bytes, require_u64
from swarmnet.core.domain_types import (
    NEXT_TASK_STATUS, U8_MAX, Identity, TaskStatus,
)
from swarmnet.core.errors import (
    AlreadyExistsError, ConflictError, DeviceInactiveError,
    InsufficientCapabilityError, ResourceNotFoundError, UnauthorizedError,
)
from swarmnet.core.records import Device, Task, TaskKey, TaskRequirements, TaskResult


@dataclass(frozen=True)
class TaskPolicy:
    enforce_guards: bool = True
    dispatchers: frozenset[Identity] = field(default_factory=frozenset)


PERMISSIONLESS = TaskPolicy(enforce_guards=False)


def require_task(task: Task | None, key: TaskKey) -> Task:
    if task is None:
        raise ResourceNotFoundError("Task", str(key))
    return task


def create_task(
    existing: Task | None,
    owner: Identity,
    task_id: str,
    requirements: TaskRequirements,
    now: int,
    reward_amount: int = 0,
) -> Task:
    require_max_bytes("task_id", task_id)
    require_u64("min_vram", requirements.min_vram)
    require_u64("min_hash_rate", requirements.min_hash_rate)
    require_u64("priority", requirements.priority, maximum=U8_MAX)
    require_u64("reward_amount", reward_amount)
    if existing is not None:
        raise AlreadyExistsError(owner, task_id)
    return Task(
        owner_identity=owner,
        task_id=task_id,
        requirements=requirements,
        status=TaskStatus.PENDING,
        start_time=now,
        assigned_device=None,
        end_time=None,
        result=None,
        reward_amount=reward_amount,
    )


def capability_shortfalls(device: Device, requirements: TaskRequirements) -> list[str]:
    """Requirement names the device fails to meet. Empty list = capable."""
    shortfalls = []
    if device.vram < requirements.min_vram:
        shortfalls.append(f"vram {device.vram} < {requirements.min_vram}")
    if device.hash_rate < requirements.min_hash_rate:
        shortfalls.append(
            f"hash_rate {device.hash_rate} < {requirements.min_hash_rate}",
        )
    return shortfalls


def _check_transition(task: Task, target: TaskStatus) -> None:
    if NEXT_TASK_STATUS.get(task.status) != target:
        raise ConflictError(
            f"Task '{task.key}' is {task.status.value}; "
            f"cannot move to {target.value}",
        )


def assign_task(
    task: Task, device: Device, caller: Identity, policy: TaskPolicy,
) -> Task:
    if policy.enforce_guards:
        if caller != task.owner_identity and caller not in policy.dispatchers:
            raise UnauthorizedError(
                f"Only the task owner or a dispatcher may assign '{task.key}'",
            )
        if not device.is_active:
            raise DeviceInactiveError(device.owner_identity)
        shortfalls = capability_shortfalls(device, task.requirements)
        if shortfalls:
            raise InsufficientCapabilityError(device.owner_identity, shortfalls)
        _check_transition(task, TaskStatus.PROCESSING)
    return replace(
        task, assigned_device=device.owner_identity, status=TaskStatus.PROCESSING,
    )


def complete_task(
    task: Task, result: TaskResult, caller: Identity, now: int, policy: TaskPolicy,
) -> Task:
    require_u64("compute_time", result.compute_time)
    require_u64("hash_rate", result.hash_rate)
    if policy.enforce_guards:
        allowed = {task.owner_identity, *policy.dispatchers}
        if task.assigned_device is not None:
            allowed.add(task.assigned_device)
        if caller not in allowed:
            raise UnauthorizedError(
                f"Only the assigned device, the task owner or a dispatcher "
                f"may complete '{task.key}'",
            )
        _check_transition(task, TaskStatus.COMPLETED)
    return replace(
        task, result=result, status=TaskStatus.COMPLETED, end_time=now,
    )
