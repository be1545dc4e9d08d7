"""Task Routes — create tasks and drive their lifecycle.

Invariants:
    - Tasks are addressed by /{owner}/{task_id}
    - The caller creates tasks for itself (owner = caller)
    - Guard behaviour (authorization, capability, exact prior state) follows settings
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.api.dependencies import OwnerPath, TaskIdPath, get_caller, task_handlers
from swarmnet.config import Settings, get_settings
from swarmnet.core.domain_types import MAX_STRING_BYTES, Identity, TaskStatus
from swarmnet.core.records import TaskKey
from swarmnet.infrastructure.database import get_db
from swarmnet.schemas.task import TaskAssign, TaskComplete, TaskCreate, TaskResponse
from swarmnet.services.handle_tasks import TaskHandlers

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    caller: Identity = Depends(get_caller),
    handlers: TaskHandlers = Depends(task_handlers),
    db: AsyncSession = Depends(get_db),
):
    task = await handlers.create_task(
        caller, body.task_id, body.requirements.to_record(), body.reward_amount,
    )
    await db.commit()
    return TaskResponse.from_record(task)


@router.get("")
async def list_tasks(
    owner: str | None = Query(None, max_length=MAX_STRING_BYTES),
    status_filter: TaskStatus | None = Query(None, alias="status"),
    assigned_device: str | None = Query(None, max_length=MAX_STRING_BYTES),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    handlers: TaskHandlers = Depends(task_handlers),
    settings: Settings = Depends(get_settings),
):
    limit = min(limit, settings.max_page_size)
    tasks = await handlers.list_tasks(
        Identity(owner) if owner else None,
        status_filter,
        Identity(assigned_device) if assigned_device else None,
        limit, offset,
    )
    return {
        "tasks": [TaskResponse.from_record(t).model_dump(mode="json") for t in tasks],
        "pagination": {"limit": limit, "offset": offset},
    }


@router.get("/{owner}/{task_id}", response_model=TaskResponse)
async def get_task(
    owner: OwnerPath,
    task_id: TaskIdPath,
    handlers: TaskHandlers = Depends(task_handlers),
):
    return TaskResponse.from_record(
        await handlers.get_task(TaskKey(Identity(owner), task_id)),
    )


@router.post("/{owner}/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    owner: OwnerPath,
    task_id: TaskIdPath,
    body: TaskAssign,
    caller: Identity = Depends(get_caller),
    handlers: TaskHandlers = Depends(task_handlers),
    db: AsyncSession = Depends(get_db),
):
    task = await handlers.assign_task(
        caller, TaskKey(Identity(owner), task_id), Identity(body.device_owner),
    )
    await db.commit()
    return TaskResponse.from_record(task)


@router.post("/{owner}/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    owner: OwnerPath,
    task_id: TaskIdPath,
    body: TaskComplete,
    caller: Identity = Depends(get_caller),
    handlers: TaskHandlers = Depends(task_handlers),
    db: AsyncSession = Depends(get_db),
):
    task = await handlers.complete_task(
        caller, TaskKey(Identity(owner), task_id), body.result.to_record(),
    )
    await db.commit()
    return TaskResponse.from_record(task)
