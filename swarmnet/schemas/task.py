"""Task Schemas — creation, assignment, completion and task view.

Invariants:
    - priority is a u8; every other numeric field is a u64
    - Byte limit on task_id enforced by the core (64 UTF-8 bytes)
"""

from pydantic import BaseModel, Field

from swarmnet.core.domain_types import U64_MAX, TaskStatus
from swarmnet.core.records import Task, TaskRequirements, TaskResult


class RequirementsBody(BaseModel):
    min_vram: int = Field(ge=0, le=U64_MAX)
    min_hash_rate: int = Field(ge=0, le=U64_MAX)
    priority: int = Field(0, ge=0, le=255)

    def to_record(self) -> TaskRequirements:
        return TaskRequirements(
            min_vram=self.min_vram,
            min_hash_rate=self.min_hash_rate,
            priority=self.priority,
        )


class ResultBody(BaseModel):
    compute_time: int = Field(ge=0, le=U64_MAX)
    hash_rate: int = Field(ge=0, le=U64_MAX)
    success: bool

    def to_record(self) -> TaskResult:
        return TaskResult(
            compute_time=self.compute_time,
            hash_rate=self.hash_rate,
            success=self.success,
        )


class TaskCreate(BaseModel):
    task_id: str = Field(min_length=1)
    requirements: RequirementsBody
    reward_amount: int = Field(0, ge=0, le=U64_MAX)


class TaskAssign(BaseModel):
    device_owner: str = Field(min_length=1, max_length=64)


class TaskComplete(BaseModel):
    result: ResultBody


class TaskResponse(BaseModel):
    owner_identity: str
    task_id: str
    requirements: RequirementsBody
    assigned_device: str | None
    status: TaskStatus
    start_time: int
    end_time: int | None
    result: ResultBody | None
    reward_amount: int

    @classmethod
    def from_record(cls, task: Task) -> "TaskResponse":
        result = None
        if task.result is not None:
            result = ResultBody(
                compute_time=task.result.compute_time,
                hash_rate=task.result.hash_rate,
                success=task.result.success,
            )
        return cls(
            owner_identity=task.owner_identity,
            task_id=task.task_id,
            requirements=RequirementsBody(
                min_vram=task.requirements.min_vram,
                min_hash_rate=task.requirements.min_hash_rate,
                priority=task.requirements.priority,
            ),
            assigned_device=task.assigned_device,
            status=task.status,
            start_time=task.start_time,
            end_time=task.end_time,
            result=result,
            reward_amount=task.reward_amount,
        )
