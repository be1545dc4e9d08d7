"""Device Schemas — registration, status change and device view.

Invariants:
    - gpu_model non-empty after strip; byte limit enforced by the core (64 UTF-8 bytes)
    - vram / hash_rate within u64
"""

from pydantic import BaseModel, Field, field_validator

from swarmnet.core.domain_types import U64_MAX
from swarmnet.core.records import Device


class DeviceRegister(BaseModel):
    gpu_model: str = Field(min_length=1)
    vram: int = Field(ge=0, le=U64_MAX)
    hash_rate: int = Field(ge=0, le=U64_MAX)
    referrer: str | None = Field(None, min_length=1, max_length=64)

    @field_validator("gpu_model")
    @classmethod
    def strip_gpu_model(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("gpu_model cannot be empty or whitespace")
        return v


class DeviceStatusUpdate(BaseModel):
    is_active: bool


class DeviceResponse(BaseModel):
    owner_identity: str
    gpu_model: str
    vram: int
    hash_rate: int
    is_active: bool
    last_active: int
    total_rewards: int
    referrer: str | None
    referral_rewards: int
    staked_amount: int

    @classmethod
    def from_record(cls, device: Device) -> "DeviceResponse":
        return cls(
            owner_identity=device.owner_identity,
            gpu_model=device.gpu_model,
            vram=device.vram,
            hash_rate=device.hash_rate,
            is_active=device.is_active,
            last_active=device.last_active,
            total_rewards=device.total_rewards,
            referrer=device.referrer,
            referral_rewards=device.referral_rewards,
            staked_amount=device.staked_amount,
        )
