"""Device Registry — registration and status rules for GPU devices.

Invariants:
    - At most one device per owner (AlreadyRegisteredError)
    - gpu_model is at most 64 UTF-8 bytes
    - New devices start active with every accumulator at zero
    - referrer is stored verbatim: it is not required to be a registered device
    - Only the owner may change the active flag; nothing else changes with it
"""

from dataclasses import replace

from swarmnet.core.checked_math import require_max_bytes, require_u64
from swarmnet.core.domain_types import Identity
from swarmnet.core.errors import (
    AlreadyRegisteredError, ResourceNotFoundError, UnauthorizedError,
)
from swarmnet.core.records import Device


def require_device(device: Device | None, owner: Identity) -> Device:
    if device is None:
        raise ResourceNotFoundError("Device", owner)
    return device


def register_device(
    existing: Device | None,
    owner: Identity,
    gpu_model: str,
    vram: int,
    hash_rate: int,
    referrer: Identity | None,
    now: int,
) -> Device:
    """Build a new device record. Pure — the shell persists it."""
    require_max_bytes("gpu_model", gpu_model)
    require_u64("vram", vram)
    require_u64("hash_rate", hash_rate)
    if existing is not None:
        raise AlreadyRegisteredError(owner)
    return Device(
        owner_identity=owner,
        gpu_model=gpu_model,
        vram=vram,
        hash_rate=hash_rate,
        is_active=True,
        last_active=now,
        total_rewards=0,
        referrer=referrer,
        referral_rewards=0,
        staked_amount=0,
    )


def update_device_status(
    device: Device | None, caller: Identity, owner: Identity, is_active: bool, now: int,
) -> Device:
    device = require_device(device, owner)
    if caller != device.owner_identity:
        raise UnauthorizedError(
            f"Only the device owner may change the status of '{owner}'",
        )
    return replace(device, is_active=is_active, last_active=now)
