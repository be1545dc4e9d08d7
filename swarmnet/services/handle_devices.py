"""Device Handlers — registration, status updates and device reads.

Invariants:
    - register_device: byte-length check, then duplicate check, then insert
    - update_device_status: only the owner; only is_active and last_active change
"""

import logging

from swarmnet.core import device_registry
from swarmnet.core.domain_types import Identity, Operation
from swarmnet.core.records import Device
from swarmnet.core.repository_protocols import Clock, RecordStore
from swarmnet.services.operation_context import tag_operation

logger = logging.getLogger(__name__)


class DeviceHandlers:
    """Device registry operations."""

    def __init__(self, store: RecordStore, clock: Clock):
        self.store = store
        self.clock = clock

    @tag_operation(Operation.REGISTER_DEVICE)
    async def register_device(
        self,
        owner: Identity,
        gpu_model: str,
        vram: int,
        hash_rate: int,
        referrer: Identity | None = None,
    ) -> Device:
        device = device_registry.register_device(
            await self.store.get_device(owner),
            owner, gpu_model, vram, hash_rate, referrer, self.clock.now(),
        )
        await self.store.put_device(device)
        await self.store.flush()
        logger.info(
            f"Device registered: {gpu_model}",
            extra={"operation": Operation.REGISTER_DEVICE.value, "identity": owner},
        )
        return await self.get_device(owner)

    @tag_operation(Operation.UPDATE_DEVICE_STATUS)
    async def update_device_status(
        self, caller: Identity, owner: Identity, is_active: bool,
    ) -> Device:
        device = device_registry.update_device_status(
            await self.store.get_device(owner), caller, owner, is_active,
            self.clock.now(),
        )
        await self.store.put_device(device)
        await self.store.flush()
        logger.info(
            f"Device {'activated' if is_active else 'deactivated'}",
            extra={"operation": Operation.UPDATE_DEVICE_STATUS.value, "identity": owner},
        )
        return await self.get_device(owner)

    async def get_device(self, owner: Identity) -> Device:
        return device_registry.require_device(await self.store.get_device(owner), owner)

    async def list_devices(
        self, active: bool | None, limit: int, offset: int,
    ) -> list[Device]:
        return await self.store.list_devices(active=active, limit=limit, offset=offset)
