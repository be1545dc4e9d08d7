"""Device Routes — registration, status and reads.

Invariants:
    - The caller registers a device for itself (owner = caller)
    - PATCH status is owner-only (403 otherwise)
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.api.dependencies import OwnerPath, device_handlers, get_caller
from swarmnet.config import Settings, get_settings
from swarmnet.core.domain_types import Identity
from swarmnet.infrastructure.database import get_db
from swarmnet.schemas.device import DeviceRegister, DeviceResponse, DeviceStatusUpdate
from swarmnet.services.handle_devices import DeviceHandlers

router = APIRouter(prefix="/api/v1/devices", tags=["devices"])


@router.post(
    "", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED,
)
async def register_device(
    body: DeviceRegister,
    caller: Identity = Depends(get_caller),
    handlers: DeviceHandlers = Depends(device_handlers),
    db: AsyncSession = Depends(get_db),
):
    device = await handlers.register_device(
        caller, body.gpu_model, body.vram, body.hash_rate,
        Identity(body.referrer) if body.referrer else None,
    )
    await db.commit()
    return DeviceResponse.from_record(device)


@router.get("")
async def list_devices(
    active: bool | None = Query(None),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    handlers: DeviceHandlers = Depends(device_handlers),
    settings: Settings = Depends(get_settings),
):
    limit = min(limit, settings.max_page_size)
    devices = await handlers.list_devices(active, limit, offset)
    return {
        "devices": [DeviceResponse.from_record(d).model_dump() for d in devices],
        "pagination": {"limit": limit, "offset": offset},
    }


@router.get("/{owner}", response_model=DeviceResponse)
async def get_device(
    owner: OwnerPath, handlers: DeviceHandlers = Depends(device_handlers),
):
    return DeviceResponse.from_record(await handlers.get_device(Identity(owner)))


@router.patch("/{owner}/status", response_model=DeviceResponse)
async def update_device_status(
    owner: OwnerPath,
    body: DeviceStatusUpdate,
    caller: Identity = Depends(get_caller),
    handlers: DeviceHandlers = Depends(device_handlers),
    db: AsyncSession = Depends(get_db),
):
    device = await handlers.update_device_status(caller, Identity(owner), body.is_active)
    await db.commit()
    return DeviceResponse.from_record(device)
