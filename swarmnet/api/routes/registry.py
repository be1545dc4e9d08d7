"""Registry Routes — bootstrap and read the global registry.

Invariants:
    - POST /registry makes the caller the admin identity
    - A second POST returns 409 ALREADY_INITIALIZED and creates nothing
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.api.dependencies import get_caller, registry_handlers
from swarmnet.config import Settings, get_settings
from swarmnet.core.domain_types import Identity
from swarmnet.infrastructure.database import get_db
from swarmnet.schemas.registry import RegistryInitialize, RegistryResponse
from swarmnet.services.handle_registry import RegistryHandlers

router = APIRouter(prefix="/api/v1/registry", tags=["registry"])


@router.post(
    "", response_model=RegistryResponse, status_code=status.HTTP_201_CREATED,
)
async def initialize_registry(
    body: RegistryInitialize,
    caller: Identity = Depends(get_caller),
    handlers: RegistryHandlers = Depends(registry_handlers),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    """One-time bootstrap: token mint, reward pool, stake pool, zeroed counters."""
    decimals = (
        body.token_decimals if body.token_decimals is not None
        else settings.token_decimals
    )
    registry = await handlers.initialize(caller, decimals)
    await db.commit()
    return RegistryResponse.from_record(registry)


@router.get("", response_model=RegistryResponse)
async def get_registry(handlers: RegistryHandlers = Depends(registry_handlers)):
    return RegistryResponse.from_record(await handlers.get_registry())
