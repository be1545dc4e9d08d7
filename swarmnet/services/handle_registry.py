"""Registry Handlers — bootstrap of the global registry and its pools.

Invariants:
    - AlreadyInitializedError is raised before the mint or any pool is created
    - The caller becomes the admin: mint authority and owner of both pools
"""

import logging

from swarmnet.core.domain_types import Identity, Operation
from swarmnet.core.records import GlobalRegistry
from swarmnet.core.registry_bootstrap import (
    build_registry, check_bootstrap, require_registry,
)
from swarmnet.core.repository_protocols import RecordStore, TokenLedger
from swarmnet.services.operation_context import tag_operation

logger = logging.getLogger(__name__)


class RegistryHandlers:
    """initialize + registry read."""

    def __init__(self, store: RecordStore, ledger: TokenLedger):
        self.store = store
        self.ledger = ledger

    @tag_operation(Operation.INITIALIZE)
    async def initialize(self, admin: Identity, token_decimals: int) -> GlobalRegistry:
        check_bootstrap(await self.store.get_registry(), token_decimals)

        token = await self.ledger.create_mint(token_decimals, admin)
        reward_pool = await self.ledger.open_account(token, admin)
        stake_pool = await self.ledger.open_account(token, admin)

        registry = build_registry(admin, token, reward_pool, stake_pool)
        await self.store.put_registry(registry)
        await self.store.flush()
        logger.info(
            "Global registry initialized",
            extra={"operation": Operation.INITIALIZE.value, "identity": admin},
        )
        return require_registry(await self.store.get_registry())

    async def get_registry(self) -> GlobalRegistry:
        return require_registry(await self.store.get_registry())
