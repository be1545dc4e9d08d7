"""Network Handlers — read-only dashboard stats and conservation audit."""

import logging

from swarmnet.core.network_stats import (
    ConservationAudit, NetworkStats, audit_conservation, compute_network_stats,
)
from swarmnet.core.registry_bootstrap import require_registry
from swarmnet.core.repository_protocols import RecordStore

logger = logging.getLogger(__name__)


class NetworkHandlers:

    def __init__(self, store: RecordStore):
        self.store = store

    async def stats(self) -> NetworkStats:
        return compute_network_stats(
            await self.store.get_registry(),
            await self.store.list_devices(limit=None),
            await self.store.list_tasks(limit=None),
        )

    async def audit(self) -> ConservationAudit:
        registry = require_registry(await self.store.get_registry())
        audit = audit_conservation(registry, await self.store.list_devices(limit=None))
        if not (audit.staking_balanced and audit.rewards_balanced):
            logger.error(
                "Conservation audit failed: "
                f"staked {audit.registry_total_staked} vs {audit.device_staked_sum}, "
                f"rewards {audit.registry_total_rewards} vs {audit.device_rewards_sum}",
            )
        return audit
