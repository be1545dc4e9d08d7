"""Staking Handlers — stake tokens against a device.

Invariants:
    - Counters are computed (and overflow-checked) by the core before the transfer runs
    - Transfer, device update and registry update land in the same transaction
"""

import logging

from swarmnet.core.device_registry import require_device
from swarmnet.core.domain_types import AccountAddress, Identity, Operation
from swarmnet.core.registry_bootstrap import require_registry
from swarmnet.core.repository_protocols import RecordStore, TokenLedger
from swarmnet.core.stake_ledger import StakeOutcome, stake_tokens
from swarmnet.services.operation_context import tag_operation

logger = logging.getLogger(__name__)


class StakingHandlers:
    """StakeManager operations."""

    def __init__(self, store: RecordStore, ledger: TokenLedger):
        self.store = store
        self.ledger = ledger

    @tag_operation(Operation.STAKE_TOKENS)
    async def stake_tokens(
        self,
        caller: Identity,
        device_owner: Identity,
        source_account: AccountAddress,
        stake_pool: AccountAddress,
        amount: int,
    ) -> StakeOutcome:
        registry = require_registry(await self.store.get_registry())
        device = require_device(await self.store.get_device(device_owner), device_owner)
        outcome = stake_tokens(
            registry, device, caller,
            await self.ledger.get_account(source_account), source_account,
            stake_pool, amount,
        )

        await self.ledger.transfer(outcome.transfer)
        await self.store.put_device(outcome.device)
        await self.store.put_registry(outcome.registry)
        await self.store.flush()
        logger.info(
            "Tokens staked",
            extra={
                "operation": Operation.STAKE_TOKENS.value,
                "identity": caller, "amount": amount,
            },
        )
        return outcome
