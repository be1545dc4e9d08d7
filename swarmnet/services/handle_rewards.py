"""Reward Handlers — admin reward distribution and referral claims.

Invariants:
    - Every transfer planned by the core runs in order inside the operation's transaction
    - A skipped referral bonus (no referrer destination) is logged, not queued
    - Referral payouts do not touch registry.total_rewards_distributed
"""

import logging

from swarmnet.core.device_registry import require_device
from swarmnet.core.domain_types import AccountAddress, Identity, Operation
from swarmnet.core.referral_ledger import ClaimOutcome, claim_referral_rewards
from swarmnet.core.registry_bootstrap import require_registry
from swarmnet.core.repository_protocols import RecordStore, TokenLedger
from swarmnet.core.reward_distribution import RewardOutcome, distribute_reward
from swarmnet.services.operation_context import tag_operation

logger = logging.getLogger(__name__)


class RewardHandlers:
    """RewardDistributor and ReferralLedger operations."""

    def __init__(self, store: RecordStore, ledger: TokenLedger):
        self.store = store
        self.ledger = ledger

    @tag_operation(Operation.DISTRIBUTE_REWARD)
    async def distribute_reward(
        self,
        caller: Identity,
        device_owner: Identity,
        reward_pool: AccountAddress,
        destination: AccountAddress,
        amount: int,
        referrer_destination: AccountAddress | None = None,
    ) -> RewardOutcome:
        registry = require_registry(await self.store.get_registry())
        device = require_device(await self.store.get_device(device_owner), device_owner)
        referrer_account = None
        if referrer_destination is not None:
            referrer_account = await self.ledger.get_account(referrer_destination)
        outcome = distribute_reward(
            registry, device, caller, reward_pool,
            await self.ledger.get_account(destination), destination, amount,
            referrer_account, referrer_destination,
        )

        for transfer in outcome.transfers:
            await self.ledger.transfer(transfer)
        await self.store.put_device(outcome.device)
        await self.store.put_registry(outcome.registry)
        await self.store.flush()

        extra = {
            "operation": Operation.DISTRIBUTE_REWARD.value,
            "identity": device_owner, "amount": amount,
            "referral_amount": outcome.referral_amount,
        }
        if outcome.referral_amount > 0 and not outcome.referral_paid:
            logger.info("Referral bonus skipped: no referrer destination", extra=extra)
        logger.info("Reward distributed", extra=extra)
        return outcome

    @tag_operation(Operation.CLAIM_REFERRAL_REWARDS)
    async def claim_referral_rewards(
        self,
        caller: Identity,
        device_owner: Identity,
        destination: AccountAddress,
        reward_pool: AccountAddress,
    ) -> ClaimOutcome:
        registry = require_registry(await self.store.get_registry())
        device = require_device(await self.store.get_device(device_owner), device_owner)
        outcome = claim_referral_rewards(
            registry, device, caller,
            await self.ledger.get_account(destination), destination, reward_pool,
        )

        await self.ledger.transfer(outcome.transfer)
        await self.store.put_device(outcome.device)
        await self.store.flush()
        logger.info(
            "Referral rewards claimed",
            extra={
                "operation": Operation.CLAIM_REFERRAL_REWARDS.value,
                "identity": caller, "amount": outcome.transfer.amount,
            },
        )
        return outcome
