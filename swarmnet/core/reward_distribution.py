"""Reward Distribution — admin payouts from the reward pool, with referral bonus.

Invariants:
    - Only the registry admin distributes, and only from the registry's reward pool
    - The payout destination is held by the device owner and holds the registry mint
    - device.total_rewards and registry.total_rewards_distributed grow by `amount`
    - Referral bonus = floor(amount * 5 / 100), multiplication overflow-checked
    - Bonus paid only when > 0 AND a referrer destination is supplied; otherwise
      it is skipped (not queued, not retried)
    - A paid bonus increments device.referral_rewards but NOT
      registry.total_rewards_distributed
    - Every sum is computed before any transfer is planned

Design Decisions:
    - Referrer destination must be held by device.referrer, so a bonus cannot
      be routed to an arbitrary account
"""

from dataclasses import dataclass, replace

from swarmnet.core.checked_math import checked_add, referral_bonus, require_u64
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.enforce_accounts import check_reward_pool, check_token_account
from swarmnet.core.errors import UnauthorizedError
from swarmnet.core.records import Device, GlobalRegistry, TokenAccount, TokenTransfer


@dataclass(frozen=True)
class RewardOutcome:
    device: Device
    registry: GlobalRegistry
    transfers: tuple[TokenTransfer, ...]
    referral_amount: int
    referral_paid: bool


def distribute_reward(
    registry: GlobalRegistry,
    device: Device,
    caller: Identity,
    reward_pool: AccountAddress,
    destination: TokenAccount | None,
    destination_address: AccountAddress,
    amount: int,
    referrer_destination: TokenAccount | None = None,
    referrer_destination_address: AccountAddress | None = None,
) -> RewardOutcome:
    require_u64("amount", amount, positive=True)
    if caller != registry.admin_identity:
        raise UnauthorizedError("Only the registry admin may distribute rewards")
    check_reward_pool(registry, reward_pool)
    check_token_account(destination, destination_address, device.owner_identity, registry)

    total_rewards = checked_add(device.total_rewards, amount)
    distributed = checked_add(registry.total_rewards_distributed, amount)
    transfers = [
        TokenTransfer(
            source=reward_pool,
            destination=destination_address,
            authority=registry.admin_identity,
            amount=amount,
        ),
    ]

    referral_amount = 0
    referral_rewards = device.referral_rewards
    referral_paid = False
    if device.referrer is not None:
        referral_amount = referral_bonus(amount)
        if referral_amount > 0 and referrer_destination_address is not None:
            check_token_account(
                referrer_destination, referrer_destination_address,
                device.referrer, registry,
            )
            referral_rewards = checked_add(referral_rewards, referral_amount)
            transfers.append(TokenTransfer(
                source=reward_pool,
                destination=referrer_destination_address,
                authority=registry.admin_identity,
                amount=referral_amount,
            ))
            referral_paid = True

    return RewardOutcome(
        device=replace(
            device, total_rewards=total_rewards, referral_rewards=referral_rewards,
        ),
        registry=replace(registry, total_rewards_distributed=distributed),
        transfers=tuple(transfers),
        referral_amount=referral_amount,
        referral_paid=referral_paid,
    )
