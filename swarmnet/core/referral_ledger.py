"""Referral Ledger — payout of accumulated referral balances.

Invariants:
    - Only the device owner claims, into an account it holds
    - Zero balance -> NoRewardsToClaimError, so a repeated claim never double-pays
    - The full balance moves out of the reward pool and the balance resets to 0
"""

from dataclasses import dataclass, replace

from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.enforce_accounts import check_reward_pool, check_token_account
from swarmnet.core.errors import NoRewardsToClaimError, UnauthorizedError
from swarmnet.core.records import Device, GlobalRegistry, TokenAccount, TokenTransfer


@dataclass(frozen=True)
class ClaimOutcome:
    device: Device
    transfer: TokenTransfer


def claim_referral_rewards(
    registry: GlobalRegistry,
    device: Device,
    caller: Identity,
    destination: TokenAccount | None,
    destination_address: AccountAddress,
    reward_pool: AccountAddress,
) -> ClaimOutcome:
    if caller != device.owner_identity:
        raise UnauthorizedError(
            f"Only the device owner may claim referral rewards for "
            f"'{device.owner_identity}'",
        )
    check_token_account(destination, destination_address, caller, registry)
    check_reward_pool(registry, reward_pool)
    unclaimed = device.referral_rewards
    if unclaimed == 0:
        raise NoRewardsToClaimError(device.owner_identity)
    return ClaimOutcome(
        device=replace(device, referral_rewards=0),
        transfer=TokenTransfer(
            source=reward_pool,
            destination=destination_address,
            authority=registry.admin_identity,
            amount=unclaimed,
        ),
    )
