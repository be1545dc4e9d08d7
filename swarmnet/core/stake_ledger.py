"""Stake Ledger — staking counters moved in lockstep with a token transfer.

Invariants:
    - Only the device owner stakes, from an account it holds, into the registry's stake pool
    - device.staked_amount and registry.total_staked grow by exactly `amount`
    - Both sums are overflow-checked BEFORE the transfer is planned: an overflow
      aborts with nothing moved
    - There is no unstake: staked amounts only increase
"""

from dataclasses import dataclass, replace

from swarmnet.core.checked_math import checked_add, require_u64
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.enforce_accounts import check_stake_pool, check_token_account
from swarmnet.core.errors import UnauthorizedError
from swarmnet.core.records import Device, GlobalRegistry, TokenAccount, TokenTransfer


@dataclass(frozen=True)
class StakeOutcome:
    device: Device
    registry: GlobalRegistry
    transfer: TokenTransfer


def stake_tokens(
    registry: GlobalRegistry,
    device: Device,
    caller: Identity,
    source: TokenAccount | None,
    source_address: AccountAddress,
    stake_pool: AccountAddress,
    amount: int,
) -> StakeOutcome:
    require_u64("amount", amount, positive=True)
    if caller != device.owner_identity:
        raise UnauthorizedError(
            f"Only the device owner may stake against '{device.owner_identity}'",
        )
    check_token_account(source, source_address, caller, registry)
    check_stake_pool(registry, stake_pool)

    staked = checked_add(device.staked_amount, amount)
    total = checked_add(registry.total_staked, amount)
    return StakeOutcome(
        device=replace(device, staked_amount=staked),
        registry=replace(registry, total_staked=total),
        transfer=TokenTransfer(
            source=source_address,
            destination=stake_pool,
            authority=caller,
            amount=amount,
        ),
    )
