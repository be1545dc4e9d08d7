"""Token Account Enforcement — ownership and mint checks before any transfer.

Invariants:
    - A token account used by an operation must exist, be held by the expected
      identity, and hold the registry mint
    - Pool references are compared against the ones bound at bootstrap
"""

from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.errors import (
    InvalidRewardPoolError, InvalidStakePoolError, ResourceNotFoundError,
    TokenAccountMismatchError,
)
from swarmnet.core.records import GlobalRegistry, TokenAccount


def check_token_account(
    account: TokenAccount | None,
    address: AccountAddress,
    owner: Identity,
    registry: GlobalRegistry,
) -> TokenAccount:
    if account is None:
        raise ResourceNotFoundError("TokenAccount", address)
    if account.owner != owner:
        raise TokenAccountMismatchError(address, f"not held by '{owner}'")
    if account.mint != registry.token_reference:
        raise TokenAccountMismatchError(address, "wrong mint")
    return account


def check_stake_pool(registry: GlobalRegistry, stake_pool: AccountAddress) -> None:
    if stake_pool != registry.stake_pool_reference:
        raise InvalidStakePoolError(stake_pool)


def check_reward_pool(registry: GlobalRegistry, reward_pool: AccountAddress) -> None:
    if reward_pool != registry.reward_pool_reference:
        raise InvalidRewardPoolError(reward_pool)
