"""Registry Bootstrap — one-time creation of the global registry singleton.

Invariants:
    - Initialization fails with AlreadyInitializedError if the singleton exists,
      and that check runs before any ledger side effect
    - Both counters start at zero
    - Operations that need the registry fail with NotInitializedError before bootstrap
"""

from swarmnet.core.checked_math import require_u64
from swarmnet.core.domain_types import U8_MAX, AccountAddress, Identity
from swarmnet.core.errors import AlreadyInitializedError, NotInitializedError
from swarmnet.core.records import GlobalRegistry


def check_bootstrap(existing: GlobalRegistry | None, token_decimals: int) -> None:
    """Preconditions for initialize. Pure — raises, never mutates."""
    if existing is not None:
        raise AlreadyInitializedError()
    require_u64("token_decimals", token_decimals, maximum=U8_MAX)


def build_registry(
    admin: Identity,
    token: AccountAddress,
    reward_pool: AccountAddress,
    stake_pool: AccountAddress,
) -> GlobalRegistry:
    return GlobalRegistry(
        admin_identity=admin,
        token_reference=token,
        reward_pool_reference=reward_pool,
        stake_pool_reference=stake_pool,
        total_staked=0,
        total_rewards_distributed=0,
    )


def require_registry(registry: GlobalRegistry | None) -> GlobalRegistry:
    if registry is None:
        raise NotInitializedError()
    return registry
