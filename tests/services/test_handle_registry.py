"""Registry Handlers — bootstrap against the SQL store and token ledger.

Invariants:
    - initialize creates a mint plus two admin-held pool accounts
    - A second initialize fails before creating any further ledger objects
    - Reads before bootstrap fail with NotInitializedError
"""

import pytest
from sqlalchemy import func, select

from swarmnet.core.errors import AlreadyInitializedError, NotInitializedError
from swarmnet.models.token_account import TokenAccount as TokenAccountModel

from tests.services.ledger_helpers import ADMIN


async def test_initialize_binds_references_and_zero_counters(registry, ledger):
    assert registry.admin_identity == ADMIN
    assert registry.total_staked == 0
    assert registry.total_rewards_distributed == 0
    reward_pool = await ledger.get_account(registry.reward_pool_reference)
    stake_pool = await ledger.get_account(registry.stake_pool_reference)
    assert reward_pool.owner == ADMIN
    assert stake_pool.owner == ADMIN
    assert reward_pool.mint == stake_pool.mint == registry.token_reference


async def test_second_initialize_rejected_without_side_effects(
    registry, registry_handlers, test_db,
):
    count = select(func.count()).select_from(TokenAccountModel)
    before = (await test_db.execute(count)).scalar_one()
    with pytest.raises(AlreadyInitializedError):
        await registry_handlers.initialize(ADMIN, 9)
    assert (await test_db.execute(count)).scalar_one() == before


async def test_get_registry_before_bootstrap(registry_handlers):
    with pytest.raises(NotInitializedError):
        await registry_handlers.get_registry()
