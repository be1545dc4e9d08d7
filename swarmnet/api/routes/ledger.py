"""Ledger Routes — staking, reward distribution, referral claims.

Invariants:
    - Each route is one atomic operation: token transfers and counter updates
      commit together or not at all
    - Pool addresses travel in the body and are checked against the registry
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from swarmnet.api.dependencies import (
    OwnerPath, get_caller, reward_handlers, staking_handlers,
)
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.infrastructure.database import get_db
from swarmnet.schemas.ledger import (
    ReferralClaimRequest, ReferralClaimResponse, RewardRequest, RewardResponse,
    StakeRequest, StakeResponse,
)
from swarmnet.services.handle_rewards import RewardHandlers
from swarmnet.services.handle_staking import StakingHandlers

router = APIRouter(prefix="/api/v1/devices", tags=["ledger"])


@router.post("/{owner}/stake", response_model=StakeResponse)
async def stake_tokens(
    owner: OwnerPath,
    body: StakeRequest,
    caller: Identity = Depends(get_caller),
    handlers: StakingHandlers = Depends(staking_handlers),
    db: AsyncSession = Depends(get_db),
):
    outcome = await handlers.stake_tokens(
        caller, Identity(owner),
        AccountAddress(body.source_account), AccountAddress(body.stake_pool),
        body.amount,
    )
    await db.commit()
    return StakeResponse.from_outcome(outcome)


@router.post("/{owner}/rewards", response_model=RewardResponse)
async def distribute_reward(
    owner: OwnerPath,
    body: RewardRequest,
    caller: Identity = Depends(get_caller),
    handlers: RewardHandlers = Depends(reward_handlers),
    db: AsyncSession = Depends(get_db),
):
    outcome = await handlers.distribute_reward(
        caller, Identity(owner),
        AccountAddress(body.reward_pool), AccountAddress(body.destination),
        body.amount,
        AccountAddress(body.referrer_destination) if body.referrer_destination else None,
    )
    await db.commit()
    return RewardResponse.from_outcome(outcome)


@router.post("/{owner}/referral-claims", response_model=ReferralClaimResponse)
async def claim_referral_rewards(
    owner: OwnerPath,
    body: ReferralClaimRequest,
    caller: Identity = Depends(get_caller),
    handlers: RewardHandlers = Depends(reward_handlers),
    db: AsyncSession = Depends(get_db),
):
    outcome = await handlers.claim_referral_rewards(
        caller, Identity(owner),
        AccountAddress(body.destination), AccountAddress(body.reward_pool),
    )
    await db.commit()
    return ReferralClaimResponse.from_outcome(outcome)
