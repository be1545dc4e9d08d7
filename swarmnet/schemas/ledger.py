"""Ledger Schemas — staking, reward distribution and referral claims.

Invariants:
    - amount is a positive u64
    - Pool references are passed explicitly so mismatches surface as
      InvalidStakePool / InvalidRewardPool instead of being silently corrected
"""

from pydantic import BaseModel, Field

from swarmnet.core.domain_types import U64_MAX
from swarmnet.core.referral_ledger import ClaimOutcome
from swarmnet.core.reward_distribution import RewardOutcome
from swarmnet.core.stake_ledger import StakeOutcome
from swarmnet.schemas.device import DeviceResponse


class StakeRequest(BaseModel):
    source_account: str = Field(min_length=1, max_length=64)
    stake_pool: str = Field(min_length=1, max_length=64)
    amount: int = Field(ge=1, le=U64_MAX)


class StakeResponse(BaseModel):
    device: DeviceResponse
    total_staked: int

    @classmethod
    def from_outcome(cls, outcome: StakeOutcome) -> "StakeResponse":
        return cls(
            device=DeviceResponse.from_record(outcome.device),
            total_staked=outcome.registry.total_staked,
        )


class RewardRequest(BaseModel):
    reward_pool: str = Field(min_length=1, max_length=64)
    destination: str = Field(min_length=1, max_length=64)
    amount: int = Field(ge=1, le=U64_MAX)
    referrer_destination: str | None = Field(None, min_length=1, max_length=64)


class RewardResponse(BaseModel):
    device: DeviceResponse
    total_rewards_distributed: int
    referral_amount: int
    referral_paid: bool

    @classmethod
    def from_outcome(cls, outcome: RewardOutcome) -> "RewardResponse":
        return cls(
            device=DeviceResponse.from_record(outcome.device),
            total_rewards_distributed=outcome.registry.total_rewards_distributed,
            referral_amount=outcome.referral_amount,
            referral_paid=outcome.referral_paid,
        )


class ReferralClaimRequest(BaseModel):
    destination: str = Field(min_length=1, max_length=64)
    reward_pool: str = Field(min_length=1, max_length=64)


class ReferralClaimResponse(BaseModel):
    device: DeviceResponse
    claimed: int

    @classmethod
    def from_outcome(cls, outcome: ClaimOutcome) -> "ReferralClaimResponse":
        return cls(
            device=DeviceResponse.from_record(outcome.device),
            claimed=outcome.transfer.amount,
        )
