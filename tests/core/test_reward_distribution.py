"""Reward Distribution & Referral Ledger — tests for payouts and referral bonuses.

Tests cover:
    - Admin-only distribution from the registry reward pool
    - Totals grow by `amount`; referral does NOT count toward the registry total
    - Referral bonus 5% floored, paid only with a referrer destination
    - Skipped bonus leaves referral_rewards unchanged
    - Referrer destination must be held by the referrer
    - Claim pays the full balance, resets to zero, second claim rejected
"""

from dataclasses import replace

import pytest

from swarmnet.core.device_registry import register_device
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.errors import (
    InvalidRewardPoolError, NoRewardsToClaimError, TokenAccountMismatchError,
    UnauthorizedError,
)
from swarmnet.core.records import TokenAccount
from swarmnet.core.referral_ledger import claim_referral_rewards
from swarmnet.core.registry_bootstrap import build_registry
from swarmnet.core.reward_distribution import distribute_reward

ADMIN = Identity("admin")
OWNER = Identity("dave")
REFERRER = Identity("rita")
MINT = AccountAddress("mint")
REWARD_POOL = AccountAddress("reward-pool")

REGISTRY = build_registry(ADMIN, MINT, REWARD_POOL, AccountAddress("stake-pool"))
DEVICE = register_device(None, OWNER, "A100", 80, 900, REFERRER, 0)
DEST = TokenAccount(address=AccountAddress("dave-wallet"), owner=OWNER, mint=MINT)
REF_DEST = TokenAccount(address=AccountAddress("rita-wallet"), owner=REFERRER, mint=MINT)


def _distribute(amount=1000, device=DEVICE, caller=ADMIN, ref_dest=REF_DEST,
                reward_pool=REWARD_POOL, registry=REGISTRY):
    return distribute_reward(
        registry, device, caller, reward_pool, DEST, DEST.address, amount,
        ref_dest, ref_dest.address if ref_dest else None,
    )


# ─── distribute_reward ──────────────────────────────────────────

def test_distribute_updates_totals():
    outcome = _distribute(1000)
    assert outcome.device.total_rewards == 1000
    assert outcome.registry.total_rewards_distributed == 1000


def test_distribute_pays_referral_bonus():
    outcome = _distribute(1000)
    assert outcome.referral_amount == 50
    assert outcome.referral_paid is True
    assert outcome.device.referral_rewards == 50
    assert [t.amount for t in outcome.transfers] == [1000, 50]
    assert outcome.transfers[1].destination == REF_DEST.address


def test_referral_not_counted_in_registry_total():
    outcome = _distribute(100)
    assert outcome.referral_amount == 5
    assert outcome.registry.total_rewards_distributed == 100


def test_small_reward_floors_bonus_to_zero():
    outcome = _distribute(19)
    assert outcome.referral_amount == 0
    assert outcome.referral_paid is False
    assert outcome.device.referral_rewards == 0
    assert len(outcome.transfers) == 1


def test_missing_referrer_destination_skips_bonus():
    outcome = _distribute(1000, ref_dest=None)
    assert outcome.referral_amount == 50
    assert outcome.referral_paid is False
    assert outcome.device.referral_rewards == 0
    assert len(outcome.transfers) == 1


def test_device_without_referrer_pays_no_bonus():
    outcome = _distribute(1000, device=replace(DEVICE, referrer=None))
    assert outcome.referral_amount == 0
    assert len(outcome.transfers) == 1


def test_referrer_destination_must_belong_to_referrer():
    wrong = replace(REF_DEST, owner=Identity("mallory"))
    with pytest.raises(TokenAccountMismatchError):
        _distribute(1000, ref_dest=wrong)


def test_transfers_come_from_pool_under_admin_authority():
    for transfer in _distribute(1000).transfers:
        assert transfer.source == REWARD_POOL
        assert transfer.authority == ADMIN


def test_distribute_rejects_non_admin():
    with pytest.raises(UnauthorizedError):
        _distribute(caller=OWNER)


def test_distribute_rejects_wrong_reward_pool():
    with pytest.raises(InvalidRewardPoolError):
        _distribute(reward_pool=AccountAddress("fake-pool"))


# ─── claim_referral_rewards ─────────────────────────────────────

def test_claim_pays_full_balance_and_resets():
    device = _distribute(1000).device
    outcome = claim_referral_rewards(
        REGISTRY, device, OWNER, DEST, DEST.address, REWARD_POOL,
    )
    assert outcome.transfer.amount == 50
    assert outcome.transfer.destination == DEST.address
    assert outcome.device.referral_rewards == 0


def test_second_claim_rejected():
    device = _distribute(1000).device
    claimed = claim_referral_rewards(
        REGISTRY, device, OWNER, DEST, DEST.address, REWARD_POOL,
    ).device
    with pytest.raises(NoRewardsToClaimError):
        claim_referral_rewards(
            REGISTRY, claimed, OWNER, DEST, DEST.address, REWARD_POOL,
        )


def test_claim_rejects_non_owner():
    device = _distribute(1000).device
    with pytest.raises(UnauthorizedError):
        claim_referral_rewards(
            REGISTRY, device, REFERRER, REF_DEST, REF_DEST.address, REWARD_POOL,
        )


def test_claim_rejects_wrong_pool():
    device = _distribute(1000).device
    with pytest.raises(InvalidRewardPoolError):
        claim_referral_rewards(
            REGISTRY, device, OWNER, DEST, DEST.address, AccountAddress("x"),
        )
