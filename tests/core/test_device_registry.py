"""Device Registry — tests for registration and status rules.

Tests cover:
    - New device starts active with every accumulator at zero
    - gpu_model byte limit enforced before the duplicate check
    - Duplicate owner rejected
    - Referrer stored verbatim
    - Status change is owner-only and touches only is_active / last_active
"""

import pytest

from swarmnet.core.device_registry import register_device, update_device_status
from swarmnet.core.domain_types import Identity
from swarmnet.core.errors import (
    AlreadyRegisteredError, InvalidStringLengthError, ResourceNotFoundError,
    UnauthorizedError,
)

OWNER = Identity("alice")
NOW = 1_700_000_000


def _device(**overrides):
    params = dict(
        existing=None, owner=OWNER, gpu_model="RTX 4090", vram=24,
        hash_rate=1000, referrer=None, now=NOW,
    )
    params.update(overrides)
    return register_device(**params)


def test_register_device_starts_active_with_zero_accumulators():
    device = _device()
    assert device.owner_identity == OWNER
    assert device.is_active is True
    assert device.last_active == NOW
    assert device.total_rewards == 0
    assert device.referral_rewards == 0
    assert device.staked_amount == 0
    assert device.referrer is None


def test_register_device_stores_referrer_verbatim():
    device = _device(referrer=Identity("not-registered-anywhere"))
    assert device.referrer == "not-registered-anywhere"


def test_register_device_rejects_long_gpu_model():
    with pytest.raises(InvalidStringLengthError):
        _device(gpu_model="x" * 65)


def test_register_device_length_checked_before_duplicate():
    existing = _device()
    with pytest.raises(InvalidStringLengthError):
        _device(existing=existing, gpu_model="x" * 65)


def test_register_device_rejects_duplicate_owner():
    existing = _device()
    with pytest.raises(AlreadyRegisteredError) as exc:
        _device(existing=existing, gpu_model="A100")
    assert exc.value.http_status == 409


def test_update_status_deactivates_and_refreshes_last_active():
    device = _device()
    updated = update_device_status(device, OWNER, OWNER, False, NOW + 60)
    assert updated.is_active is False
    assert updated.last_active == NOW + 60
    assert updated.gpu_model == device.gpu_model
    assert updated.staked_amount == device.staked_amount


def test_update_status_rejects_non_owner():
    device = _device()
    with pytest.raises(UnauthorizedError):
        update_device_status(device, Identity("mallory"), OWNER, False, NOW)


def test_update_status_missing_device_is_not_found():
    with pytest.raises(ResourceNotFoundError):
        update_device_status(None, OWNER, OWNER, False, NOW)
