"""Registry & Device Routes — HTTP contract for bootstrap and device management.

Invariants:
    - POST /registry → 201 once, 409 ALREADY_INITIALIZED afterwards
    - Mutating routes without X-Caller-Identity → 401
    - Error bodies use the {"error": {...}} envelope
"""

from tests.services.ledger_helpers import ADMIN, NOW, as_caller


async def test_initialize_returns_registry(client):
    res = await client.post(
        "/api/v1/registry", json={}, headers=as_caller(ADMIN),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["admin_identity"] == ADMIN
    assert body["total_staked"] == 0
    assert body["total_rewards_distributed"] == 0
    assert body["reward_pool_reference"] != body["stake_pool_reference"]


async def test_initialize_twice_returns_409(client, bootstrapped):
    res = await client.post(
        "/api/v1/registry", json={}, headers=as_caller("someone-else"),
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_INITIALIZED"
    registry = (await client.get("/api/v1/registry")).json()
    assert registry["admin_identity"] == ADMIN


async def test_initialize_rejects_decimals_above_u8(client):
    res = await client.post(
        "/api/v1/registry", json={"token_decimals": 256}, headers=as_caller(ADMIN),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_get_registry_before_bootstrap_returns_409(client):
    res = await client.get("/api/v1/registry")
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "NOT_INITIALIZED"


async def test_missing_caller_header_returns_401(client):
    res = await client.post(
        "/api/v1/devices", json={"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


async def test_register_device(client):
    res = await client.post(
        "/api/v1/devices",
        json={"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000, "referrer": "rita"},
        headers=as_caller("dave"),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["owner_identity"] == "dave"
    assert body["referrer"] == "rita"
    assert body["is_active"] is True
    assert body["last_active"] == NOW
    assert body["staked_amount"] == 0


async def test_register_device_twice_returns_409(client):
    payload = {"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000}
    await client.post("/api/v1/devices", json=payload, headers=as_caller("dave"))
    res = await client.post("/api/v1/devices", json=payload, headers=as_caller("dave"))
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_REGISTERED"


async def test_register_device_with_65_byte_model_returns_400(client):
    res = await client.post(
        "/api/v1/devices",
        json={"gpu_model": "x" * 65, "vram": 24, "hash_rate": 1000},
        headers=as_caller("dave"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STRING_LENGTH"
    assert (await client.get("/api/v1/devices/dave")).status_code == 404


async def test_status_update_owner_only(client, clock):
    await client.post(
        "/api/v1/devices",
        json={"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000},
        headers=as_caller("dave"),
    )
    res = await client.patch(
        "/api/v1/devices/dave/status", json={"is_active": False},
        headers=as_caller("mallory"),
    )
    assert res.status_code == 403

    clock.advance(10)
    res = await client.patch(
        "/api/v1/devices/dave/status", json={"is_active": False},
        headers=as_caller("dave"),
    )
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    assert res.json()["last_active"] == NOW + 10


async def test_list_devices_with_active_filter(client):
    for owner in ("a", "b"):
        await client.post(
            "/api/v1/devices",
            json={"gpu_model": "GPU", "vram": 8, "hash_rate": 10},
            headers=as_caller(owner),
        )
    await client.patch(
        "/api/v1/devices/b/status", json={"is_active": False}, headers=as_caller("b"),
    )
    res = await client.get("/api/v1/devices", params={"active": "true"})
    assert res.status_code == 200
    assert [d["owner_identity"] for d in res.json()["devices"]] == ["a"]


async def test_list_devices_caps_limit(client, settings_override):
    settings_override.max_page_size = 5
    res = await client.get("/api/v1/devices", params={"limit": 500})
    assert res.json()["pagination"]["limit"] == 5


async def test_caller_identity_over_64_bytes_returns_400(client):
    res = await client.post(
        "/api/v1/devices",
        json={"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000},
        headers=as_caller("c" * 65),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STRING_LENGTH"


async def test_caller_identity_of_64_bytes_accepted(client):
    res = await client.post(
        "/api/v1/devices",
        json={"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000},
        headers=as_caller("c" * 64),
    )
    assert res.status_code == 201


async def test_owner_path_over_64_chars_returns_400(client):
    res = await client.patch(
        f"/api/v1/devices/{'o' * 65}/status", json={"is_active": False},
        headers=as_caller("dave"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_error_envelope_names_operation_and_caller(client):
    payload = {"gpu_model": "RTX 4090", "vram": 24, "hash_rate": 1000}
    await client.post("/api/v1/devices", json=payload, headers=as_caller("dave"))
    res = await client.post("/api/v1/devices", json=payload, headers=as_caller("dave"))
    context = res.json()["error"]["context"]
    assert context == {"operation": "register_device", "identity": "dave"}
