"""Network & Health Routes — dashboard stats, audit and probes."""

from tests.services.ledger_helpers import as_caller


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness_with_test_db(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_stats_on_empty_network(client):
    res = await client.get("/api/v1/network/stats")
    assert res.status_code == 200
    body = res.json()
    assert body["total_devices"] == 0
    assert body["load_percentage"] == 0
    assert body["completed_tasks"] == 0


async def test_stats_count_devices_and_tasks(client, bootstrapped):
    for owner in ("a", "b"):
        await client.post(
            "/api/v1/devices",
            json={"gpu_model": "GPU", "vram": 8, "hash_rate": 10},
            headers=as_caller(owner),
        )
    await client.patch(
        "/api/v1/devices/b/status", json={"is_active": False}, headers=as_caller("b"),
    )
    await client.post(
        "/api/v1/tasks",
        json={"task_id": "t", "requirements": {"min_vram": 1, "min_hash_rate": 1}},
        headers=as_caller("a"),
    )
    body = (await client.get("/api/v1/network/stats")).json()
    assert body["total_devices"] == 2
    assert body["active_devices"] == 1
    assert body["load_percentage"] == 50
    assert body["tasks_by_status"]["pending"] == 1


async def test_audit_requires_registry(client):
    res = await client.get("/api/v1/network/audit")
    assert res.status_code == 409


async def test_audit_balanced_after_bootstrap(client, bootstrapped):
    body = (await client.get("/api/v1/network/audit")).json()
    assert body["staking"]["balanced"] is True
    assert body["rewards"]["balanced"] is True
