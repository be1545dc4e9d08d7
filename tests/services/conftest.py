"""Service test fixtures — async DB, handlers and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - get_clock overridden with a FixedClock so timestamps are deterministic
    - db_manager patched so readiness probes hit the test DB

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for handler and
      route tests (NUMERIC(20, 0) round-trips are PostgreSQL-only and not exercised)
    - Token balances seeded through SqlTokenLedger.mint_to under the admin identity,
      the same path an operator would use
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from swarmnet.api.dependencies import get_clock
from swarmnet.config import Settings, get_settings
from swarmnet.core.domain_types import AccountAddress, Identity
from swarmnet.core.task_lifecycle import TaskPolicy
from swarmnet.db.base import Base
from swarmnet.infrastructure.database import get_db, DatabaseSessionManager
from swarmnet.infrastructure.record_store import SqlRecordStore
from swarmnet.infrastructure.token_ledger import SqlTokenLedger
from swarmnet.services.handle_devices import DeviceHandlers
from swarmnet.services.handle_registry import RegistryHandlers
from swarmnet.services.handle_rewards import RewardHandlers
from swarmnet.services.handle_staking import StakingHandlers
from swarmnet.services.handle_tasks import TaskHandlers
import swarmnet.infrastructure.database as db_module
import swarmnet.models  # noqa: F401
from swarmnet.main import app

from tests.services.ledger_helpers import ADMIN, FixedClock, as_caller


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock()


# ─── Handler fixtures (one session, no commits) ─────────────────

@pytest.fixture
def store(test_db):
    return SqlRecordStore(test_db)


@pytest.fixture
def ledger(test_db):
    return SqlTokenLedger(test_db)


@pytest.fixture
def registry_handlers(store, ledger):
    return RegistryHandlers(store, ledger)


@pytest.fixture
def device_handlers(store, clock):
    return DeviceHandlers(store, clock)


@pytest.fixture
def task_handlers(store, clock):
    return TaskHandlers(store, clock, TaskPolicy())


@pytest.fixture
def staking_handlers(store, ledger):
    return StakingHandlers(store, ledger)


@pytest.fixture
def reward_handlers(store, ledger):
    return RewardHandlers(store, ledger)


@pytest.fixture
async def registry(registry_handlers):
    return await registry_handlers.initialize(ADMIN, 9)


@pytest.fixture
def fund(ledger, registry):
    """Open an account for `owner` holding `amount` tokens of the registry mint."""
    async def _fund(owner: str, amount: int = 0) -> AccountAddress:
        address = await ledger.open_account(registry.token_reference, Identity(owner))
        if amount:
            await ledger.mint_to(registry.token_reference, address, amount, ADMIN)
        return address
    return _fund


# ─── Route fixtures (session per request, routes commit) ────────

@pytest.fixture
def settings_override():
    """Mutable Settings instance served to routes; tests may flip fields."""
    return Settings(enforce_task_guards=True, dispatcher_identities=[])


@pytest.fixture
async def client(test_engine, test_session_factory, clock, settings_override):
    """FastAPI test client with DB, clock and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_settings] = lambda: settings_override

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def bootstrapped(client):
    """Registry initialized over HTTP by ADMIN; returns the registry JSON."""
    res = await client.post(
        "/api/v1/registry", json={"token_decimals": 9}, headers=as_caller(ADMIN),
    )
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def seed_account(test_session_factory):
    """Open (and optionally fund) a token account in its own committed session."""
    async def _seed(mint: str, owner: str, amount: int = 0) -> str:
        async with test_session_factory() as session:
            ledger = SqlTokenLedger(session)
            address = await ledger.open_account(AccountAddress(mint), Identity(owner))
            if amount:
                await ledger.mint_to(AccountAddress(mint), address, amount, ADMIN)
            await session.commit()
        return address
    return _seed


@pytest.fixture
def balance_of(test_session_factory):
    async def _balance(address: str) -> int:
        async with test_session_factory() as session:
            account = await SqlTokenLedger(session).get_account(AccountAddress(address))
            return account.balance
    return _balance


@pytest.fixture
def mint_tokens(test_session_factory):
    """Mint into an existing account (e.g. the reward pool) as ADMIN."""
    async def _mint(mint: str, address: str, amount: int) -> None:
        async with test_session_factory() as session:
            await SqlTokenLedger(session).mint_to(
                AccountAddress(mint), AccountAddress(address), amount, ADMIN,
            )
            await session.commit()
    return _mint
