"""API test fixtures — FastAPI test client over the in-memory database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness check sees the test engine
    - Reference rows created through the API, as a client would
"""

import pytest
from httpx import ASGITransport, AsyncClient

from brewlog.infrastructure.database import get_db, DatabaseSessionManager
import brewlog.infrastructure.database as db_module
from brewlog.main import app
from tests.api.payloads import BEAN, ESPRESSO_MACHINE, GRIND


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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
async def bean(client):
    res = await client.post("/api/v1/coffee-beans", json=BEAN)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def grind(client):
    res = await client.post("/api/v1/grind-settings", json=GRIND)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
async def machine(client):
    res = await client.post("/api/v1/equipment", json=ESPRESSO_MACHINE)
    assert res.status_code == 201, res.text
    return res.json()


@pytest.fixture
def espresso(bean, grind, machine):
    """Factory for a valid espresso brew payload referencing the seeded rows."""
    def _make(**overrides):
        payload = {
            "method": "Espresso", "water_temperature": 93.0,
            "brew_time_seconds": 28, "tasting_notes": "Bright, citrus",
            "rating": 8, "is_favorite": False,
            "coffee_bean_id": bean["id"], "grind_setting_id": grind["id"],
            "brewing_equipment_id": machine["id"],
        }
        payload.update(overrides)
        return payload
    return _make
