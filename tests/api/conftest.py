"""API test fixtures — FastAPI app with a fresh Marketplace per test.

Invariants:
    - get_marketplace dependency overridden: no state leaks between tests
    - `client` starts anonymous; `customer_client` has signed up and is logged in
    - `approved_worker_id` is registered through the API and approved via /admin

Design Decisions:
    - httpx AsyncClient + ASGITransport: exercises routing, validation and error
      handlers without a running server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from worknearby.config import Settings
from worknearby.main import app
from worknearby.services.marketplace import Marketplace, get_marketplace

SIGNUP = {
    "email": "asha@example.com",
    "password": "secret-pass",
    "name": "Asha Patil",
    "phone": "9876543210",
    "location": "Yavatmal",
}

WORKER = {
    "name": "Ravi Kumar",
    "phone": "9000000001",
    "category": "Electrician",
    "hourly_rate": 500,
    "location": "Yavatmal",
    "rating": 4.5,
    "availability": {"days": ["Monday", "Tuesday"], "hours": "9 AM - 6 PM"},
    "sub_specializations": ["Wiring", "Inverters"],
}


@pytest.fixture
def market():
    return Marketplace.build(Settings(admin_requires_auth=False))


@pytest.fixture
async def client(market):
    app.dependency_overrides[get_marketplace] = lambda: market
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def customer_client(client):
    res = await client.post("/api/v1/auth/signup", json=SIGNUP)
    assert res.status_code == 201
    return client


@pytest.fixture
async def approved_worker_id(customer_client):
    res = await customer_client.post("/api/v1/workers", json=WORKER)
    assert res.status_code == 201
    worker_id = res.json()["id"]
    res = await customer_client.post(f"/api/v1/admin/workers/{worker_id}/approve")
    assert res.status_code == 200
    return worker_id


@pytest.fixture
def signup_payload():
    return dict(SIGNUP)


@pytest.fixture
def worker_payload():
    return dict(WORKER)
