"""Core test fixtures — fresh in-memory stores wired the way Marketplace wires them.

Invariants:
    - Every test gets new stores (no state shared between tests)
    - `guard` starts logged out; `signed_in` logs a customer in and saves their profile
    - `approved_worker` is registered and approved, hourly rate 500
"""

import pytest

from worknearby.core.booking_ledger import BookingLedger
from worknearby.core.models import UserProfile, WorkerDraft
from worknearby.core.session_guard import Credentials, SessionGuard
from worknearby.core.user_directory import UserDirectory
from worknearby.core.worker_directory import WorkerDirectory

CUSTOMER_EMAIL = "asha@example.com"
CUSTOMER_PASSWORD = "secret-pass"


@pytest.fixture
def guard():
    return SessionGuard()


@pytest.fixture
def workers(guard):
    return WorkerDirectory(guard)


@pytest.fixture
def ledger(guard, workers):
    return BookingLedger(guard, workers)


@pytest.fixture
def users(guard):
    return UserDirectory(guard)


@pytest.fixture
def signed_in(guard, users):
    """Log a customer in and return their saved profile."""
    user_id = guard.register_account(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
    guard.login(Credentials(CUSTOMER_EMAIL, CUSTOMER_PASSWORD))
    return users.upsert(UserProfile(
        id=user_id, name="Asha Patil", phone="9876543210", email=CUSTOMER_EMAIL,
    ))


@pytest.fixture
def customer(users, signed_in):
    return users.customer_snapshot(signed_in.id)


def _draft(**overrides) -> WorkerDraft:
    fields = {
        "name": "Ravi Kumar",
        "phone": "9000000001",
        "category": "Electrician",
        "hourly_rate": 500.0,
        "location": "Yavatmal",
        "image_url": "https://img.example/ravi.png",
        "rating": 4.5,
    }
    fields.update(overrides)
    return WorkerDraft(**fields)


@pytest.fixture
def make_draft():
    """Factory for valid registration drafts; keyword overrides replace fields."""
    return _draft


@pytest.fixture
def approved_worker(workers, signed_in):
    worker = workers.register(_draft())
    return workers.approve(worker.id)
