"""Request schemas — shape checks and conversion into core inputs.

Invariants:
    - WorkerUpdate.to_changes only returns fields the caller set
    - An explicit null clears map_position; other nulls are dropped
    - SignUp normalizes email before it reaches the session guard

Design Decisions:
    - Required-field checks for worker registration live in core, so a
      WorkerRegister with missing name/phone still parses
"""

import pytest
from pydantic import ValidationError

from worknearby.core.domain_types import ApprovalStatus
from worknearby.schemas.account import SignUp
from worknearby.schemas.booking import BookingCreate
from worknearby.schemas.worker import (
    PortfolioItemCreate,
    WorkerRegister,
    WorkerUpdate,
)


# --- WorkerRegister -----------------------------------------------------------

def test_register_to_draft_copies_fields():
    body = WorkerRegister(
        name="Ravi", phone="900", category="Plumber", hourly_rate=300,
        availability={"days": ["Monday"], "hours": "9-5"},
        map_position={"top": "40%", "left": "55%"},
    )
    draft = body.to_draft()
    assert draft.name == "Ravi"
    assert draft.category == "Plumber"
    assert draft.availability.days == ["Monday"]
    assert draft.map_position.top == "40%"


def test_register_missing_name_still_parses():
    draft = WorkerRegister(phone="900", category="Plumber").to_draft()
    assert draft.name is None
    assert draft.map_position is None


def test_register_ignores_status_field():
    body = WorkerRegister(name="Ravi", status=ApprovalStatus.APPROVED.value)
    assert not hasattr(body, "status")


@pytest.mark.parametrize("field", ["hourly_rate", "rating"])
@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_register_refuses_non_finite_numbers(field, value):
    with pytest.raises(ValidationError):
        WorkerRegister(name="Ravi", **{field: value})


# --- WorkerUpdate -------------------------------------------------------------

def test_update_refuses_nan_rate():
    with pytest.raises(ValidationError):
        WorkerUpdate(hourly_rate=float("nan"))


def test_update_only_returns_set_fields():
    assert WorkerUpdate(hourly_rate=800).to_changes() == {"hourly_rate": 800}


def test_update_drops_null_fields():
    assert WorkerUpdate(name=None, rating=4.0).to_changes() == {"rating": 4.0}


def test_update_explicit_null_clears_map_position():
    assert WorkerUpdate(map_position=None).to_changes() == {"map_position": None}


def test_update_nested_availability_is_dumped_as_dict():
    changes = WorkerUpdate(availability={"days": ["Friday"]}).to_changes()
    assert changes["availability"] == {"days": ["Friday"], "hours": ""}


# --- PortfolioItemCreate ------------------------------------------------------

def test_portfolio_item_strips_url():
    assert PortfolioItemCreate(image_url="  https://img/1.png ").image_url == "https://img/1.png"


def test_portfolio_item_rejects_blank_url():
    with pytest.raises(ValidationError):
        PortfolioItemCreate(image_url="   ")


# --- SignUp / BookingCreate ---------------------------------------------------

def test_signup_normalizes_email():
    body = SignUp(
        email="  Asha@Example.COM ", password="secret-pass",
        name="Asha", phone="1",
    )
    assert body.email == "asha@example.com"
    assert body.location == ""


def test_booking_create_requires_worker_and_slot():
    with pytest.raises(ValidationError):
        BookingCreate(worker_id="", date="2026-10-20", time="9:00")
    body = BookingCreate(worker_id="w1", date="2026-10-20", time="9:00")
    assert body.location is None
    assert body.problem_description is None
