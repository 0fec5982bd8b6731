"""Booking Lifecycle — tests for the pure transition table.

Tests cover:
    - Each non-terminal status advances only to its immediate successor
    - Skipping ahead, moving backwards and leaving terminal states are rejected
    - Cancellation allowed from every non-terminal state
    - Review checks (completed only, once only)
    - Status label parsing
"""

import pytest

from worknearby.core.booking_lifecycle import (
    BOOKING_SEQUENCE, TERMINAL_STATUSES,
    allowed_targets, check_advance, check_cancel, check_review,
    is_terminal, next_status, parse_booking_status,
)
from worknearby.core.domain_types import BookingStatus
from worknearby.core.errors import (
    AlreadyReviewedError, InvalidTransitionError, ValidationError,
)

NON_TERMINAL = [s for s in BookingStatus if s not in TERMINAL_STATUSES]


# ─── Sequence ────────────────────────────────────────────────────

def test_sequence_runs_pending_to_completed():
    assert BOOKING_SEQUENCE[0] == BookingStatus.PENDING
    assert BOOKING_SEQUENCE[-1] == BookingStatus.COMPLETED
    assert BookingStatus.CANCELLED not in BOOKING_SEQUENCE


def test_terminal_states_are_completed_and_cancelled():
    assert TERMINAL_STATUSES == {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    assert is_terminal(BookingStatus.COMPLETED)
    assert not is_terminal(BookingStatus.IN_PROGRESS)


def test_next_status_follows_sequence():
    assert next_status(BookingStatus.PENDING) == BookingStatus.CONFIRMED
    assert next_status(BookingStatus.CONFIRMED) == BookingStatus.ON_WAY
    assert next_status(BookingStatus.ON_WAY) == BookingStatus.ARRIVED
    assert next_status(BookingStatus.ARRIVED) == BookingStatus.IN_PROGRESS
    assert next_status(BookingStatus.IN_PROGRESS) == BookingStatus.COMPLETED


def test_next_status_none_for_terminal():
    assert next_status(BookingStatus.COMPLETED) is None
    assert next_status(BookingStatus.CANCELLED) is None


# ─── check_advance ───────────────────────────────────────────────

@pytest.mark.parametrize("current", NON_TERMINAL)
def test_advance_to_successor_passes(current):
    assert check_advance("b1", current, next_status(current)) is None


@pytest.mark.parametrize("current", NON_TERMINAL)
def test_advance_to_cancelled_passes(current):
    assert check_advance("b1", current, BookingStatus.CANCELLED) is None


def test_advance_skipping_a_state_fails():
    error = check_advance("b1", BookingStatus.CONFIRMED, BookingStatus.ARRIVED)
    assert isinstance(error, InvalidTransitionError)
    assert error.current == "confirmed"
    assert error.target == "arrived"
    assert error.entity_id == "b1"


def test_pending_cannot_jump_to_completed():
    error = check_advance("b1", BookingStatus.PENDING, BookingStatus.COMPLETED)
    assert isinstance(error, InvalidTransitionError)


def test_advance_backwards_fails():
    error = check_advance("b1", BookingStatus.ARRIVED, BookingStatus.ON_WAY)
    assert isinstance(error, InvalidTransitionError)


def test_advance_to_same_state_fails():
    error = check_advance("b1", BookingStatus.CONFIRMED, BookingStatus.CONFIRMED)
    assert isinstance(error, InvalidTransitionError)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
@pytest.mark.parametrize("target", list(BookingStatus))
def test_nothing_leaves_a_terminal_state(terminal, target):
    assert isinstance(check_advance("b1", terminal, target), InvalidTransitionError)


def test_allowed_targets_lists_successor_then_cancelled():
    assert allowed_targets(BookingStatus.ON_WAY) == [
        BookingStatus.ARRIVED, BookingStatus.CANCELLED,
    ]
    assert allowed_targets(BookingStatus.COMPLETED) == []


# ─── check_cancel ────────────────────────────────────────────────

def test_cancel_from_pending_passes():
    assert check_cancel("b1", BookingStatus.PENDING) is None


def test_cancel_completed_fails():
    error = check_cancel("b1", BookingStatus.COMPLETED)
    assert isinstance(error, InvalidTransitionError)
    assert error.target == "cancelled"


def test_cancel_twice_fails():
    assert isinstance(
        check_cancel("b1", BookingStatus.CANCELLED), InvalidTransitionError,
    )


# ─── check_review ────────────────────────────────────────────────

def test_review_requires_completed():
    error = check_review("b1", BookingStatus.IN_PROGRESS, has_review=False)
    assert isinstance(error, InvalidTransitionError)


def test_review_on_cancelled_fails():
    error = check_review("b1", BookingStatus.CANCELLED, has_review=False)
    assert isinstance(error, InvalidTransitionError)


def test_review_on_completed_passes():
    assert check_review("b1", BookingStatus.COMPLETED, has_review=False) is None


def test_second_review_is_already_reviewed():
    error = check_review("b1", BookingStatus.COMPLETED, has_review=True)
    assert isinstance(error, AlreadyReviewedError)
    assert error.booking_id == "b1"


# ─── parse_booking_status ────────────────────────────────────────

def test_parse_known_label():
    assert parse_booking_status("on_way") == BookingStatus.ON_WAY


def test_parse_accepts_enum():
    assert parse_booking_status(BookingStatus.ARRIVED) == BookingStatus.ARRIVED


def test_parse_unknown_label_is_validation_error():
    with pytest.raises(ValidationError) as exc:
        parse_booking_status("teleported")
    assert exc.value.field == "status"
