"""Booking Lifecycle — the exhaustive transition table for BookingStatus.

Invariants:
    - All functions are PURE: no IO, no store access, no side effects
    - advance accepts only the immediate successor, or cancelled from a non-terminal state
    - completed and cancelled are terminal: nothing leaves them
    - A review is accepted only on a completed booking without one
    - Return the error on violation, None on success; the store raises it

Design Decisions:
    - One table instead of per-call-site status checks: every transition decision
      in the codebase goes through check_advance / check_cancel / check_review
    - Errors returned rather than raised so callers can probe (allowed_targets)
      without try/except
"""

from worknearby.core.domain_types import BookingStatus
from worknearby.core.errors import (
    AlreadyReviewedError, InvalidTransitionError, MarketplaceError, ValidationError,
)


BOOKING_SEQUENCE: tuple[BookingStatus, ...] = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.ON_WAY,
    BookingStatus.ARRIVED,
    BookingStatus.IN_PROGRESS,
    BookingStatus.COMPLETED,
)

TERMINAL_STATUSES: frozenset[BookingStatus] = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
})


def parse_booking_status(label: str | BookingStatus) -> BookingStatus:
    """Map an external label to BookingStatus or raise ValidationError."""
    try:
        return BookingStatus(label)
    except ValueError:
        raise ValidationError(
            f"Unknown booking status '{label}'", field="status",
        ) from None


def is_terminal(status: BookingStatus) -> bool:
    return status in TERMINAL_STATUSES


def next_status(current: BookingStatus) -> BookingStatus | None:
    """Immediate successor in the progression, None for terminal states."""
    if is_terminal(current):
        return None
    index = BOOKING_SEQUENCE.index(current)
    return BOOKING_SEQUENCE[index + 1]


def allowed_targets(current: BookingStatus) -> list[BookingStatus]:
    """Statuses advance() would accept from current, successor first."""
    successor = next_status(current)
    if successor is None:
        return []
    return [successor, BookingStatus.CANCELLED]


def check_advance(
    booking_id: str, current: BookingStatus, target: BookingStatus,
) -> MarketplaceError | None:
    """Validate a forward move or a cancellation."""
    if target in allowed_targets(current):
        return None
    return InvalidTransitionError(
        "Booking", booking_id, current.value, target.value,
    )


def check_cancel(booking_id: str, current: BookingStatus) -> MarketplaceError | None:
    return check_advance(booking_id, current, BookingStatus.CANCELLED)


def check_review(
    booking_id: str, current: BookingStatus, has_review: bool,
) -> MarketplaceError | None:
    """Reviews need a completed booking that has not been reviewed yet."""
    if current != BookingStatus.COMPLETED:
        return InvalidTransitionError(
            "Booking", booking_id, current.value, "reviewed",
        )
    if has_review:
        return AlreadyReviewedError(booking_id)
    return None
