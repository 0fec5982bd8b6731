"""Booking Ledger — owns bookings and enforces the lifecycle state machine.

Invariants:
    - A booking is created only against a worker that is approved at that instant
    - Status moves only to its immediate successor, or to cancelled from a non-terminal state
    - has_review flips false → true at most once, only while completed
    - The worker snapshot (name, category, price, image) never changes after creation
    - submit_review is the only write this ledger performs on WorkerDirectory
    - Each booking is mutated under its own record lock: of two concurrent
      transitions validated against the same prior state, exactly one wins
    - Record locks are taken only for bookings that exist

Design Decisions:
    - WorkerDirectory injected through the constructor (no hidden singleton coupling)
    - Transition decisions delegated to booking_lifecycle (single transition table)
    - Listing order is created_at descending, ties broken by insertion sequence
"""

import logging
import threading
import uuid

from worknearby.core.booking_lifecycle import (
    allowed_targets, check_advance, check_cancel, check_review, parse_booking_status,
)
from worknearby.core.domain_types import BookingId, BookingStatus
from worknearby.core.errors import NotFoundError, PreconditionError, ValidationError
from worknearby.core.models import Booking, CustomerSnapshot, WorkerSnapshot
from worknearby.core.record_locks import RecordLocks
from worknearby.core.session_guard import SessionGuard
from worknearby.core.worker_directory import WorkerDirectory

logger = logging.getLogger(__name__)


class BookingLedger:
    """Set of bookings plus their lifecycle rules."""

    def __init__(self, guard: SessionGuard, workers: WorkerDirectory) -> None:
        self._guard = guard
        self._workers = workers
        self._bookings: dict[BookingId, Booking] = {}
        self._sequence: dict[BookingId, int] = {}
        self._insert_lock = threading.Lock()
        self._locks = RecordLocks()

    # --- Queries -------------------------------------------------------------

    def get(self, booking_id: str) -> Booking:
        booking = self._bookings.get(BookingId(booking_id))
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    def list_for_customer(self, customer_id: str) -> list[Booking]:
        return self._most_recent_first(
            b for b in self._bookings.values() if b.customer_id == customer_id
        )

    def list_for_worker(self, worker_id: str) -> list[Booking]:
        return self._most_recent_first(
            b for b in self._bookings.values() if b.worker_id == worker_id
        )

    def allowed_transitions(self, booking_id: str) -> list[BookingStatus]:
        return allowed_targets(self.get(booking_id).status)

    # --- Commands ------------------------------------------------------------

    def create(
        self,
        worker_id: str,
        customer: CustomerSnapshot,
        date: str,
        time: str,
        location: str | None = None,
        problem_description: str | None = None,
    ) -> Booking:
        """Open a pending booking against an approved worker."""
        self._guard.require_authenticated("create a booking")
        worker = self._workers.get(worker_id)
        if not worker.is_approved:
            raise PreconditionError(
                f"Worker '{worker_id}' is not approved (status: {worker.status.value})",
                resource_id=worker_id,
            )
        if not date or not date.strip():
            raise ValidationError("Date is required", field="date")
        if not time or not time.strip():
            raise ValidationError("Time is required", field="time")

        booking = Booking(
            id=BookingId(str(uuid.uuid4())),
            worker_id=worker.id,
            worker=WorkerSnapshot.of(worker),
            customer=customer,
            date=date.strip(),
            time=time.strip(),
            location=(location or "").strip() or worker.location,
            problem_description=(problem_description or "").strip() or None,
        )
        with self._insert_lock:
            self._sequence[booking.id] = len(self._bookings)
            self._bookings[booking.id] = booking
        logger.info(
            f"Booking created with {booking.worker.worker_name}",
            extra={
                "booking_id": booking.id, "worker_id": worker.id,
                "user_id": customer.customer_id, "status": booking.status.value,
            },
        )
        return booking

    def advance(self, booking_id: str, target: str | BookingStatus) -> Booking:
        self._guard.require_authenticated("update a booking")
        status = parse_booking_status(target)
        booking = self.get(booking_id)
        with self._locks.hold(booking.id):
            error = check_advance(booking_id, booking.status, status)
            if error:
                raise error
            previous, booking.status = booking.status, status
        self._log_transition(booking, previous)
        return booking

    def cancel(self, booking_id: str) -> Booking:
        self._guard.require_authenticated("cancel a booking")
        booking = self.get(booking_id)
        with self._locks.hold(booking.id):
            error = check_cancel(booking_id, booking.status)
            if error:
                raise error
            previous, booking.status = booking.status, BookingStatus.CANCELLED
        self._log_transition(booking, previous)
        return booking

    def submit_review(self, booking_id: str) -> Booking:
        """Mark a completed booking reviewed and bump the worker's review count."""
        self._guard.require_authenticated("review a booking")
        booking = self.get(booking_id)
        with self._locks.hold(booking.id):
            error = check_review(booking_id, booking.status, booking.has_review)
            if error:
                raise error
            self._workers.increment_reviews(booking.worker_id)
            booking.has_review = True
        logger.info(
            "Booking reviewed",
            extra={"booking_id": booking.id, "worker_id": booking.worker_id},
        )
        return booking

    # --- Helpers -------------------------------------------------------------

    def _most_recent_first(self, bookings) -> list[Booking]:
        return sorted(
            bookings,
            key=lambda b: (b.created_at, self._sequence[b.id]),
            reverse=True,
        )

    def _log_transition(self, booking: Booking, previous: BookingStatus) -> None:
        logger.info(
            f"Booking {previous.value} -> {booking.status.value}",
            extra={"booking_id": booking.id, "status": booking.status.value},
        )
