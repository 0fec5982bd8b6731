"""Marketplace — wires the stores together and orchestrates multi-store commands.

Invariants:
    - Exactly one SessionGuard per Marketplace; every gated store receives it
    - BookingLedger receives the same WorkerDirectory instance (review-count writes)
    - Booking reads go through a logged-in session; customer snapshots are not public
    - sign_up validates the profile fields before creating the account, and leaves
      the new user logged in with a saved profile

Design Decisions:
    - Constructor injection, no module-level store singletons inside core/
    - One process-wide Marketplace behind get_marketplace(): single-client model,
      state lost on restart; tests swap it via app.dependency_overrides
    - The first build runs under a module lock: sync dependencies run in the
      threadpool, so concurrent first requests must share one instance
"""

import logging
import threading
from dataclasses import dataclass

from worknearby.config import Settings, get_settings
from worknearby.core.booking_ledger import BookingLedger
from worknearby.core.errors import ValidationError
from worknearby.core.models import Booking, UserProfile
from worknearby.core.preferences_store import PreferencesStore
from worknearby.core.session_guard import Credentials, SessionGuard
from worknearby.core.user_directory import UserDirectory
from worknearby.core.worker_directory import WorkerDirectory

logger = logging.getLogger(__name__)


@dataclass
class Marketplace:
    guard: SessionGuard
    workers: WorkerDirectory
    bookings: BookingLedger
    users: UserDirectory
    preferences: PreferencesStore

    @classmethod
    def build(cls, settings: Settings | None = None) -> "Marketplace":
        settings = settings or get_settings()
        guard = SessionGuard(password_min_length=settings.password_min_length)
        workers = WorkerDirectory(
            guard, admin_requires_auth=settings.admin_requires_auth,
        )
        if not settings.admin_requires_auth:
            logger.warning(
                "Admin approval surface is reachable without authentication",
            )
        return cls(
            guard=guard,
            workers=workers,
            bookings=BookingLedger(guard, workers),
            users=UserDirectory(guard),
            preferences=PreferencesStore(),
        )

    def sign_up(
        self, email: str, password: str, name: str, phone: str, location: str = "",
    ) -> UserProfile:
        """Create an account, start its session and store its profile."""
        if not name or not name.strip():
            raise ValidationError("Name is required", field="name")
        if not phone or not phone.strip():
            raise ValidationError("Phone is required", field="phone")
        user_id = self.guard.register_account(email, password)
        self.guard.login(Credentials(email=email, password=password))
        return self.users.upsert(UserProfile(
            id=user_id,
            name=name,
            phone=phone,
            email=self.guard.email_of(user_id) or email,
            location=location,
        ))

    def current_profile(self) -> UserProfile:
        user_id = self.guard.require_authenticated("view your profile")
        return self.users.get(user_id)

    def book_for_current_user(
        self,
        worker_id: str,
        date: str,
        time: str,
        location: str | None = None,
        problem_description: str | None = None,
    ) -> Booking:
        """Create a booking with the logged-in user as the customer snapshot."""
        user_id = self.guard.require_authenticated("create a booking")
        return self.bookings.create(
            worker_id,
            self.users.customer_snapshot(user_id),
            date,
            time,
            location=location,
            problem_description=problem_description,
        )

    def my_bookings(self) -> list[Booking]:
        user_id = self.guard.require_authenticated("view your bookings")
        return self.bookings.list_for_customer(user_id)

    def booking(self, booking_id: str) -> Booking:
        self.guard.require_authenticated("view a booking")
        return self.bookings.get(booking_id)

    def worker_bookings(self, worker_id: str) -> list[Booking]:
        """Bookings made with one worker; the worker must exist."""
        self.guard.require_authenticated("view worker bookings")
        self.workers.get(worker_id)
        return self.bookings.list_for_worker(worker_id)


_marketplace: Marketplace | None = None
_marketplace_lock = threading.Lock()


def get_marketplace() -> Marketplace:
    """FastAPI dependency — the process-wide marketplace, built on first use."""
    global _marketplace
    if _marketplace is None:
        with _marketplace_lock:
            if _marketplace is None:
                _marketplace = Marketplace.build()
    return _marketplace
