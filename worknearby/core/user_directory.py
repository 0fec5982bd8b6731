"""User Directory — customer profiles referenced by booking snapshots.

Invariants:
    - upsert requires an authenticated session and a non-blank name and phone
    - Bookings copy name/phone at creation, so edits here never alter booking history
"""

import copy
import logging
import threading

from worknearby.core.errors import NotFoundError, ValidationError
from worknearby.core.models import CustomerSnapshot, UserProfile
from worknearby.core.session_guard import SessionGuard

logger = logging.getLogger(__name__)


class UserDirectory:

    def __init__(self, guard: SessionGuard) -> None:
        self._guard = guard
        self._users: dict[str, UserProfile] = {}
        self._lock = threading.Lock()

    def upsert(self, profile: UserProfile) -> UserProfile:
        self._guard.require_authenticated("save a user profile")
        if not profile.name or not profile.name.strip():
            raise ValidationError("Name is required", field="name")
        if not profile.phone or not profile.phone.strip():
            raise ValidationError("Phone is required", field="phone")
        stored = copy.copy(profile)
        stored.name = profile.name.strip()
        stored.phone = profile.phone.strip()
        with self._lock:
            created = stored.id not in self._users
            self._users[stored.id] = stored
        logger.info(
            "User profile created" if created else "User profile updated",
            extra={"user_id": stored.id},
        )
        return stored

    def get(self, identity: str) -> UserProfile:
        profile = self._users.get(identity)
        if profile is None:
            raise NotFoundError("User", identity)
        return profile

    def customer_snapshot(self, identity: str) -> CustomerSnapshot:
        profile = self.get(identity)
        return CustomerSnapshot(
            customer_id=profile.id,
            customer_name=profile.name,
            customer_phone=profile.phone,
        )
