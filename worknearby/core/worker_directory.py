"""Worker Directory — owns worker profiles and their approval state.

Invariants:
    - register() always yields status pending with a fresh id
    - Only approved profiles are visible to list_approved (and so to booking creation)
    - approve/reject apply only to pending profiles; decided profiles never change status
    - update() never touches id, status or reviews
    - Every mutation of one profile runs under that profile's record lock, taken
      only after the profile is found

Design Decisions:
    - Insertion-ordered dict: listing order is registration order unless sorted by rating
    - Admin decisions bypass authentication unless admin_requires_auth is set;
      anonymous decisions are logged at warning level
"""

import copy
import logging
import threading
import uuid
from dataclasses import dataclass

from worknearby.core.domain_types import (
    ApprovalStatus, PortfolioItemId, WorkerCategory, WorkerId,
)
from worknearby.core.enforce_approval import (
    check_availability, check_decision, check_hourly_rate, check_rating,
    parse_category, validate_worker_draft,
)
from worknearby.core.errors import NotFoundError, ValidationError
from worknearby.core.models import (
    Availability, MapPosition, PortfolioItem, WorkerDraft, WorkerProfile,
)
from worknearby.core.record_locks import RecordLocks
from worknearby.core.session_guard import SessionGuard

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS: frozenset[str] = frozenset({
    "name", "phone", "rating", "hourly_rate", "location", "description",
    "image_url", "availability", "sub_specializations", "portfolio",
    "map_position",
})


@dataclass(frozen=True)
class WorkerFilter:
    category: WorkerCategory | None = None
    location: str | None = None
    max_rate: float | None = None

    def matches(self, worker: WorkerProfile) -> bool:
        if self.category is not None and worker.category != self.category:
            return False
        if self.location and self.location.strip().lower() not in worker.location.lower():
            return False
        if self.max_rate is not None and worker.hourly_rate > self.max_rate:
            return False
        return True


class WorkerDirectory:
    """Catalog of worker profiles."""

    def __init__(self, guard: SessionGuard, admin_requires_auth: bool = False) -> None:
        self._guard = guard
        self._admin_requires_auth = admin_requires_auth
        self._workers: dict[WorkerId, WorkerProfile] = {}
        self._insert_lock = threading.Lock()
        self._locks = RecordLocks()

    # --- Queries -------------------------------------------------------------

    def get(self, worker_id: str) -> WorkerProfile:
        worker = self._workers.get(WorkerId(worker_id))
        if worker is None:
            raise NotFoundError("Worker", worker_id)
        return worker

    def list_approved(
        self, criteria: WorkerFilter | None = None, sort_by_rating: bool = False,
    ) -> list[WorkerProfile]:
        criteria = criteria or WorkerFilter()
        result = [
            w for w in self._workers.values()
            if w.is_approved and criteria.matches(w)
        ]
        if sort_by_rating:
            # sorted() is stable: equal ratings keep registration order
            result = sorted(result, key=lambda w: w.rating, reverse=True)
        return result

    def list_pending(self) -> list[WorkerProfile]:
        return [
            w for w in self._workers.values()
            if w.status == ApprovalStatus.PENDING
        ]

    def list_all(self) -> list[WorkerProfile]:
        return list(self._workers.values())

    # --- Commands ------------------------------------------------------------

    def register(self, draft: WorkerDraft) -> WorkerProfile:
        """Create a pending profile from a registration draft."""
        self._guard.require_authenticated("register a worker")
        error = validate_worker_draft(draft)
        if error:
            raise error

        worker = WorkerProfile(
            id=WorkerId(str(uuid.uuid4())),
            name=draft.name.strip(),
            phone=draft.phone.strip(),
            category=parse_category(draft.category),
            rating=draft.rating,
            hourly_rate=draft.hourly_rate,
            location=draft.location,
            description=draft.description,
            image_url=draft.image_url,
            availability=copy.deepcopy(draft.availability),
            sub_specializations=_dedupe(draft.sub_specializations),
            map_position=draft.map_position,
        )
        with self._insert_lock:
            self._workers[worker.id] = worker
        logger.info(
            f"Worker registered: {worker.name} ({worker.category.value})",
            extra={"worker_id": worker.id, "status": worker.status.value},
        )
        return worker

    def approve(self, worker_id: str) -> WorkerProfile:
        return self._decide(worker_id, ApprovalStatus.APPROVED)

    def reject(self, worker_id: str) -> WorkerProfile:
        return self._decide(worker_id, ApprovalStatus.REJECTED)

    def update(self, worker_id: str, changes: dict) -> WorkerProfile:
        """Edit profile attributes. Existing booking snapshots are unaffected."""
        self._guard.require_authenticated("update a worker profile")
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Field(s) not updatable: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        worker = self.get(worker_id)
        with self._locks.hold(worker.id):
            error = _check_changes(changes)
            if error:
                raise error
            for name, value in changes.items():
                setattr(worker, name, _normalize_change(name, value))
        logger.info(
            f"Worker profile updated: {', '.join(sorted(changes))}",
            extra={"worker_id": worker_id},
        )
        return worker

    def add_portfolio_item(
        self, worker_id: str, image_url: str, description: str = "",
    ) -> PortfolioItem:
        self._guard.require_authenticated("add a portfolio item")
        if not image_url or not image_url.strip():
            raise ValidationError("Image URL is required", field="image_url")
        item = PortfolioItem(
            id=PortfolioItemId(str(uuid.uuid4())),
            image_url=image_url.strip(),
            description=description,
        )
        worker = self.get(worker_id)
        with self._locks.hold(worker.id):
            worker.portfolio.append(item)
        return item

    def increment_reviews(self, worker_id: str) -> int:
        """Bump the review count by one. Called by BookingLedger.submit_review."""
        worker = self.get(worker_id)
        with self._locks.hold(worker.id):
            worker.reviews += 1
            return worker.reviews

    # --- Helpers -------------------------------------------------------------

    def _decide(self, worker_id: str, target: ApprovalStatus) -> WorkerProfile:
        if self._admin_requires_auth:
            self._guard.require_authenticated(f"mark a worker {target.value}")
        anonymous = not self._guard.is_authenticated()

        worker = self.get(worker_id)
        with self._locks.hold(worker.id):
            error = check_decision(worker_id, worker.status, target)
            if error:
                raise error
            worker.status = target
        if anonymous:
            logger.warning(
                "Unauthenticated admin decision applied",
                extra={"worker_id": worker_id, "status": target.value},
            )
        logger.info(
            f"Worker {target.value}: {worker.name}",
            extra={"worker_id": worker_id, "status": target.value},
        )
        return worker


def _dedupe(values: list[str]) -> list[str]:
    """Drop blanks and repeats, keep first-seen order."""
    seen: dict[str, None] = {}
    for v in values:
        v = v.strip()
        if v:
            seen.setdefault(v, None)
    return list(seen)


def _check_changes(changes: dict):
    if "name" in changes and not str(changes["name"] or "").strip():
        return ValidationError("Name is required", field="name")
    if "phone" in changes and not str(changes["phone"] or "").strip():
        return ValidationError("Phone is required", field="phone")
    if "hourly_rate" in changes:
        error = check_hourly_rate(changes["hourly_rate"])
        if error:
            return error
    if "rating" in changes:
        error = check_rating(changes["rating"])
        if error:
            return error
    if "availability" in changes:
        return check_availability(_as_availability(changes["availability"]))
    return None


def _as_availability(value) -> Availability:
    if isinstance(value, Availability):
        return value
    return Availability(days=list(value.get("days", [])), hours=value.get("hours", ""))


def _normalize_change(name: str, value):
    if name == "availability":
        return _as_availability(value)
    if name == "sub_specializations":
        return _dedupe(list(value))
    if name == "map_position" and isinstance(value, dict):
        return MapPosition(top=value["top"], left=value["left"])
    if name == "portfolio":
        return [
            item if isinstance(item, PortfolioItem) else PortfolioItem(
                id=PortfolioItemId(item.get("id") or str(uuid.uuid4())),
                image_url=item["image_url"],
                description=item.get("description", ""),
            )
            for item in value
        ]
    if name in ("name", "phone"):
        return value.strip()
    return value
