"""Domain Records — dataclasses for every entity the stores own.

Invariants:
    - WorkerSnapshot and CustomerSnapshot are frozen: embedded by value, never edited
    - Booking holds worker_id / customer_id as plain references, never the live records
    - WorkerProfile.status changes only through WorkerDirectory.approve / reject

Design Decisions:
    - Dataclasses, not ORM rows: in-memory model, state lost on restart
    - Snapshots copied at booking creation so history never rewrites itself
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from worknearby.core.domain_types import (
    ApprovalStatus, BookingId, BookingStatus, DistanceUnit,
    PortfolioItemId, Theme, UserId, WorkerCategory, WorkerId,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ─── Worker ──────────────────────────────────────────────────────

@dataclass
class Availability:
    days: list[str] = field(default_factory=list)
    hours: str = ""


@dataclass
class PortfolioItem:
    id: PortfolioItemId
    image_url: str
    description: str = ""


@dataclass
class MapPosition:
    """Display-only coordinates for the demo map view (CSS percentages)."""
    top: str
    left: str


@dataclass
class WorkerDraft:
    """Registration input — validated by enforce_approval.validate_worker_draft."""
    name: str | None = None
    phone: str | None = None
    category: str | WorkerCategory | None = None
    hourly_rate: float = 0.0
    location: str = ""
    description: str = ""
    image_url: str = ""
    rating: float = 0.0
    availability: Availability = field(default_factory=Availability)
    sub_specializations: list[str] = field(default_factory=list)
    map_position: MapPosition | None = None


@dataclass
class WorkerProfile:
    id: WorkerId
    name: str
    phone: str
    category: WorkerCategory
    rating: float = 0.0
    hourly_rate: float = 0.0
    location: str = ""
    description: str = ""
    image_url: str = ""
    reviews: int = 0
    availability: Availability = field(default_factory=Availability)
    sub_specializations: list[str] = field(default_factory=list)
    portfolio: list[PortfolioItem] = field(default_factory=list)
    status: ApprovalStatus = ApprovalStatus.PENDING
    map_position: MapPosition | None = None
    registered_at: datetime = field(default_factory=_utcnow)

    @property
    def is_approved(self) -> bool:
        return self.status == ApprovalStatus.APPROVED


# ─── Booking ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class WorkerSnapshot:
    """Worker fields copied at booking time."""
    worker_name: str
    category: WorkerCategory
    price: float
    image_url: str

    @classmethod
    def of(cls, worker: WorkerProfile) -> "WorkerSnapshot":
        return cls(
            worker_name=worker.name,
            category=worker.category,
            price=worker.hourly_rate,
            image_url=worker.image_url,
        )


@dataclass(frozen=True)
class CustomerSnapshot:
    """Requester fields copied at booking time."""
    customer_id: UserId
    customer_name: str
    customer_phone: str


@dataclass
class Booking:
    id: BookingId
    worker_id: WorkerId
    worker: WorkerSnapshot
    customer: CustomerSnapshot
    date: str
    time: str
    location: str
    problem_description: str | None = None
    status: BookingStatus = BookingStatus.PENDING
    has_review: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    @property
    def customer_id(self) -> UserId:
        return self.customer.customer_id


# ─── User / Preferences ──────────────────────────────────────────

@dataclass
class UserProfile:
    id: UserId
    name: str
    phone: str
    email: str = ""
    location: str = ""
    image_url: str | None = None


@dataclass
class Preferences:
    theme: Theme = Theme.LIGHT
    distance_unit: DistanceUnit = DistanceUnit.KM
