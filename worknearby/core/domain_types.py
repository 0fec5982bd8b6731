"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - WorkerId, BookingId, UserId, PortfolioItemId wrap uuid4 strings — never mix them
    - Rating is bounded 0.0–5.0; HourlyRate is non-negative
    - All valid states encoded as Enums — no raw string matching
    - Enum values are the external string labels (persisted and served verbatim)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

WorkerId = NewType("WorkerId", str)
BookingId = NewType("BookingId", str)
UserId = NewType("UserId", str)
PortfolioItemId = NewType("PortfolioItemId", str)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", float)           # 0.0–5.0
HourlyRate = NewType("HourlyRate", float)   # >= 0

MIN_RATING: float = 0.0
MAX_RATING: float = 5.0

WEEKDAYS: tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday",
    "Friday", "Saturday", "Sunday",
)


# ─── Enums ───────────────────────────────────────────────────────

class WorkerCategory(str, Enum):
    """Trades a worker can register under."""
    ELECTRICIAN = "Electrician"
    PLUMBER = "Plumber"
    PAINTER = "Painter"
    CARPENTER = "Carpenter"
    CLEANER = "Cleaner"
    OTHER = "Other"


class ApprovalStatus(str, Enum):
    """Worker approval lifecycle. approved and rejected are terminal."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BookingStatus(str, Enum):
    """Booking lifecycle. completed and cancelled are terminal."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ON_WAY = "on_way"
    ARRIVED = "arrived"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class DistanceUnit(str, Enum):
    KM = "km"
    MI = "mi"
