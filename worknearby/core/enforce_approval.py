"""Worker Approval Enforcement — registration validation and the approval state machine.

Invariants:
    - All functions are PURE: no IO, no store access, no side effects
    - Only pending profiles may be decided; approved and rejected are terminal
    - name, phone and category are required; category must be a known label
    - Rating stays within 0–5, hourly rate stays finite and non-negative

Design Decisions:
    - Return the error on violation, None on success (same shape as booking_lifecycle)
    - parse_category raises directly: it produces a value, not a yes/no verdict
"""

import math

from worknearby.core.domain_types import (
    ApprovalStatus, MAX_RATING, MIN_RATING, WEEKDAYS, WorkerCategory,
)
from worknearby.core.errors import InvalidTransitionError, MarketplaceError, ValidationError
from worknearby.core.models import Availability, WorkerDraft


DECISIONS: frozenset[ApprovalStatus] = frozenset({
    ApprovalStatus.APPROVED,
    ApprovalStatus.REJECTED,
})


def parse_category(label: str | WorkerCategory | None) -> WorkerCategory:
    """Map an external label to WorkerCategory or raise ValidationError."""
    if label is None or (isinstance(label, str) and not label.strip()):
        raise ValidationError("Category is required", field="category")
    try:
        return WorkerCategory(label)
    except ValueError:
        raise ValidationError(
            f"Unknown worker category '{label}'", field="category",
        ) from None


def check_decision(
    worker_id: str, current: ApprovalStatus, target: ApprovalStatus,
) -> MarketplaceError | None:
    """pending → approved | rejected, nothing else."""
    if target in DECISIONS and current == ApprovalStatus.PENDING:
        return None
    return InvalidTransitionError("Worker", worker_id, current.value, target.value)


def validate_worker_draft(draft: WorkerDraft) -> MarketplaceError | None:
    """Required fields plus the numeric bounds shared with updates."""
    if not draft.name or not draft.name.strip():
        return ValidationError("Name is required", field="name")
    if not draft.phone or not draft.phone.strip():
        return ValidationError("Phone is required", field="phone")
    try:
        parse_category(draft.category)
    except ValidationError as e:
        return e
    return (
        check_hourly_rate(draft.hourly_rate)
        or check_rating(draft.rating)
        or check_availability(draft.availability)
    )


def check_hourly_rate(rate: float) -> MarketplaceError | None:
    if not math.isfinite(rate) or rate < 0:
        return ValidationError(
            f"Hourly rate must be a finite non-negative number, got {rate}",
            field="hourly_rate",
        )
    return None


def check_rating(rating: float) -> MarketplaceError | None:
    if not MIN_RATING <= rating <= MAX_RATING:
        return ValidationError(
            f"Rating must be within {MIN_RATING}–{MAX_RATING}, got {rating}",
            field="rating",
        )
    return None


def check_availability(availability: Availability) -> MarketplaceError | None:
    unknown = [d for d in availability.days if d not in WEEKDAYS]
    if unknown:
        return ValidationError(
            f"Unknown weekday(s): {', '.join(unknown)}", field="availability",
        )
    return None
