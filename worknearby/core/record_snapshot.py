"""Record Snapshot — serialization of domain records for API responses.

Invariants:
    - *_to_record produces a JSON-safe dict keyed by the entity id (no Enums, no datetimes)
    - Enums are written as their string labels exactly as enumerated in domain_types
    - Booking snapshots are written by value: the worker/customer fields are flattened
      into the booking record, never looked up live

Design Decisions:
    - Pure functions, not methods on the dataclasses (records stay plain data)
    - Flattened booking record: worker_name, category, price and image_url sit
      beside the booking fields
"""

from worknearby.core.models import Booking, Preferences, UserProfile, WorkerProfile

_WORKER_PLAIN_FIELDS: tuple[str, ...] = (
    "name", "phone", "rating", "hourly_rate", "location",
    "description", "image_url", "reviews",
)


# --- Worker -------------------------------------------------------------------

def worker_to_record(worker: WorkerProfile) -> dict:
    """Serialize WorkerProfile to JSON-safe dict. Pure, no IO."""
    return {
        "id": worker.id,
        **{key: getattr(worker, key) for key in _WORKER_PLAIN_FIELDS},
        "category": worker.category.value,
        "status": worker.status.value,
        "availability": {
            "days": list(worker.availability.days),
            "hours": worker.availability.hours,
        },
        "sub_specializations": list(worker.sub_specializations),
        "portfolio": [
            {"id": p.id, "image_url": p.image_url, "description": p.description}
            for p in worker.portfolio
        ],
        "map_position": (
            {"top": worker.map_position.top, "left": worker.map_position.left}
            if worker.map_position else None
        ),
        "registered_at": worker.registered_at.isoformat(),
    }


# --- Booking ------------------------------------------------------------------

def booking_to_record(booking: Booking) -> dict:
    """Serialize Booking with its snapshots flattened. Pure, no IO."""
    return {
        "id": booking.id,
        "worker_id": booking.worker_id,
        "worker_name": booking.worker.worker_name,
        "category": booking.worker.category.value,
        "price": booking.worker.price,
        "image_url": booking.worker.image_url,
        "customer_id": booking.customer.customer_id,
        "customer_name": booking.customer.customer_name,
        "customer_phone": booking.customer.customer_phone,
        "date": booking.date,
        "time": booking.time,
        "location": booking.location,
        "problem_description": booking.problem_description,
        "status": booking.status.value,
        "has_review": booking.has_review,
        "created_at": booking.created_at.isoformat(),
    }


# --- User / Preferences -------------------------------------------------------

def user_to_record(user: UserProfile) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "phone": user.phone,
        "email": user.email,
        "location": user.location,
        "image_url": user.image_url,
    }


def preferences_to_record(prefs: Preferences) -> dict:
    return {
        "theme": prefs.theme.value,
        "distance_unit": prefs.distance_unit.value,
    }
