"""Booking Routes — create, list and move bookings through their lifecycle.

Invariants:
    - The customer snapshot always comes from the session user, never the request body
    - Every booking read and write needs a logged-in session
    - Every response carries allowed_transitions so the client renders only valid actions
    - /mine is declared before /{booking_id} so it is not captured as an id
"""

from fastapi import APIRouter, Depends, status

from worknearby.core.models import Booking
from worknearby.core.record_snapshot import booking_to_record
from worknearby.schemas.booking import BookingAdvance, BookingCreate
from worknearby.services.marketplace import Marketplace, get_marketplace

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


def _to_response(market: Marketplace, booking: Booking) -> dict:
    return {
        **booking_to_record(booking),
        "allowed_transitions": [
            s.value for s in market.bookings.allowed_transitions(booking.id)
        ],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate, market: Marketplace = Depends(get_marketplace),
):
    booking = market.book_for_current_user(
        body.worker_id, body.date, body.time,
        location=body.location, problem_description=body.problem_description,
    )
    return _to_response(market, booking)


@router.get("/mine")
async def list_my_bookings(market: Marketplace = Depends(get_marketplace)):
    """The session user's bookings, most recent first."""
    return {"bookings": [_to_response(market, b) for b in market.my_bookings()]}


@router.get("/worker/{worker_id}")
async def list_worker_bookings(
    worker_id: str, market: Marketplace = Depends(get_marketplace),
):
    return {
        "bookings": [
            _to_response(market, b) for b in market.worker_bookings(worker_id)
        ],
    }


@router.get("/{booking_id}")
async def get_booking(booking_id: str, market: Marketplace = Depends(get_marketplace)):
    return _to_response(market, market.booking(booking_id))


@router.post("/{booking_id}/advance")
async def advance_booking(
    booking_id: str, body: BookingAdvance,
    market: Marketplace = Depends(get_marketplace),
):
    return _to_response(market, market.bookings.advance(booking_id, body.status))


@router.post("/{booking_id}/cancel")
async def cancel_booking(booking_id: str, market: Marketplace = Depends(get_marketplace)):
    return _to_response(market, market.bookings.cancel(booking_id))


@router.post("/{booking_id}/review")
async def review_booking(booking_id: str, market: Marketplace = Depends(get_marketplace)):
    booking = market.bookings.submit_review(booking_id)
    worker_reviews = market.workers.get(booking.worker_id).reviews
    return {**_to_response(market, booking), "worker_reviews": worker_reviews}
