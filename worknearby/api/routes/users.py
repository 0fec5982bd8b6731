"""User Routes — the logged-in customer's own profile."""

from fastapi import APIRouter, Depends

from worknearby.core.models import UserProfile
from worknearby.core.record_snapshot import user_to_record
from worknearby.schemas.account import ProfileUpdate
from worknearby.services.marketplace import Marketplace, get_marketplace

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me")
async def get_my_profile(market: Marketplace = Depends(get_marketplace)):
    return user_to_record(market.current_profile())


@router.put("/me")
async def update_my_profile(
    body: ProfileUpdate, market: Marketplace = Depends(get_marketplace),
):
    """Replace profile fields. Existing bookings keep their customer snapshot."""
    current = market.current_profile()
    saved = market.users.upsert(UserProfile(
        id=current.id,
        name=body.name,
        phone=body.phone,
        email=current.email,
        location=body.location,
        image_url=body.image_url,
    ))
    return user_to_record(saved)
