"""Auth Routes — sign-up, login, logout and the current-user view.

Invariants:
    - Only SessionGuard decides authentication; routes never compare passwords
    - /me answers both signals the client needs: is_authenticated and the current user
"""

import logging

from fastapi import APIRouter, Depends, status

from worknearby.core.record_snapshot import user_to_record
from worknearby.core.session_guard import Credentials
from worknearby.schemas.account import Login, SignUp
from worknearby.services.marketplace import Marketplace, get_marketplace

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(body: SignUp, market: Marketplace = Depends(get_marketplace)):
    """Create an account and log it in."""
    profile = market.sign_up(
        body.email, body.password, body.name, body.phone, body.location,
    )
    return {"is_authenticated": True, "user": user_to_record(profile)}


@router.post("/login")
async def login(body: Login, market: Marketplace = Depends(get_marketplace)):
    market.guard.login(Credentials(email=body.email, password=body.password))
    return {"is_authenticated": True, "user": user_to_record(market.current_profile())}


@router.post("/logout")
async def logout(market: Marketplace = Depends(get_marketplace)):
    market.guard.logout()
    return {"is_authenticated": False}


@router.get("/me")
async def me(market: Marketplace = Depends(get_marketplace)):
    """Session view — never fails, reports an anonymous session as user=None."""
    if not market.guard.is_authenticated():
        return {"is_authenticated": False, "user": None}
    return {"is_authenticated": True, "user": user_to_record(market.current_profile())}
