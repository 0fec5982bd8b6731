"""Preference Routes — display settings; no session required."""

from fastapi import APIRouter, Depends

from worknearby.core.record_snapshot import preferences_to_record
from worknearby.schemas.account import PreferencesUpdate
from worknearby.services.marketplace import Marketplace, get_marketplace

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


@router.get("")
async def get_preferences(market: Marketplace = Depends(get_marketplace)):
    return preferences_to_record(market.preferences.get())


@router.put("")
async def update_preferences(
    body: PreferencesUpdate, market: Marketplace = Depends(get_marketplace),
):
    prefs = market.preferences.update(
        theme=body.theme, distance_unit=body.distance_unit,
    )
    return preferences_to_record(prefs)


@router.post("/theme/toggle")
async def toggle_theme(market: Marketplace = Depends(get_marketplace)):
    return preferences_to_record(market.preferences.toggle_theme())
