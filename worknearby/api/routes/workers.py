"""Worker Routes — search, registration and profile edits.

Invariants:
    - GET /workers lists approved profiles only (pending/rejected never leak)
    - GET /workers/{id} returns any profile so a registrant can see their status
    - Registration always yields a pending profile
"""

from fastapi import APIRouter, Depends, Query, status

from worknearby.core.enforce_approval import parse_category
from worknearby.core.record_snapshot import worker_to_record
from worknearby.core.worker_directory import WorkerFilter
from worknearby.schemas.worker import PortfolioItemCreate, WorkerRegister, WorkerUpdate
from worknearby.services.marketplace import Marketplace, get_marketplace

router = APIRouter(prefix="/api/v1/workers", tags=["workers"])


@router.get("")
async def list_workers(
    category: str | None = Query(None),
    location: str | None = Query(None, max_length=200),
    max_rate: float | None = Query(None, ge=0),
    sort: str | None = Query(None, pattern=r"^rating$"),
    market: Marketplace = Depends(get_marketplace),
):
    """Approved workers matching the filter, registration order or by rating."""
    criteria = WorkerFilter(
        category=parse_category(category) if category else None,
        location=location,
        max_rate=max_rate,
    )
    workers = market.workers.list_approved(criteria, sort_by_rating=sort == "rating")
    return {"workers": [worker_to_record(w) for w in workers]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_worker(
    body: WorkerRegister, market: Marketplace = Depends(get_marketplace),
):
    worker = market.workers.register(body.to_draft())
    return worker_to_record(worker)


@router.get("/{worker_id}")
async def get_worker(worker_id: str, market: Marketplace = Depends(get_marketplace)):
    return worker_to_record(market.workers.get(worker_id))


@router.patch("/{worker_id}")
async def update_worker(
    worker_id: str, body: WorkerUpdate,
    market: Marketplace = Depends(get_marketplace),
):
    worker = market.workers.update(worker_id, body.to_changes())
    return worker_to_record(worker)


@router.post("/{worker_id}/portfolio", status_code=status.HTTP_201_CREATED)
async def add_portfolio_item(
    worker_id: str, body: PortfolioItemCreate,
    market: Marketplace = Depends(get_marketplace),
):
    item = market.workers.add_portfolio_item(
        worker_id, body.image_url, body.description,
    )
    return {"id": item.id, "image_url": item.image_url, "description": item.description}
