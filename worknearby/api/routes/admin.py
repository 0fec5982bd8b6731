"""Admin Routes — worker review queue and approval decisions.

Invariants:
    - approve/reject only move pending profiles; decided profiles answer 409
    - Reachable without a session unless WORKNEARBY_ADMIN_REQUIRES_AUTH is set

Design Decisions:
    - The open admin surface mirrors the client's /admin route, which is left
      unprotected for demo use; WorkerDirectory logs every anonymous decision
"""

from fastapi import APIRouter, Depends

from worknearby.core.record_snapshot import worker_to_record
from worknearby.services.marketplace import Marketplace, get_marketplace

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/workers")
async def list_all_workers(market: Marketplace = Depends(get_marketplace)):
    return {"workers": [worker_to_record(w) for w in market.workers.list_all()]}


@router.get("/workers/pending")
async def list_pending_workers(market: Marketplace = Depends(get_marketplace)):
    return {"workers": [worker_to_record(w) for w in market.workers.list_pending()]}


@router.post("/workers/{worker_id}/approve")
async def approve_worker(worker_id: str, market: Marketplace = Depends(get_marketplace)):
    return worker_to_record(market.workers.approve(worker_id))


@router.post("/workers/{worker_id}/reject")
async def reject_worker(worker_id: str, market: Marketplace = Depends(get_marketplace)):
    return worker_to_record(market.workers.reject(worker_id))
