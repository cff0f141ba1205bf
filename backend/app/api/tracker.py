"""Tracked influencer / competitor management endpoints."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_rng, get_tracker_repo
from app.models.tracker import TrackedAccount, TrackerCategory, TrackerCreate, TrackerPlatform
from app.services.repository import InMemoryRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tracker", tags=["tracker"])

TrackerRepo = InMemoryRepository[TrackedAccount]


def _stats(items: list[TrackedAccount]) -> dict:
    return {
        "total": len(items),
        "active": sum(1 for t in items if t.is_active),
        "influencers": sum(1 for t in items if t.category == TrackerCategory.INFLUENCER),
        "competitors": sum(1 for t in items if t.category == TrackerCategory.COMPETITOR),
        "platforms": {
            p.value: sum(1 for t in items if t.platform == p) for p in TrackerPlatform
        },
    }


def _get_or_404(repo: TrackerRepo, tracker_id: str) -> TrackedAccount:
    tracker = repo.get(tracker_id)
    if tracker is None:
        raise HTTPException(404, "Tracker not found")
    return tracker


@router.get("/list")
async def list_trackers(
    category: Optional[TrackerCategory] = None,
    platform: Optional[TrackerPlatform] = None,
    active: Optional[bool] = None,
    repo: TrackerRepo = Depends(get_tracker_repo),
):
    """List tracked accounts with optional filters."""
    items = repo.list()
    filtered = [
        t for t in items
        if (category is None or t.category == category)
        and (platform is None or t.platform == platform)
        and (active is None or t.is_active == active)
    ]
    return {
        "success": True,
        "data": [t.to_wire() for t in filtered],
        "stats": _stats(items),
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "filtered": len(filtered),
            "total": len(items),
        },
    }


@router.post("/add", status_code=201)
async def add_tracker(
    data: TrackerCreate,
    repo: TrackerRepo = Depends(get_tracker_repo),
):
    """Start tracking a new influencer or competitor."""
    handle = data.handle if data.handle.startswith("@") else f"@{data.handle}"

    existing = next(
        (
            t for t in repo.list()
            if t.handle.lower() == handle.lower() and t.platform == data.platform
        ),
        None,
    )
    if existing:
        raise HTTPException(409, "This account is already being tracked")

    tracker = repo.add(
        TrackedAccount(
            handle=handle,
            platform=data.platform,
            category=data.category,
            brand=data.brand or None,
        )
    )
    logger.info("Tracker added: %s on %s (%s)", tracker.handle, tracker.platform.value, tracker.id)
    return {
        "success": True,
        "message": "Tracker added successfully",
        "data": tracker.to_wire(),
    }


@router.put("/{tracker_id}/toggle")
async def toggle_tracker(
    tracker_id: str,
    repo: TrackerRepo = Depends(get_tracker_repo),
):
    """Enable or disable tracking for an account."""
    tracker = _get_or_404(repo, tracker_id)
    updated = repo.update(
        tracker_id,
        is_active=not tracker.is_active,
        last_update=datetime.now(timezone.utc),
    )
    logger.info("Tracker %s toggled, active=%s", tracker_id, updated.is_active)
    return {
        "success": True,
        "message": f"Tracking {'enabled' if updated.is_active else 'disabled'}",
        "data": updated.to_wire(),
    }


@router.delete("/{tracker_id}")
async def remove_tracker(
    tracker_id: str,
    repo: TrackerRepo = Depends(get_tracker_repo),
):
    """Stop tracking an account."""
    _get_or_404(repo, tracker_id)
    removed = repo.remove(tracker_id)
    logger.info("Tracker removed: %s (%s)", removed.handle, tracker_id)
    return {
        "success": True,
        "message": "Tracker removed successfully",
        "data": removed.to_wire(),
    }


@router.post("/sync")
async def sync_trackers(
    repo: TrackerRepo = Depends(get_tracker_repo),
    rng: random.Random = Depends(get_rng),
):
    """Refresh metrics for every active tracker (simulated)."""
    now = datetime.now(timezone.utc)
    active = [t for t in repo.list() if t.is_active]
    for tracker in active:
        repo.update(
            tracker.id,
            followers=rng.randint(50000, 149999),
            engagement_rate=round(rng.uniform(1, 6), 1),
            recent_posts=rng.randint(1, 10),
            last_update=now,
        )
    logger.info("Manual sync completed for %d trackers", len(active))
    return {
        "success": True,
        "message": f"Synced {len(active)} trackers successfully",
        "data": {"synced": len(active), "timestamp": now.isoformat()},
    }
