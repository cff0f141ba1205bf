"""Trend brief endpoints."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_brief_service
from app.config import settings
from app.models.brief import BriefExportRequest, BriefGenerateRequest, BriefStatus
from app.orchestrator.scheduler import schedule_once
from app.services.brief_service import BriefService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/briefs", tags=["briefs"])


@router.get("/list")
async def list_briefs(
    status: Optional[BriefStatus] = None,
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    service: BriefService = Depends(get_brief_service),
):
    """List briefs, newest first, with pagination."""
    briefs = service.repository.list()
    filtered = [b for b in briefs if status is None or b.status == status]
    filtered.sort(key=lambda b: (b.date, b.created_at), reverse=True)
    page = filtered[offset: offset + limit]

    return {
        "success": True,
        "data": [b.to_wire() for b in page],
        "stats": {
            "total": len(briefs),
            **{s.value: sum(1 for b in briefs if b.status == s) for s in BriefStatus},
        },
        "pagination": {
            "total": len(filtered),
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < len(filtered),
        },
        "metadata": {"timestamp": datetime.now(timezone.utc).isoformat()},
    }


@router.get("/{brief_id}")
async def get_brief(brief_id: str, service: BriefService = Depends(get_brief_service)):
    brief = service.repository.get(brief_id)
    if brief is None:
        raise HTTPException(404, "Brief not found")
    return {"success": True, "data": brief.to_wire()}


@router.post("/generate", status_code=202)
async def generate_brief(
    data: Optional[BriefGenerateRequest] = None,
    service: BriefService = Depends(get_brief_service),
):
    """Create a pending brief and complete it in the background."""
    data = data or BriefGenerateRequest()
    brief = service.create_pending(data.niche, data.timeframe)
    delay = settings.brief_generation_delay_seconds
    schedule_once(
        f"brief_{brief.id}",
        service.complete,
        delay,
        args=(brief.id, data.niche, data.timeframe),
    )
    return {
        "success": True,
        "message": "Brief generation started",
        "data": brief.to_wire(),
        "estimatedCompletion": f"{delay} seconds",
    }


@router.post("/{brief_id}/export")
async def export_brief(
    brief_id: str,
    data: Optional[BriefExportRequest] = None,
    service: BriefService = Depends(get_brief_service),
):
    """Queue an export of a delivered brief."""
    data = data or BriefExportRequest()
    brief = service.repository.get(brief_id)
    if brief is None:
        raise HTTPException(404, "Brief not found")
    if brief.status != BriefStatus.DELIVERED:
        raise HTTPException(400, "Brief must be delivered before export")

    export_id = f"export_{uuid.uuid4().hex[:12]}"
    logger.info("Brief export requested: %s as %s (%s)", brief_id, data.format, export_id)
    return {
        "success": True,
        "message": "Export started",
        "data": {
            "exportId": export_id,
            "briefId": brief_id,
            "format": data.format,
            "status": "processing",
            "downloadUrl": f"/api/briefs/downloads/{export_id}.{data.format}",
            "createdAt": datetime.now(timezone.utc).isoformat(),
        },
    }
