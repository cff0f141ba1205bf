"""Influencer analysis, content fetch and feedback endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_feedback_repo, get_generator, get_pipeline
from app.models.post import Platform
from app.models.requests import AnalyzeRequest, FeedbackRecord, FeedbackRequest
from app.orchestrator.pipeline import API_VERSION, AnalysisPipeline
from app.services.post_generator import PostCorpusGenerator
from app.services.repository import InMemoryRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post("/analyze")
async def analyze(
    data: AnalyzeRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
):
    """Analyze an influencer's recent content for brand sentiment."""
    logger.info(
        "Analysis request received: influencer=%s brand=%s platform=%s limit=%d",
        data.influencer, data.brand, data.platform.value, data.limit,
    )
    return await pipeline.run(data.influencer, data.brand, data.platform, data.limit)


@router.get("/content")
async def fetch_content(
    influencer: str = Query(min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9._-]+$"),
    platform: Platform = Platform.INSTAGRAM,
    limit: int = Query(default=10, ge=1, le=50),
    generator: PostCorpusGenerator = Depends(get_generator),
):
    """Fetch influencer content without running the analysis."""
    posts = generator.generate(influencer, None, platform, limit)
    return {
        "success": True,
        "data": {
            "influencer": influencer,
            "platform": platform.value,
            "totalPosts": len(posts),
            "posts": [p.to_wire(exclude_none=True) for p in posts],
            "engagementTrend": generator.generate_engagement_trend(),
        },
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "platform": platform.value,
            "postsReturned": len(posts),
        },
    }


@router.post("/feedback")
async def submit_feedback(
    data: FeedbackRequest,
    repo: InMemoryRepository[FeedbackRecord] = Depends(get_feedback_repo),
):
    """Record user feedback on an analysis result."""
    record = repo.add(FeedbackRecord(**data.model_dump()))
    logger.info(
        "Feedback %s received: influencer=%s brand=%s feedback=%s rating=%s",
        record.id, record.influencer, record.brand, record.feedback.value, record.rating,
    )
    return {
        "success": True,
        "message": "Feedback submitted successfully",
        "data": {
            "feedbackId": record.id,
            "status": "recorded",
            "timestamp": record.timestamp.isoformat(),
        },
    }


@router.get("/status")
async def status():
    """Service description and endpoint index."""
    return {
        "success": True,
        "message": "Brand Pulse API is operational",
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "analyze": "POST /api/analyze",
            "content": "GET /api/content",
            "feedback": "POST /api/feedback",
            "health": "GET /api/health",
            "tracker": "GET /api/tracker/list",
            "briefs": "GET /api/briefs/list",
        },
    }
