"""Trend brief lifecycle: pending -> delivered (simulated generation)."""

from __future__ import annotations

import logging
import datetime as dt

from app.models.brief import BriefStatus, TopPerformer, TrendBrief
from app.services.repository import Repository

logger = logging.getLogger(__name__)


class BriefService:
    """Creates placeholder briefs and fills them in once "generation" finishes."""

    def __init__(self, repository: Repository[TrendBrief]) -> None:
        self.repository = repository

    def create_pending(self, niche: str, timeframe: str) -> TrendBrief:
        brief = TrendBrief(
            date=dt.date.today(),
            title=f"Manual Brief - {niche[:1].upper()}{niche[1:]} Niche",
            summary="Brief generation in progress...",
            status=BriefStatus.PENDING,
        )
        self.repository.add(brief, first=True)
        logger.info("Created pending brief %s (niche=%s, timeframe=%s)", brief.id, niche, timeframe)
        return brief

    async def complete(self, brief_id: str, niche: str, timeframe: str) -> TrendBrief | None:
        """Scheduled job body: populate a pending brief and mark it delivered."""
        brief = self.repository.update(
            brief_id,
            summary=(
                f"Analysis complete for {niche} niche over the last {timeframe}. "
                "Key trends identified with actionable insights."
            ),
            key_trends=[
                "Content engagement patterns shifted significantly",
                "New competitor strategies emerging",
                "Audience preferences evolving",
                "Platform algorithm changes detected",
            ],
            alerts=["Competitor activity spike detected", "Sentiment shift in key demographics"],
            top_performers=[
                TopPerformer(handle="@topinfluencer", platform="instagram", metric="engagement", change=45),
                TopPerformer(handle="@competitor", platform="youtube", metric="views", change=32),
            ],
            recommendations=[
                "Adjust content strategy based on trending topics",
                "Monitor competitor campaigns closely",
                "Increase engagement with top-performing content types",
            ],
            status=BriefStatus.DELIVERED,
            delivered_at=dt.datetime.now(dt.timezone.utc),
        )
        if brief is None:
            logger.warning("Brief %s disappeared before generation finished", brief_id)
            return None
        logger.info("Brief generation completed: %s", brief_id)
        return brief
