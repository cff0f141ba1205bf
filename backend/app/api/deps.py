"""Shared dependencies for the route modules.

The stores are process-local and seeded with demo data; routes receive them
through ``Depends`` so tests can override them per app instance.
"""

from __future__ import annotations

import datetime as dt
import random

from app.models.brief import BriefStatus, TopPerformer, TrendBrief
from app.models.requests import FeedbackRecord
from app.models.tracker import TrackedAccount, TrackerCategory, TrackerPlatform
from app.orchestrator.pipeline import AnalysisPipeline
from app.services.brief_service import BriefService
from app.services.post_generator import PostCorpusGenerator
from app.services.repository import InMemoryRepository


def _seed_trackers() -> list[TrackedAccount]:
    now = dt.datetime.now(dt.timezone.utc)
    return [
        TrackedAccount(
            id="1",
            handle="@techguru",
            platform=TrackerPlatform.YOUTUBE,
            category=TrackerCategory.INFLUENCER,
            brand="TechBrand",
            last_update=now - dt.timedelta(hours=2),
            followers=125000,
            engagement_rate=4.2,
            recent_posts=3,
        ),
        TrackedAccount(
            id="2",
            handle="@competitor_brand",
            platform=TrackerPlatform.INSTAGRAM,
            category=TrackerCategory.COMPETITOR,
            brand="CompetitorBrand",
            last_update=now - dt.timedelta(hours=1),
            followers=89000,
            engagement_rate=3.8,
            recent_posts=5,
        ),
    ]


def _seed_briefs() -> list[TrendBrief]:
    return [
        TrendBrief(
            id="1",
            date=dt.date(2024, 1, 15),
            title="Weekly Brand Intelligence Brief - Tech Niche",
            summary=(
                "Significant uptick in AI-related content across tracked influencers. "
                "Competitor XYZ launched new campaign with 340% engagement increase."
            ),
            key_trends=[
                "AI and automation content up 45%",
                "Video format preference increased 23%",
                "Sustainability messaging trending",
                "Micro-influencer engagement outperforming macro",
            ],
            alerts=[
                "Competitor ABC gained 15K followers in 48h",
                "Negative sentiment spike around privacy concerns",
            ],
            top_performers=[
                TopPerformer(handle="@techguru", platform="youtube", metric="engagement", change=34),
                TopPerformer(handle="@innovator", platform="instagram", metric="reach", change=28),
            ],
            competitor_insights=[
                "Competitor XYZ focusing heavily on educational content",
                "Brand ABC shifting to younger demographic targeting",
            ],
            recommendations=[
                "Increase AI-related content production",
                "Partner with micro-influencers for better ROI",
                "Address privacy concerns proactively",
            ],
            status=BriefStatus.DELIVERED,
            created_at=dt.datetime(2024, 1, 15, 8, 0, tzinfo=dt.timezone.utc),
            delivered_at=dt.datetime(2024, 1, 15, 8, 30, tzinfo=dt.timezone.utc),
        ),
        TrendBrief(
            id="2",
            date=dt.date(2024, 1, 13),
            title="Bi-weekly Competitive Analysis - Fashion Niche",
            summary=(
                "Fashion week drove significant engagement. Sustainable fashion "
                "messaging dominated conversations with 67% positive sentiment."
            ),
            key_trends=[
                "Sustainable fashion content up 67%",
                "Behind-the-scenes content performing well",
                "Collaboration posts increased engagement by 45%",
            ],
            alerts=["Supply chain concerns trending negatively"],
            top_performers=[
                TopPerformer(handle="@styleicon", platform="instagram", metric="engagement", change=56),
            ],
            competitor_insights=["Brand X launching sustainable line next month"],
            recommendations=[
                "Accelerate sustainable product line",
                "Create behind-the-scenes content series",
            ],
            status=BriefStatus.DELIVERED,
            created_at=dt.datetime(2024, 1, 13, 8, 0, tzinfo=dt.timezone.utc),
            delivered_at=dt.datetime(2024, 1, 13, 8, 30, tzinfo=dt.timezone.utc),
        ),
    ]


_pipeline = AnalysisPipeline()
_generator = PostCorpusGenerator()
_trackers: InMemoryRepository[TrackedAccount] = InMemoryRepository(_seed_trackers())
_briefs: InMemoryRepository[TrendBrief] = InMemoryRepository(_seed_briefs())
_feedback: InMemoryRepository[FeedbackRecord] = InMemoryRepository()
_rng = random.Random()


def get_pipeline() -> AnalysisPipeline:
    return _pipeline


def get_generator() -> PostCorpusGenerator:
    return _generator


def get_tracker_repo() -> InMemoryRepository[TrackedAccount]:
    return _trackers


def get_brief_service() -> BriefService:
    return BriefService(_briefs)


def get_feedback_repo() -> InMemoryRepository[FeedbackRecord]:
    return _feedback


def get_rng() -> random.Random:
    """Random source for simulated metric refreshes."""
    return _rng
