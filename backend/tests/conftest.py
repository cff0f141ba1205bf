"""Shared fixtures: seeded generators, analysis factory and an isolated app client."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.config import Settings
from app.main import app
from app.models.analysis import AnalysisResult, BrandAlignment, ContentAnalysisItem, Sentiment
from app.orchestrator.pipeline import AnalysisPipeline
from app.services.brief_service import BriefService
from app.services.fallback_synthesizer import FallbackSynthesizer
from app.services.post_generator import PostCorpusGenerator
from app.services.repository import InMemoryRepository


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def no_key_settings() -> Settings:
    return Settings(ai_provider="openai", openai_api_key="", anthropic_api_key="")


@pytest.fixture
def generator() -> PostCorpusGenerator:
    return PostCorpusGenerator(rng=random.Random(1234))


@pytest.fixture
def make_analysis():
    """Build a valid ``AnalysisResult``; keyword args override the defaults."""

    def _make(**overrides) -> AnalysisResult:
        fields = dict(
            overall_sentiment=Sentiment.POSITIVE,
            sentiment_score=70,
            brand_alignment=BrandAlignment.ALIGNED,
            top_keywords=["style", "quality"],
            ai_quote="Strong brand fit.",
            content_analysis=[
                ContentAnalysisItem(
                    post_index=1,
                    sentiment=Sentiment.POSITIVE,
                    ai_comment="Great post",
                    brand_mention=True,
                )
            ],
            recommendations=["Keep going"],
            risk_factors=[],
            opportunities=["Long-term deal"],
            engagement_insights="Healthy engagement.",
        )
        fields.update(overrides)
        return AnalysisResult(**fields)

    return _make


@pytest.fixture
def client(no_key_settings):
    """App client with a key-less seeded pipeline and fresh in-memory stores."""
    pipeline = AnalysisPipeline(
        config=no_key_settings,
        generator=PostCorpusGenerator(rng=random.Random(7)),
        synthesizer=FallbackSynthesizer(rng=random.Random(7)),
    )
    trackers = InMemoryRepository(deps._seed_trackers())
    briefs = InMemoryRepository(deps._seed_briefs())
    feedback = InMemoryRepository()

    app.dependency_overrides[deps.get_pipeline] = lambda: pipeline
    app.dependency_overrides[deps.get_generator] = lambda: PostCorpusGenerator(rng=random.Random(7))
    app.dependency_overrides[deps.get_tracker_repo] = lambda: trackers
    app.dependency_overrides[deps.get_brief_service] = lambda: BriefService(briefs)
    app.dependency_overrides[deps.get_feedback_repo] = lambda: feedback
    app.dependency_overrides[deps.get_rng] = lambda: random.Random(21)

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
