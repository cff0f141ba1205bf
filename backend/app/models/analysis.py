"""Analysis models – the normalized AI result and the derived report."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from app.models.base import CamelModel
from app.models.post import Engagement, Platform


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class BrandAlignment(str, Enum):
    HIGHLY_ALIGNED = "Highly Aligned"
    ALIGNED = "Aligned"
    PARTIALLY_ALIGNED = "Partially Aligned"
    NOT_ALIGNED = "Not Aligned"


class ContentAnalysisItem(CamelModel):
    """Per-post verdict as returned by the model (or the synthesizer)."""

    post_index: int = Field(ge=1)
    sentiment: Sentiment
    ai_comment: str
    brand_mention: bool


class AnalysisResult(CamelModel):
    """The only analysis shape downstream code ever sees."""

    overall_sentiment: Sentiment
    sentiment_score: int = Field(ge=0, le=100)
    brand_alignment: BrandAlignment
    top_keywords: list[str] = Field(max_length=5)
    ai_quote: str = Field(max_length=150)
    content_analysis: list[ContentAnalysisItem]
    recommendations: list[str] = Field(max_length=5)
    risk_factors: list[str] = Field(max_length=3)
    opportunities: list[str] = Field(max_length=3)
    engagement_insights: str = Field(min_length=1)


class SentimentDistribution(CamelModel):
    positive: int
    neutral: int
    negative: int


class PostInsight(CamelModel):
    """A post merged with its (possibly missing) content-analysis entry."""

    id: str
    platform: Platform
    caption_text: str
    published_at: datetime
    engagement: Engagement
    image_url: str = ""
    hashtags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    ai_comment: str
    sentiment: Sentiment
    brand_mention: bool


class AggregatedReport(CamelModel):
    total_posts: int
    total_engagement: int
    average_engagement: int
    brand_mentions: int
    brand_mention_rate: int
    sentiment_distribution: SentimentDistribution
    tags: list[str] = Field(max_length=5)
    content: list[PostInsight] = Field(default_factory=list)


class AnalysisOutcome(CamelModel):
    """Pipeline result – the analysis plus where it came from."""

    analysis: AnalysisResult
    source: str  # "ai" | "fallback"
    model: Optional[str] = None
