"""Synthetic analysis used when no AI provider is configured or the call fails."""

from __future__ import annotations

import random

from app.models.analysis import (
    AnalysisResult,
    BrandAlignment,
    ContentAnalysisItem,
    Sentiment,
)
from app.models.post import Post
from app.services.response_normalizer import validate_quote

BASE_SCORES = {
    Sentiment.POSITIVE: 75,
    Sentiment.NEUTRAL: 55,
    Sentiment.NEGATIVE: 35,
}


class FallbackSynthesizer:
    """Builds a schema-valid ``AnalysisResult`` without any external call.

    Unlike the model, it always returns exactly one ``content_analysis``
    entry per input post.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def synthesize(self, brand: str, influencer: str, posts: list[Post]) -> AnalysisResult:
        sentiment = self._rng.choice(list(Sentiment))
        alignment = self._rng.choice(list(BrandAlignment))
        score = max(0, min(100, BASE_SCORES[sentiment] + self._rng.randrange(-10, 10)))
        word = sentiment.value.lower()

        mentions = [post.mentions_brand(brand) for post in posts]

        return AnalysisResult(
            overall_sentiment=sentiment,
            sentiment_score=score,
            brand_alignment=alignment,
            top_keywords=["engagement", "authentic", "lifestyle", "community", "trending"],
            ai_quote=validate_quote(
                f"{influencer} demonstrates {word} engagement with {brand}, "
                "showing authentic connection with their audience.",
                influencer,
                brand,
            ),
            content_analysis=[
                ContentAnalysisItem(
                    post_index=i + 1,
                    sentiment=sentiment,
                    ai_comment=f"{sentiment.value} sentiment with good engagement metrics",
                    brand_mention=mentioned,
                )
                for i, mentioned in enumerate(mentions)
            ],
            recommendations=[
                "Continue authentic content collaboration",
                "Monitor engagement trends closely",
                "Consider long-term partnership opportunities",
            ],
            risk_factors=(
                ["Potential brand misalignment", "Low engagement rates"]
                if sentiment == Sentiment.NEGATIVE
                else []
            ),
            opportunities=[
                "Increase collaboration frequency",
                "Explore new content formats",
                "Leverage audience demographics",
            ],
            engagement_insights=(
                f"Engagement patterns indicate {word} audience connection with "
                f"{sum(mentions)} brand mentions across {len(posts)} posts."
            ),
        )
