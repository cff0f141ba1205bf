"""Combines the post corpus with the normalized analysis into report metrics.

This is the only place that reads ``Post`` and ``AnalysisResult`` together.
"""

from __future__ import annotations

import math

from app.models.analysis import (
    AggregatedReport,
    AnalysisResult,
    BrandAlignment,
    ContentAnalysisItem,
    PostInsight,
    Sentiment,
    SentimentDistribution,
)
from app.models.post import Post

MAX_TAGS = 5
DEFAULT_DISTRIBUTION = SentimentDistribution(positive=50, neutral=30, negative=20)
DEFAULT_AI_COMMENT = "Standard engagement post"

AUTHENTIC_KEYWORDS = {"authentic", "genuine", "real"}
ENGAGEMENT_KEYWORDS = {"engagement", "community", "followers"}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_sentiment_distribution(
    content_analysis: list[ContentAnalysisItem],
) -> SentimentDistribution:
    """Percentages of per-post sentiments; neutral absorbs the rounding error."""
    if not content_analysis:
        return DEFAULT_DISTRIBUTION.model_copy()

    total = len(content_analysis)
    positive = sum(1 for item in content_analysis if item.sentiment == Sentiment.POSITIVE)
    negative = sum(1 for item in content_analysis if item.sentiment == Sentiment.NEGATIVE)

    positive_pct = round_half_up(positive / total * 100)
    negative_pct = min(round_half_up(negative / total * 100), 100 - positive_pct)
    return SentimentDistribution(
        positive=positive_pct,
        neutral=100 - positive_pct - negative_pct,
        negative=negative_pct,
    )


def generate_tags(analysis: AnalysisResult, brand_mentions: int, total_posts: int) -> list[str]:
    """Rule-based insight labels, first match per category, at most five."""
    tags: list[str] = []

    score = analysis.sentiment_score
    if score >= 80:
        tags.append("Excellent Brand Advocate")
    elif score >= 60:
        tags.append("Positive Brand Impact")
    elif score <= 40:
        tags.append("Needs Attention")

    if analysis.brand_alignment in (BrandAlignment.HIGHLY_ALIGNED, BrandAlignment.ALIGNED):
        tags.append("Brand Aligned")
    elif analysis.brand_alignment == BrandAlignment.NOT_ALIGNED:
        tags.append("Misaligned Content")

    mention_rate = brand_mentions / total_posts * 100 if total_posts else 0.0
    if mention_rate >= 70:
        tags.append("High Brand Visibility")
    elif mention_rate <= 30:
        tags.append("Low Brand Mentions")

    if analysis.risk_factors:
        tags.append("Risk Identified")

    keywords = {k.lower() for k in analysis.top_keywords}
    if keywords & AUTHENTIC_KEYWORDS:
        tags.append("Authentic Voice")
    if keywords & ENGAGEMENT_KEYWORDS:
        tags.append("High Engagement")

    return tags[:MAX_TAGS]


def merge_content(posts: list[Post], analysis: AnalysisResult, brand: str) -> list[PostInsight]:
    """Pair each post with the analysis entry at the same position, if any."""
    merged: list[PostInsight] = []
    for index, post in enumerate(posts):
        entry = analysis.content_analysis[index] if index < len(analysis.content_analysis) else None
        merged.append(
            PostInsight(
                id=post.id,
                platform=post.platform,
                caption_text=post.caption_text,
                published_at=post.published_at,
                engagement=post.engagement,
                image_url=post.image_url,
                hashtags=list(post.hashtags),
                mentions=list(post.mentions),
                ai_comment=entry.ai_comment if entry else DEFAULT_AI_COMMENT,
                sentiment=entry.sentiment if entry else Sentiment.NEUTRAL,
                brand_mention=post.mentions_brand(brand),
            )
        )
    return merged


def aggregate(posts: list[Post], analysis: AnalysisResult, brand: str) -> AggregatedReport:
    """Engagement totals, brand-mention rate, sentiment split and tags.

    An empty corpus yields zero averages/rates rather than dividing by zero.
    """
    total_posts = len(posts)
    total_engagement = sum(
        p.engagement.likes + p.engagement.comments + (p.engagement.shares or 0)
        for p in posts
    )
    brand_mentions = sum(1 for p in posts if p.mentions_brand(brand))

    return AggregatedReport(
        total_posts=total_posts,
        total_engagement=total_engagement,
        average_engagement=round_half_up(total_engagement / total_posts) if total_posts else 0,
        brand_mentions=brand_mentions,
        brand_mention_rate=round_half_up(brand_mentions / total_posts * 100) if total_posts else 0,
        sentiment_distribution=calculate_sentiment_distribution(analysis.content_analysis),
        tags=generate_tags(analysis, brand_mentions, total_posts),
        content=merge_content(posts, analysis, brand),
    )
