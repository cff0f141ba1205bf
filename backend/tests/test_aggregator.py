import pytest

from app.models.analysis import BrandAlignment, ContentAnalysisItem, Sentiment
from app.models.post import Engagement, Platform, Post
from app.services.aggregator import (
    aggregate,
    calculate_sentiment_distribution,
    generate_tags,
    merge_content,
)


def _item(index: int, sentiment: Sentiment) -> ContentAnalysisItem:
    return ContentAnalysisItem(post_index=index, sentiment=sentiment, ai_comment="c", brand_mention=False)


def _post(index: int, caption: str, fixed_now, likes=100, comments=10, shares=5) -> Post:
    return Post(
        id=f"post_{index}",
        influencer="techguru",
        platform=Platform.INSTAGRAM,
        caption_text=caption,
        published_at=fixed_now,
        engagement=Engagement(likes=likes, comments=comments, shares=shares),
    )


def test_empty_corpus_uses_default_distribution(make_analysis):
    report = aggregate([], make_analysis(content_analysis=[]), "Nike")

    assert report.total_posts == 0
    assert report.total_engagement == 0
    assert report.average_engagement == 0
    assert report.brand_mention_rate == 0
    assert report.sentiment_distribution.model_dump() == {"positive": 50, "neutral": 30, "negative": 20}
    assert report.content == []


@pytest.mark.parametrize(
    "sentiments",
    [
        [Sentiment.POSITIVE, Sentiment.NEUTRAL, Sentiment.NEGATIVE],
        [Sentiment.POSITIVE] * 2 + [Sentiment.NEGATIVE],
        [Sentiment.NEGATIVE] * 7,
        [Sentiment.POSITIVE, Sentiment.NEGATIVE] * 3 + [Sentiment.NEUTRAL],
    ],
)
def test_distribution_always_sums_to_100(sentiments):
    items = [_item(i + 1, s) for i, s in enumerate(sentiments)]
    dist = calculate_sentiment_distribution(items)

    assert dist.positive + dist.neutral + dist.negative == 100
    assert min(dist.positive, dist.neutral, dist.negative) >= 0


def test_distribution_rounds_half_up():
    items = [_item(1, Sentiment.POSITIVE)] + [_item(i, Sentiment.NEUTRAL) for i in range(2, 9)]
    dist = calculate_sentiment_distribution(items)
    assert dist.positive == 13
    assert dist.neutral == 87


def test_totals_and_mention_rate(make_analysis, fixed_now):
    posts = [
        _post(1, "Love my Nike kicks", fixed_now, likes=1000, comments=100, shares=10),
        _post(2, "nike day", fixed_now, likes=500, comments=50, shares=5),
        _post(3, "Coffee time", fixed_now, likes=200, comments=20, shares=5),
    ]
    report = aggregate(posts, make_analysis(), "NIKE")

    assert report.total_posts == 3
    assert report.total_engagement == 1890
    assert report.average_engagement == 630
    assert report.brand_mentions == 2
    assert report.brand_mention_rate == 67


def test_tags_are_capped_at_five(make_analysis):
    analysis = make_analysis(
        sentiment_score=85,
        brand_alignment=BrandAlignment.HIGHLY_ALIGNED,
        risk_factors=["Controversy"],
        top_keywords=["Authentic", "Community"],
    )
    tags = generate_tags(analysis, brand_mentions=10, total_posts=10)

    assert tags == [
        "Excellent Brand Advocate",
        "Brand Aligned",
        "High Brand Visibility",
        "Risk Identified",
        "Authentic Voice",
    ]


def test_middle_of_the_road_analysis_gets_few_tags(make_analysis):
    analysis = make_analysis(
        sentiment_score=50,
        brand_alignment=BrandAlignment.PARTIALLY_ALIGNED,
        top_keywords=["style"],
    )
    assert generate_tags(analysis, brand_mentions=5, total_posts=10) == []
    assert generate_tags(analysis, brand_mentions=0, total_posts=0) == ["Low Brand Mentions"]


def test_low_score_and_misalignment_tags(make_analysis):
    analysis = make_analysis(sentiment_score=30, brand_alignment=BrandAlignment.NOT_ALIGNED)
    tags = generate_tags(analysis, brand_mentions=1, total_posts=10)
    assert tags == ["Needs Attention", "Misaligned Content", "Low Brand Mentions"]


def test_merge_fills_missing_entries_with_defaults(make_analysis, fixed_now):
    posts = [_post(1, "Nike run", fixed_now), _post(2, "Rest day", fixed_now)]
    analysis = make_analysis(content_analysis=[_item(1, Sentiment.NEGATIVE)])

    merged = merge_content(posts, analysis, "nike")

    assert [m.id for m in merged] == ["post_1", "post_2"]
    assert merged[0].sentiment == Sentiment.NEGATIVE
    assert merged[1].sentiment == Sentiment.NEUTRAL
    assert merged[1].ai_comment == "Standard engagement post"
    assert [m.brand_mention for m in merged] == [True, False]
