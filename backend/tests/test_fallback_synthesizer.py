import random

import pytest

from app.models.analysis import Sentiment
from app.services.fallback_synthesizer import BASE_SCORES, FallbackSynthesizer
from app.services.post_generator import PostCorpusGenerator


@pytest.fixture
def posts(fixed_now):
    gen = PostCorpusGenerator(rng=random.Random(5))
    return gen.generate("techguru", "Nike", "instagram", 6, now=fixed_now)


@pytest.mark.parametrize("seed", range(12))
def test_result_is_consistent_with_chosen_sentiment(seed, posts):
    result = FallbackSynthesizer(rng=random.Random(seed)).synthesize("Nike", "techguru", posts)

    base = BASE_SCORES[result.overall_sentiment]
    assert base - 10 <= result.sentiment_score < base + 10
    assert bool(result.risk_factors) == (result.overall_sentiment == Sentiment.NEGATIVE)
    assert all(item.sentiment == result.overall_sentiment for item in result.content_analysis)


def test_one_entry_per_post_with_real_brand_mentions(posts):
    result = FallbackSynthesizer(rng=random.Random(0)).synthesize("Nike", "techguru", posts)

    assert [i.post_index for i in result.content_analysis] == list(range(1, len(posts) + 1))
    assert [i.brand_mention for i in result.content_analysis] == [p.mentions_brand("Nike") for p in posts]
    mentions = sum(p.mentions_brand("Nike") for p in posts)
    assert f"{mentions} brand mentions across {len(posts)} posts" in result.engagement_insights


def test_quote_stays_within_limit_for_long_names(posts):
    result = FallbackSynthesizer(rng=random.Random(1)).synthesize("B" * 100, "i" * 50, posts)
    assert len(result.ai_quote) <= 150


def test_empty_corpus_still_yields_a_valid_result():
    result = FallbackSynthesizer(rng=random.Random(2)).synthesize("Nike", "techguru", [])
    assert result.content_analysis == []
    assert result.top_keywords == ["engagement", "authentic", "lifestyle", "community", "trending"]


def test_same_seed_same_result(posts):
    a = FallbackSynthesizer(rng=random.Random(9)).synthesize("Nike", "techguru", posts)
    b = FallbackSynthesizer(rng=random.Random(9)).synthesize("Nike", "techguru", posts)
    assert a == b
