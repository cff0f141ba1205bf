import random

from app.models.post import Platform
from app.services.post_generator import (
    GENERIC_TEMPLATES,
    MIN_ENGAGEMENT,
    PostCorpusGenerator,
    extract_hashtags,
    extract_mentions,
)


def test_extracts_hashtags_and_mentions_in_order():
    caption = "Brunch with @bestie and @bestie again #brunch #friends_4ever"
    assert extract_hashtags(caption) == ["brunch", "friends_4ever"]
    assert extract_mentions(caption) == ["bestie", "bestie"]


def test_generates_requested_count_newest_first(generator, fixed_now):
    posts = generator.generate("techguru", "Nike", Platform.INSTAGRAM, 10, now=fixed_now)

    assert len(posts) == 10
    times = [p.published_at for p in posts]
    assert times == sorted(times, reverse=True)
    assert len({p.id for p in posts}) == 10
    assert all(p.influencer == "techguru" for p in posts)


def test_engagement_floors_hold_under_extreme_variance(fixed_now):
    gen = PostCorpusGenerator(rng=random.Random(99), variance=2.5)
    posts = gen.generate("tiny", "Acme", Platform.TWITTER, 50, now=fixed_now)

    for post in posts:
        assert post.engagement.likes >= MIN_ENGAGEMENT["likes"]
        assert post.engagement.comments >= MIN_ENGAGEMENT["comments"]
        assert post.engagement.shares >= MIN_ENGAGEMENT["shares"]


def test_only_youtube_reports_views(generator, fixed_now):
    youtube = generator.generate("creator", "Nike", Platform.YOUTUBE, 3, now=fixed_now)
    instagram = generator.generate("creator", "Nike", Platform.INSTAGRAM, 3, now=fixed_now)

    assert all(p.engagement.views is not None for p in youtube)
    assert all(p.engagement.views is None for p in instagram)
    assert "views" not in instagram[0].to_wire(exclude_none=True)["engagement"]


def test_hashtags_match_caption(generator, fixed_now):
    for post in generator.generate("techguru", "Nike", "tiktok", 8, now=fixed_now):
        assert post.hashtags == extract_hashtags(post.caption_text)
        assert post.mentions == extract_mentions(post.caption_text)


def test_without_brand_uses_generic_captions(generator, fixed_now):
    posts = generator.generate("techguru", None, Platform.INSTAGRAM, 10, now=fixed_now)
    assert all(p.caption_text in GENERIC_TEMPLATES[Platform.INSTAGRAM] for p in posts)


def test_always_mentions_brand_when_probability_is_one(fixed_now):
    gen = PostCorpusGenerator(rng=random.Random(3), brand_mention_probability=1.0)
    posts = gen.generate("techguru", "Nike", Platform.YOUTUBE, 6, now=fixed_now)
    assert all(p.mentions_brand("nike") for p in posts)
    assert all("nike" in p.hashtags for p in posts)


def test_same_seed_same_corpus(fixed_now):
    a = PostCorpusGenerator(rng=random.Random(42)).generate("x", "Nike", "instagram", 5, now=fixed_now)
    b = PostCorpusGenerator(rng=random.Random(42)).generate("x", "Nike", "instagram", 5, now=fixed_now)
    assert a == b


def test_engagement_trend_covers_last_days(generator, fixed_now):
    trend = generator.generate_engagement_trend(days=7, today=fixed_now)

    assert len(trend) == 7
    assert trend[0]["date"] == "2024-05-26"
    assert trend[-1]["date"] == "2024-06-01"
    for day in trend:
        assert day["likes"] == int(day["engagement"] * 0.8)
