"""Synthetic social-media corpus for an influencer / brand pair.

Stands in for real platform APIs: captions come from per-platform template
pools, engagement is jittered around platform baselines, and hashtags /
mentions are extracted from the caption so every post is self-consistent.
"""

from __future__ import annotations

import logging
import random
import re
from datetime import datetime, timedelta, timezone
from typing import Any

from app.models.post import Engagement, Platform, Post

logger = logging.getLogger(__name__)

HASHTAG_RE = re.compile(r"#(\w+)")
MENTION_RE = re.compile(r"@(\w+)")

BRAND_TEMPLATES: dict[Platform, list[str]] = {
    Platform.INSTAGRAM: [
        "Just tried the new {brand} collection and I'm obsessed! 😍 The quality is amazing #{tag} #sponsored",
        "My honest review of {brand} - totally worth the hype! Link in bio 🛍️ #{tag}",
        "Unboxing my {brand} haul! You guys asked for it 📦✨ #unboxing #{tag}",
        "{brand} really knows how to make quality products. Been using this for weeks! 💯 #{tag}",
        "Styling my new {brand} pieces for date night 💕 What do you think? #ootd #{tag}",
        "{brand} sent me their latest drop and I had to share! Use my code for 20% off 🎉 #{tag}",
        "Why I choose {brand} every time - thread below 👇 #authentic #{tag}",
        "{brand} x me = perfect match! Thanks for the amazing collaboration 🤝 #partnership #{tag}",
    ],
    Platform.YOUTUBE: [
        "Just dropped my new gym vlog powered by {brand} gear! 💪🔥 #{tag}",
        "{brand} haul and honest review - is it worth your money? Full video up now! #{tag} #review",
        "Testing {brand}'s new products for 30 days - here are my results! #{tag} #challenge",
        "Why {brand} is my go-to brand - full breakdown in today's video! #{tag} #authentic",
        "{brand} collaboration announcement! So excited to work with them 🎉 #{tag} #collab",
        "Unboxing the entire {brand} collection - which is your favorite? #{tag} #unboxing",
    ],
    Platform.TIKTOK: [
        "POV: You find the perfect {brand} product 😍 #{tag} #fyp",
        "{brand} haul but make it aesthetic ✨ #{tag} #haul #aesthetic",
        "Rating {brand} products as someone who's tried EVERYTHING #{tag} #review",
        "{brand} sent me this and I'm OBSESSED 🤩 #{tag} #gifted",
        "Why {brand} hits different 💯 #{tag} #authentic #real",
    ],
    Platform.TWITTER: [
        "Just tried {brand} and I'm genuinely impressed. Quality is 🔥 #{tag}",
        "{brand} really understood the assignment with this one 💯 #{tag}",
        "Honest {brand} review: worth every penny. Thread below 👇 #{tag}",
        "{brand} collab announcement! Excited to share this journey with you all 🎉 #{tag}",
    ],
}

GENERIC_TEMPLATES: dict[Platform, list[str]] = {
    Platform.INSTAGRAM: [
        "Morning workout done! 💪 Who else is crushing their fitness goals today? #fitness #motivation",
        "Coffee and good vibes ☕️ What's everyone up to this weekend? #weekend #coffee",
        "Throwback to this amazing sunset 🌅 Missing this place already #throwback #sunset",
        "New haircut, new me! Feeling fresh and ready for the week #newlook #selfcare",
        "Sunday brunch with the squad 🥐 Life is good with good people around @bestie #brunch #friends",
        "Behind the scenes of today's photoshoot 📸 The magic happens here! #bts #photoshoot",
        "Cozy night in with my favorite book 📚 What are you reading lately? #reading #cozy",
        "Travel planning mode activated ✈️ Where should I go next? #travel #wanderlust",
    ],
    Platform.YOUTUBE: [
        "New video is LIVE! This one was so fun to make 🎬 #newvideo #youtube",
        "Behind the scenes of my latest project - so much work but worth it! #bts #creator",
        "Q&A video coming soon! Drop your questions below 👇 #qanda #community",
        "Editing all night but the video is finally ready! Hope you love it ❤️ #editing #creator",
        "Collab video with @mybestie is up! We had way too much fun 😂 #collab #friends",
    ],
    Platform.TIKTOK: [
        "POV: You're having the best day ever ✨ #pov #goodvibes #fyp",
        "This trend but make it me 💅 #trend #fyp #viral",
        "Rating my outfits from this week 👗 #ootd #fashion #rating",
        "Things that just hit different 💯 #relatable #fyp #real",
        "Plot twist: I actually love Mondays 📈 #plottwist #monday #positive",
    ],
    Platform.TWITTER: [
        "Sometimes you just need to appreciate the little things ✨",
        "Coffee thoughts: Why do the best ideas come at 2am? ☕️💭",
        "Reminder: You're doing better than you think you are 💙",
        "Currently obsessed with this playlist. Music recommendations welcome! 🎵",
        "Weekend plans: Absolutely nothing and I'm here for it 😌",
    ],
}

BASE_ENGAGEMENT: dict[Platform, dict[str, int]] = {
    Platform.INSTAGRAM: {"likes": 5000, "comments": 200, "shares": 50},
    Platform.YOUTUBE: {"likes": 15000, "comments": 500, "shares": 200, "views": 250000},
    Platform.TIKTOK: {"likes": 8000, "comments": 300, "shares": 400},
    Platform.TWITTER: {"likes": 2000, "comments": 100, "shares": 150},
}

MIN_ENGAGEMENT = {"likes": 100, "comments": 10, "shares": 5}

IMAGE_SIZES: dict[Platform, str] = {
    Platform.INSTAGRAM: "1080x1080",
    Platform.YOUTUBE: "1280x720",
    Platform.TIKTOK: "1080x1920",
    Platform.TWITTER: "1200x675",
}

POST_INTERVAL = timedelta(hours=6)


def extract_hashtags(caption: str) -> list[str]:
    return HASHTAG_RE.findall(caption)


def extract_mentions(caption: str) -> list[str]:
    return MENTION_RE.findall(caption)


class PostCorpusGenerator:
    """Produces realistic-looking posts from a seedable random source."""

    def __init__(
        self,
        rng: random.Random | None = None,
        brand_mention_probability: float = 0.7,
        variance: float = 0.6,
    ) -> None:
        self._rng = rng or random.Random()
        self.brand_mention_probability = brand_mention_probability
        self.variance = variance

    def generate(
        self,
        influencer: str,
        brand: str | None = None,
        platform: Platform | str = Platform.INSTAGRAM,
        count: int = 10,
        now: datetime | None = None,
    ) -> list[Post]:
        """Generate ``count`` posts, newest first.

        Args:
            influencer: Handle the posts are attributed to.
            brand: Brand that may be mentioned; ``None`` for brand-agnostic content.
            platform: Platform whose templates and engagement baselines apply.
            count: Number of posts.
            now: Reference time for back-dating (defaults to current UTC time).
        """
        platform = Platform(platform)
        base_time = now or datetime.now(timezone.utc)

        posts = [
            self._create_post(influencer, brand, platform, i, base_time)
            for i in range(count)
        ]
        posts.sort(key=lambda p: p.published_at, reverse=True)

        logger.info(
            "Generated %d posts for %s on %s (brand=%s)",
            len(posts), influencer, platform.value, brand,
        )
        return posts

    def generate_engagement_trend(
        self,
        days: int = 7,
        today: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """Daily engagement series for the last ``days`` days, oldest first."""
        today = today or datetime.now(timezone.utc)
        trend: list[dict[str, Any]] = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            engagement = int(15000 * (1 + (self._rng.random() - 0.5) * 0.3))
            trend.append({
                "date": day.date().isoformat(),
                "engagement": engagement,
                "likes": int(engagement * 0.8),
                "comments": int(engagement * 0.15),
                "shares": int(engagement * 0.05),
            })
        return trend

    # ── Internals ─────────────────────────────────────────────────

    def _create_post(
        self,
        influencer: str,
        brand: str | None,
        platform: Platform,
        index: int,
        base_time: datetime,
    ) -> Post:
        mention_brand = bool(brand) and self._rng.random() < self.brand_mention_probability
        caption = self._pick_caption(brand, platform, mention_brand)

        published_at = (base_time - index * POST_INTERVAL).replace(
            minute=self._rng.randrange(60), second=0, microsecond=0
        )
        stamp = int(base_time.timestamp() * 1000)

        return Post(
            id=f"{platform.value}_{influencer}_{stamp}_{index}",
            influencer=influencer,
            platform=platform,
            caption_text=caption,
            published_at=published_at,
            engagement=self._generate_engagement(platform),
            hashtags=extract_hashtags(caption),
            mentions=extract_mentions(caption),
            image_url=f"https://picsum.photos/{IMAGE_SIZES[platform]}?random={index + 1}",
            url=self._post_url(platform, influencer, index + 1, stamp),
        )

    def _pick_caption(self, brand: str | None, platform: Platform, mention_brand: bool) -> str:
        if mention_brand and brand:
            pool = BRAND_TEMPLATES.get(platform) or BRAND_TEMPLATES[Platform.INSTAGRAM]
            template = self._rng.choice(pool)
            return template.format(brand=brand, tag=brand.lower())
        pool = GENERIC_TEMPLATES.get(platform) or GENERIC_TEMPLATES[Platform.INSTAGRAM]
        return self._rng.choice(pool)

    def _generate_engagement(self, platform: Platform) -> Engagement:
        base = BASE_ENGAGEMENT.get(platform, BASE_ENGAGEMENT[Platform.INSTAGRAM])
        values = {
            key: int(value * (1 + (self._rng.random() - 0.5) * self.variance))
            for key, value in base.items()
        }
        for key, floor in MIN_ENGAGEMENT.items():
            values[key] = max(floor, values[key])
        return Engagement(**values)

    @staticmethod
    def _post_url(platform: Platform, influencer: str, index: int, stamp: int) -> str:
        if platform == Platform.YOUTUBE:
            return f"https://youtube.com/watch?v={influencer}_{index}"
        if platform == Platform.TIKTOK:
            return f"https://tiktok.com/@{influencer}/video/{stamp}{index}"
        if platform == Platform.TWITTER:
            return f"https://twitter.com/{influencer}/status/{stamp}{index}"
        return f"https://instagram.com/p/{influencer}_{index}"
