"""Simulated social-media post models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from app.models.base import CamelModel


class Platform(str, Enum):
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    TWITTER = "twitter"


class Engagement(CamelModel):
    """Engagement counters for one post. ``views`` only for platforms that report it."""

    likes: int = Field(ge=0)
    comments: int = Field(ge=0)
    shares: int = Field(default=0, ge=0)
    views: Optional[int] = Field(default=None, ge=0)


class Post(CamelModel):
    """A single piece of influencer content, immutable for the request lifetime."""

    model_config = ConfigDict(frozen=True)

    id: str
    influencer: str
    platform: Platform
    caption_text: str
    published_at: datetime
    engagement: Engagement
    hashtags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    image_url: str = ""
    url: str = ""

    def mentions_brand(self, brand: str) -> bool:
        return brand.lower() in self.caption_text.lower()
