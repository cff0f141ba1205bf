"""Tracked influencer / competitor accounts."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from app.models.base import CamelModel


class TrackerCategory(str, Enum):
    INFLUENCER = "influencer"
    COMPETITOR = "competitor"


class TrackerPlatform(str, Enum):
    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TrackedAccount(CamelModel):
    """One account on the watch list."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    handle: str
    platform: TrackerPlatform
    category: TrackerCategory
    brand: Optional[str] = None
    is_active: bool = True
    added_at: datetime = Field(default_factory=_now)
    last_update: Optional[datetime] = None
    followers: int = 0
    engagement_rate: float = 0.0
    recent_posts: int = 0


class TrackerCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    handle: str = Field(min_length=1, max_length=50, pattern=r"^@?[a-zA-Z0-9._-]+$")
    platform: TrackerPlatform
    category: TrackerCategory
    brand: Optional[str] = Field(default=None, max_length=100)
