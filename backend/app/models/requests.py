"""Inbound request bodies for the analysis endpoints."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from app.models.base import CamelModel
from app.models.post import Platform


class AnalyzeRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    influencer: str = Field(min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9._-]+$")
    brand: str = Field(min_length=1, max_length=100)
    platform: Platform = Platform.INSTAGRAM
    limit: int = Field(default=10, ge=1, le=50)


class FeedbackKind(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class FeedbackRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    influencer: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    feedback: FeedbackKind
    analysis_id: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comments: str = Field(default="", max_length=1000)


class FeedbackRecord(FeedbackRequest):
    """Stored feedback entry."""

    id: str = Field(default_factory=lambda: f"feedback_{uuid.uuid4().hex[:12]}")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
