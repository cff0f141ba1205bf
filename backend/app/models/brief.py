"""Trend brief models."""

from __future__ import annotations

import uuid
import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import Field

from app.models.base import CamelModel


class BriefStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


class TopPerformer(CamelModel):
    handle: str
    platform: str
    metric: str
    change: int


class TrendBrief(CamelModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    date: dt.date
    title: str
    summary: str
    key_trends: list[str] = Field(default_factory=list)
    alerts: list[str] = Field(default_factory=list)
    top_performers: list[TopPerformer] = Field(default_factory=list)
    competitor_insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    status: BriefStatus = BriefStatus.PENDING
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))
    delivered_at: Optional[dt.datetime] = None


class BriefGenerateRequest(CamelModel):
    niche: str = "general"
    timeframe: str = "48h"


class BriefExportRequest(CamelModel):
    format: str = "pdf"
