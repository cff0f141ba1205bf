"""Turns free-text model output into a schema-valid ``AnalysisResult``.

Extraction is best effort: the first greedy ``{ ... }`` span is decoded as
JSON. If that fails there is nothing to normalize and ``ParseError`` is
raised. Otherwise every field is validated on its own and replaced by a
fixed default when missing or malformed, so one bad field never sinks the
whole response.
"""

from __future__ import annotations

import json
import logging
import math
import re
from enum import Enum
from typing import Any, TypeVar

from app.models.analysis import (
    AnalysisResult,
    BrandAlignment,
    ContentAnalysisItem,
    Sentiment,
)
from app.services.errors import ParseError

logger = logging.getLogger(__name__)

JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

QUOTE_MAX_LENGTH = 150

DEFAULT_SCORE = 50
DEFAULT_KEYWORDS = ["engagement", "content", "brand"]
DEFAULT_RECOMMENDATIONS = ["Monitor engagement trends"]
DEFAULT_RISK_FACTORS: list[str] = []
DEFAULT_OPPORTUNITIES = ["Explore collaboration opportunities"]
DEFAULT_AI_COMMENT = "Standard engagement post"
DEFAULT_ENGAGEMENT_INSIGHTS = (
    "Engagement patterns show standard influencer activity with moderate "
    "audience interaction."
)

E = TypeVar("E", bound=Enum)


def extract_json_object(raw_text: str) -> dict[str, Any]:
    """Locate and decode the outermost ``{...}`` span of ``raw_text``."""
    match = JSON_OBJECT_RE.search(raw_text or "")
    if not match:
        raise ParseError("No JSON found in AI response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in AI response: {e}") from e
    if not isinstance(parsed, dict):
        raise ParseError("AI response JSON is not an object")
    return parsed


def parse_int(value: Any) -> int | None:
    """Lenient integer parse: ints, finite floats (truncated), numeric prefixes of strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


def validate_enum(value: Any, enum_cls: type[E], default: E) -> E:
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return default


def validate_score(value: Any) -> int:
    num = parse_int(value)
    if num is None:
        return DEFAULT_SCORE
    return max(0, min(100, num))


def validate_string_list(value: Any, limit: int, fallback: list[str]) -> list[str]:
    """Cap to ``limit`` entries, then drop anything that isn't a non-empty string."""
    if not isinstance(value, list):
        return list(fallback)
    return [v for v in value[:limit] if isinstance(v, str) and v]


def validate_quote(value: Any, influencer: str, brand: str) -> str:
    if not isinstance(value, str) or not value:
        value = f"{influencer} shows moderate engagement with {brand} content."
    if len(value) > QUOTE_MAX_LENGTH:
        return value[: QUOTE_MAX_LENGTH - 3] + "..."
    return value


def validate_content_analysis(value: Any) -> list[ContentAnalysisItem]:
    if not isinstance(value, list):
        return []

    items: list[ContentAnalysisItem] = []
    for raw in value:
        entry = raw if isinstance(raw, dict) else {}
        post_index = parse_int(entry.get("postIndex"))
        ai_comment = entry.get("aiComment")
        items.append(
            ContentAnalysisItem(
                post_index=post_index if post_index and post_index >= 1 else 1,
                sentiment=validate_enum(entry.get("sentiment"), Sentiment, Sentiment.NEUTRAL),
                ai_comment=ai_comment if isinstance(ai_comment, str) else DEFAULT_AI_COMMENT,
                brand_mention=bool(entry.get("brandMention")),
            )
        )
    return items


def validate_engagement_insights(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return DEFAULT_ENGAGEMENT_INSIGHTS
    return value


def normalize_parsed(parsed: dict[str, Any], brand: str, influencer: str) -> AnalysisResult:
    """Field-by-field coercion of an already-decoded object."""
    return AnalysisResult(
        overall_sentiment=validate_enum(
            parsed.get("overallSentiment"), Sentiment, Sentiment.NEUTRAL
        ),
        sentiment_score=validate_score(parsed.get("sentimentScore")),
        brand_alignment=validate_enum(
            parsed.get("brandAlignment"), BrandAlignment, BrandAlignment.PARTIALLY_ALIGNED
        ),
        top_keywords=validate_string_list(parsed.get("topKeywords"), 5, DEFAULT_KEYWORDS),
        ai_quote=validate_quote(parsed.get("aiQuote"), influencer, brand),
        content_analysis=validate_content_analysis(parsed.get("contentAnalysis")),
        recommendations=validate_string_list(
            parsed.get("recommendations"), 5, DEFAULT_RECOMMENDATIONS
        ),
        risk_factors=validate_string_list(parsed.get("riskFactors"), 3, DEFAULT_RISK_FACTORS),
        opportunities=validate_string_list(
            parsed.get("opportunities"), 3, DEFAULT_OPPORTUNITIES
        ),
        engagement_insights=validate_engagement_insights(parsed.get("engagementInsights")),
    )


def normalize_response(raw_text: str, brand: str, influencer: str) -> AnalysisResult:
    """Parse raw model output into an ``AnalysisResult``.

    Raises:
        ParseError: when no JSON object can be recovered from ``raw_text``.
    """
    try:
        parsed = extract_json_object(raw_text)
    except ParseError as e:
        logger.error(
            "Failed to parse AI response: %s (length=%d, preview=%r)",
            e, len(raw_text or ""), (raw_text or "")[:200],
        )
        raise
    return normalize_parsed(parsed, brand, influencer)
