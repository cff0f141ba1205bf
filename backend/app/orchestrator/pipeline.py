"""Analysis pipeline: chains the core components for one request.

Posts -> Prompt -> LLM Gateway -> Normalizer -> Aggregator
                         \\-> Fallback Synthesizer (no key / any failure)

Every stage is injected so tests can seed the random sources and swap the
gateway for a stub.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

from app.config import Settings, settings as default_settings
from app.models.analysis import AggregatedReport, AnalysisOutcome, AnalysisResult
from app.models.post import Platform, Post
from app.services.aggregator import aggregate
from app.services.errors import AnalysisError
from app.services.fallback_synthesizer import FallbackSynthesizer
from app.services.llm_gateway import LLMGateway, build_gateway
from app.services.post_generator import PostCorpusGenerator
from app.services.prompt_builder import SYSTEM_PROMPT, build_analysis_prompt
from app.services.response_normalizer import normalize_response

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

GatewayFactory = Callable[[Settings], LLMGateway]


class AnalysisPipeline:
    """Runs one influencer/brand analysis end to end."""

    def __init__(
        self,
        config: Settings | None = None,
        generator: PostCorpusGenerator | None = None,
        synthesizer: FallbackSynthesizer | None = None,
        gateway_factory: GatewayFactory = build_gateway,
    ) -> None:
        self.config = config or default_settings
        self.generator = generator or PostCorpusGenerator()
        self.synthesizer = synthesizer or FallbackSynthesizer()
        self._gateway_factory = gateway_factory
        self._gateway: LLMGateway | None = None

    def _get_gateway(self) -> LLMGateway:
        # One gateway (and SDK client) per pipeline; settings are read-only.
        if self._gateway is None:
            self._gateway = self._gateway_factory(self.config)
        return self._gateway

    @property
    def ai_enabled(self) -> bool:
        return bool(self.config.active_api_key)

    async def analyze_posts(
        self,
        posts: list[Post],
        brand: str,
        influencer: str,
    ) -> AnalysisOutcome:
        """Produce an ``AnalysisResult`` from the model, or synthesize one.

        Never raises for AI-side failures: a missing key, exhausted retries,
        an auth failure or unparseable output all end in the synthesizer.
        """
        start = time.monotonic()

        if not self.ai_enabled:
            logger.info(
                "No API key configured for %s, using synthetic analysis "
                "(influencer=%s, brand=%s, posts=%d)",
                self.config.ai_provider, influencer, brand, len(posts),
            )
            return AnalysisOutcome(
                analysis=self.synthesizer.synthesize(brand, influencer, posts),
                source="fallback",
            )

        gateway = self._get_gateway()
        prompt = build_analysis_prompt(posts, brand, influencer)
        logger.info(
            "Sending analysis request (model=%s, posts=%d, prompt_length=%d)",
            gateway.model, len(posts), len(prompt),
        )

        try:
            raw = await gateway.complete(SYSTEM_PROMPT, prompt)
            analysis = normalize_response(raw, brand, influencer)
        except AnalysisError as e:
            logger.error(
                "AI analysis failed after %dms, using fallback: %s",
                int((time.monotonic() - start) * 1000), e,
            )
            return AnalysisOutcome(
                analysis=self.synthesizer.synthesize(brand, influencer, posts),
                source="fallback",
            )

        logger.info(
            "AI analysis completed in %dms (score=%d, sentiment=%s)",
            int((time.monotonic() - start) * 1000),
            analysis.sentiment_score,
            analysis.overall_sentiment.value,
        )
        return AnalysisOutcome(analysis=analysis, source="ai", model=gateway.model)

    async def run(
        self,
        influencer: str,
        brand: str,
        platform: Platform | str = Platform.INSTAGRAM,
        limit: int = 10,
    ) -> dict[str, Any]:
        """Full request cycle; returns the ``/api/analyze`` response envelope."""
        start = time.monotonic()
        platform = Platform(platform)

        posts = self.generator.generate(influencer, brand, platform, limit)
        outcome = await self.analyze_posts(posts, brand, influencer)
        report = aggregate(posts, outcome.analysis, brand)

        elapsed = time.monotonic() - start
        logger.info(
            "Analysis for %s x %s completed in %.2fs (source=%s)",
            influencer, brand, elapsed, outcome.source,
        )

        return {
            "success": True,
            "data": format_analysis_data(outcome.analysis, report),
            "metadata": {
                "influencer": influencer,
                "brand": brand,
                "platform": platform.value,
                "processingTime": f"{elapsed:.1f}s",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "postsAnalyzed": len(posts),
                "aiModel": outcome.model or self.config.active_model,
                "source": outcome.source,
                "version": API_VERSION,
            },
        }


def format_analysis_data(analysis: AnalysisResult, report: AggregatedReport) -> dict[str, Any]:
    """Shape the analysis + report into the dashboard's ``data`` block."""
    a = analysis.to_wire()
    r = report.to_wire(exclude_none=True)
    return {
        "sentimentScore": a["sentimentScore"],
        "overallSentiment": a["overallSentiment"],
        "brandAlignment": a["brandAlignment"],
        "aiQuote": a["aiQuote"],
        "topKeywords": a["topKeywords"],
        "recommendations": a["recommendations"],
        "riskFactors": a["riskFactors"],
        "opportunities": a["opportunities"],
        "engagementInsights": a["engagementInsights"],
        "contentAnalysis": r["content"],
        "summary": {
            "totalPosts": r["totalPosts"],
            "totalEngagement": r["totalEngagement"],
            "averageEngagement": r["averageEngagement"],
            "brandMentions": r["brandMentions"],
            "brandMentionRate": r["brandMentionRate"],
            "sentimentDistribution": r["sentimentDistribution"],
        },
        "tags": r["tags"],
    }
