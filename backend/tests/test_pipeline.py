import json
import random
from types import SimpleNamespace

import anthropic
import pytest

from app.config import Settings
from app.models.analysis import Sentiment
from app.orchestrator.pipeline import AnalysisPipeline
from app.services.errors import LLMError
from app.services.fallback_synthesizer import FallbackSynthesizer
from app.services.post_generator import PostCorpusGenerator


class StubGateway:
    model = "stub-model"

    def __init__(self, reply=None, error=None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.prompts.append((system_prompt, user_prompt))
        if self.error:
            raise self.error
        return self.reply


def _pipeline(gateway=None, api_key="sk-test") -> AnalysisPipeline:
    return AnalysisPipeline(
        config=Settings(ai_provider="openai", openai_api_key=api_key, openai_model="gpt-4"),
        generator=PostCorpusGenerator(rng=random.Random(11)),
        synthesizer=FallbackSynthesizer(rng=random.Random(11)),
        gateway_factory=lambda config: gateway,
    )


@pytest.mark.asyncio
async def test_no_api_key_skips_the_gateway():
    gateway = StubGateway(reply="{}")
    result = await _pipeline(gateway, api_key="").run("techguru", "nike", "instagram", 4)

    assert gateway.prompts == []
    assert result["metadata"]["source"] == "fallback"
    assert result["metadata"]["postsAnalyzed"] == 4
    assert len(result["data"]["contentAnalysis"]) == 4


@pytest.mark.asyncio
async def test_model_reply_is_normalized():
    reply = "Analysis follows:\n" + json.dumps(
        {
            "overallSentiment": "Positive",
            "sentimentScore": 120,
            "brandAlignment": "Aligned",
            "topKeywords": ["fit", "style"],
            "aiQuote": "Strong partner.",
            "contentAnalysis": [{"postIndex": 1, "sentiment": "Positive", "aiComment": "Nice", "brandMention": True}],
            "recommendations": ["Renew"],
            "riskFactors": [],
            "opportunities": ["Launch event"],
            "engagementInsights": "Steady growth.",
        }
    )
    gateway = StubGateway(reply=reply)
    result = await _pipeline(gateway).run("techguru", "nike", "youtube", 3)

    data = result["data"]
    assert data["sentimentScore"] == 100
    assert data["overallSentiment"] == "Positive"
    assert data["aiQuote"] == "Strong partner."
    assert result["metadata"]["source"] == "ai"
    assert result["metadata"]["aiModel"] == "stub-model"
    assert 'POST 3:' in gateway.prompts[0][1]
    # entries past the model's list are filled with defaults
    assert [c["sentiment"] for c in data["contentAnalysis"]] == ["Positive", "Neutral", "Neutral"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "gateway",
    [
        StubGateway(error=LLMError(401, "unauthorized")),
        StubGateway(error=LLMError(None, "timed out")),
        StubGateway(reply="I cannot help with that."),
    ],
)
async def test_any_ai_failure_falls_back(gateway):
    outcome = await _pipeline(gateway).analyze_posts([], "nike", "techguru")

    assert outcome.source == "fallback"
    assert outcome.model is None
    assert outcome.analysis.overall_sentiment in set(Sentiment)


@pytest.mark.asyncio
async def test_unexpected_errors_propagate():
    gateway = StubGateway(error=RuntimeError("bug"))
    with pytest.raises(RuntimeError):
        await _pipeline(gateway).analyze_posts([], "nike", "techguru")


@pytest.mark.asyncio
async def test_report_summary_is_consistent():
    result = await _pipeline(api_key="").run("techguru", "nike", "tiktok", 5)
    summary = result["data"]["summary"]
    dist = summary["sentimentDistribution"]

    assert summary["totalPosts"] == 5
    assert dist["positive"] + dist["neutral"] + dist["negative"] == 100
    assert len(result["data"]["tags"]) <= 5
    assert result["metadata"]["processingTime"].endswith("s")


@pytest.mark.asyncio
async def test_gateway_is_built_once_per_pipeline():
    built = []

    def factory(config):
        built.append(config)
        return StubGateway(reply='{"overallSentiment": "Neutral"}')

    pipeline = AnalysisPipeline(
        config=Settings(ai_provider="openai", openai_api_key="sk-test"),
        generator=PostCorpusGenerator(rng=random.Random(3)),
        gateway_factory=factory,
    )
    for _ in range(3):
        await pipeline.run("techguru", "nike", "instagram", 2)

    assert len(built) == 1


@pytest.mark.asyncio
async def test_anthropic_client_is_reused_across_requests(monkeypatch):
    clients = []

    class RecordingAnthropic:
        def __init__(self, **kwargs) -> None:
            self.kwargs = kwargs
            self.calls = 0
            self.messages = SimpleNamespace(create=self._create)
            clients.append(self)

        async def _create(self, **kwargs):
            self.calls += 1
            return SimpleNamespace(content=[SimpleNamespace(type="text", text='{"sentimentScore": 81}')])

    monkeypatch.setattr(anthropic, "AsyncAnthropic", RecordingAnthropic)
    pipeline = AnalysisPipeline(
        config=Settings(ai_provider="anthropic", anthropic_api_key="ak-test"),
        generator=PostCorpusGenerator(rng=random.Random(4)),
    )

    for _ in range(3):
        result = await pipeline.run("techguru", "nike", "instagram", 2)
        assert result["metadata"]["source"] == "ai"
        assert result["data"]["sentimentScore"] == 81

    assert len(clients) == 1
    assert clients[0].calls == 3
    assert clients[0].kwargs["max_retries"] == 0
