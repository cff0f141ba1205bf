"""LLM gateway: one completion call with bounded retries.

Two interchangeable providers sit behind the gateway:
  - OpenAIChatProvider: any OpenAI-compatible POST /chat/completions, over httpx
  - AnthropicProvider:  the Anthropic Messages API via the official SDK

Providers make exactly one attempt and translate failures into ``LLMError``.
The gateway owns the retry policy: exponential backoff of ``2**attempt``
seconds between attempts, no retry on 401/403.

The gateway is only constructed when an API key is configured; callers
branch to the fallback synthesizer before reaching it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

import anthropic
import httpx

from app.config import Settings, settings as default_settings
from app.services.errors import LLMError

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class AIProvider(Protocol):
    name: str
    model: str

    async def send(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single completion attempt and return the raw text."""
        ...


class OpenAIChatProvider:
    """OpenAI-style chat completions over plain httpx."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        base_url: str = "https://api.openai.com/v1",
        timeout_ms: int = 30000,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_ms / 1000
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, system_prompt: str, user_prompt: str) -> str:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "top_p": 1,
            "frequency_penalty": 0,
            "presence_penalty": 0,
        }

        # Fresh client per attempt: each attempt gets the full timeout budget.
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise LLMError(e.response.status_code, e.response.text[:500] or str(e)) from e
        except httpx.HTTPError as e:
            raise LLMError(None, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise LLMError(resp.status_code, f"Invalid JSON body: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str):
            raise LLMError(
                resp.status_code,
                "Completion response missing choices[0].message.content",
            )
        return content


class AnthropicProvider:
    """Anthropic Messages API. SDK retries are disabled; the gateway retries."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        timeout_ms: int = 30000,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_ms / 1000,
            max_retries=0,
        )

    async def send(self, system_prompt: str, user_prompt: str) -> str:
        try:
            message = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIStatusError as e:
            raise LLMError(e.status_code, e.message) from e
        except anthropic.APIError as e:
            raise LLMError(None, f"{type(e).__name__}: {e}") from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        )
        return text.strip()


class LLMGateway:
    """Stateless completion gateway with retry and exponential backoff."""

    def __init__(
        self,
        provider: AIProvider,
        max_retries: int = 3,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.provider = provider
        self.max_retries = max(1, max_retries)
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self.provider.model

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the raw completion text.

        Raises:
            LLMError: immediately on 401/403, otherwise after ``max_retries``
                failed attempts (the last error is propagated).
        """
        last_error: LLMError | None = None

        for attempt in range(1, self.max_retries + 1):
            try:
                return await self.provider.send(system_prompt, user_prompt)
            except LLMError as e:
                last_error = e
                logger.warning(
                    "%s request attempt %d/%d failed (status=%s): %s",
                    self.provider.name, attempt, self.max_retries, e.status, e.message,
                )
                if not e.retryable:
                    raise
                if attempt < self.max_retries:
                    await self._sleep(2 ** attempt)

        assert last_error is not None
        raise last_error


def build_provider(config: Settings | None = None) -> AIProvider:
    """Instantiate the provider named by ``AI_PROVIDER``."""
    config = config or default_settings
    if config.ai_provider == "anthropic":
        return AnthropicProvider(
            api_key=config.anthropic_api_key,
            model=config.anthropic_model,
            timeout_ms=config.ai_timeout_ms,
        )
    if config.ai_provider != "openai":
        logger.warning("Unknown AI_PROVIDER %r, using openai", config.ai_provider)
    return OpenAIChatProvider(
        api_key=config.openai_api_key,
        model=config.openai_model,
        base_url=config.openai_base_url,
        timeout_ms=config.ai_timeout_ms,
    )


def build_gateway(config: Settings | None = None) -> LLMGateway:
    config = config or default_settings
    return LLMGateway(build_provider(config), max_retries=config.ai_max_retries)
