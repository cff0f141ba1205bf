"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Central settings for AI provider keys and service tuning."""

    # --- AI provider ---
    # Provider: "openai"    → OpenAI-compatible /chat/completions over httpx
    #           "anthropic" → Anthropic Messages API via the official SDK
    ai_provider: str = Field(default="openai", alias="AI_PROVIDER")

    # --- OpenAI (or any OpenAI-compatible endpoint) ---
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4", alias="OPENAI_MODEL")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1", alias="OPENAI_BASE_URL"
    )

    # --- Anthropic ---
    anthropic_api_key: str = Field(default="", alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514", alias="ANTHROPIC_MODEL"
    )

    # --- Gateway tuning (applies to every provider) ---
    ai_timeout_ms: int = Field(default=30000, alias="AI_TIMEOUT_MS")
    ai_max_retries: int = Field(default=3, alias="AI_MAX_RETRIES")

    # --- App ---
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Comma-separated list of CORS origins
    allowed_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        alias="ALLOWED_ORIGINS",
    )
    brief_generation_delay_seconds: int = Field(
        default=5, alias="BRIEF_GENERATION_DELAY_SECONDS"
    )

    model_config = {"env_file": ".env", "extra": "ignore", "populate_by_name": True}

    @property
    def active_api_key(self) -> str:
        if self.ai_provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def active_model(self) -> str:
        if self.ai_provider == "anthropic":
            return self.anthropic_model
        return self.openai_model


settings = Settings()
