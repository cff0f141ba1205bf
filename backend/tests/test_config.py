from app.config import Settings


def test_allowed_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,")

    config = Settings()

    assert config.allowed_origins == "http://a.test, http://b.test,"
    assert config.cors_origins == ["http://a.test", "http://b.test"]


def test_default_origins_are_local_dev_servers(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    config = Settings(_env_file=None)

    assert config.cors_origins == ["http://localhost:3000", "http://127.0.0.1:3000"]


def test_active_provider_values():
    config = Settings(
        ai_provider="anthropic",
        openai_api_key="sk-openai",
        anthropic_api_key="sk-ant",
        anthropic_model="claude-test",
    )
    assert config.active_api_key == "sk-ant"
    assert config.active_model == "claude-test"
