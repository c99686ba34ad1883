"""
Unit tests for provider configuration and pipeline settings.
"""

import pytest

from pitchroom.agents import ROLES
from pitchroom.agents.base import ClaudeClient, GeminiClient, OpenAIClient, create_llm_client, create_role_clients
from pitchroom.config import (
    ROLE_IDS,
    AgentModelConfig,
    LLMConfiguration,
    LLMProvider,
    PipelineSettings,
    create_default_config_from_env,
    get_models_for_role,
    load_pipeline_settings,
)

_ENV_KEYS = (
    "OPENAI_API_KEY",
    "OPENROUTER_API_KEY",
    "GEMINI_API_KEY",
    "ANTHROPIC_API_KEY",
    "PITCHROOM_DEFAULT_PROVIDER",
    "PITCHROOM_DEFAULT_MODEL",
    "PITCHROOM_TIMEOUT_SECONDS",
    "PITCHROOM_MAX_RETRIES",
    "PITCHROOM_GATE_ANCHORED",
    "PITCHROOM_DEFAULT_PLATFORM",
    "PITCHROOM_EVALUATOR_INPUT_CHARS",
    "PITCHROOM_CONTEXT_CHAR_LIMIT",
    "PITCHROOM_GREENLIGHT_SCORE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestLLMConfiguration:
    """Tests for LLMConfiguration and environment loading."""

    def test_defaults(self, clean_env):
        config = create_default_config_from_env()

        assert config.max_retries == 2
        assert config.retry_base_delay == 1.0
        assert config.timeout_seconds == 120
        assert config.get_enabled_providers() == []

    def test_missing_provider_reported(self, clean_env):
        errors = create_default_config_from_env().validate_agent_models()
        assert len(errors) == len(ROLE_IDS)
        assert "gemini is not configured" in errors[0]

    def test_gemini_key_validates_defaults(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "test-key")

        config = create_default_config_from_env()

        assert config.get_enabled_providers() == [LLMProvider.GEMINI]
        assert config.validate_agent_models() == []

    def test_default_provider_routes_every_role(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "test-key")
        clean_env.setenv("PITCHROOM_DEFAULT_PROVIDER", "claude")

        config = create_default_config_from_env()

        for role_id in ROLE_IDS:
            assert config.agent_models.for_role(role_id) == (LLMProvider.CLAUDE, "claude-3-5-sonnet-20241022")
        assert config.validate_agent_models() == []

    def test_default_provider_without_key(self, clean_env):
        clean_env.setenv("PITCHROOM_DEFAULT_PROVIDER", "openai")
        with pytest.raises(ValueError):
            create_default_config_from_env()

    def test_retry_and_timeout_overrides(self, clean_env):
        clean_env.setenv("PITCHROOM_TIMEOUT_SECONDS", "60")
        clean_env.setenv("PITCHROOM_MAX_RETRIES", "4")

        config = create_default_config_from_env()

        assert config.timeout_seconds == 60
        assert config.max_retries == 4

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            AgentModelConfig().for_role("narrator")

    def test_models_for_role(self):
        assert "gpt-4o" in get_models_for_role("evaluator")["openai"]

    def test_role_catalogue_matches_routing(self):
        """Test that every defined role has a provider/model slot and vice versa."""
        assert set(ROLES) == set(ROLE_IDS)
        for role_id in ROLES:
            AgentModelConfig().for_role(role_id)


class TestClientFactory:
    """Tests for create_llm_client and create_role_clients."""

    def _config(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("GEMINI_API_KEY", "g-test")
        clean_env.setenv("ANTHROPIC_API_KEY", "a-test")
        return create_default_config_from_env()

    def test_client_types(self, clean_env):
        config = self._config(clean_env)
        assert isinstance(create_llm_client(LLMProvider.OPENAI, config, "gpt-4o"), OpenAIClient)
        assert isinstance(create_llm_client(LLMProvider.CLAUDE, config, "claude-3-5-haiku-20241022"), ClaudeClient)
        assert isinstance(create_llm_client(LLMProvider.GEMINI, config, "gemini-2.0-flash"), GeminiClient)

    def test_unconfigured_provider_raises(self):
        with pytest.raises(ValueError):
            create_llm_client(LLMProvider.OPENROUTER, LLMConfiguration(), "openai/gpt-4o")

    def test_roles_share_clients_per_model(self, clean_env):
        config = self._config(clean_env)
        config.agent_models.evaluator_provider = LLMProvider.OPENAI
        config.agent_models.evaluator_model = "gpt-4o"

        clients = create_role_clients(config, ROLE_IDS)

        assert set(clients) == set(ROLE_IDS)
        assert clients["discovery_scout"] is clients["showrunner"]
        assert isinstance(clients["evaluator"], OpenAIClient)


class TestPipelineSettings:
    """Tests for PipelineSettings loading."""

    def test_defaults(self, clean_env):
        settings = load_pipeline_settings()
        assert settings == PipelineSettings()
        assert settings.gate_anchored is False
        assert settings.evaluator_input_chars == 500

    def test_env_overrides(self, clean_env):
        clean_env.setenv("PITCHROOM_GATE_ANCHORED", "true")
        clean_env.setenv("PITCHROOM_DEFAULT_PLATFORM", "Apple TV+")
        clean_env.setenv("PITCHROOM_EVALUATOR_INPUT_CHARS", "250")
        clean_env.setenv("PITCHROOM_CONTEXT_CHAR_LIMIT", "4000")
        clean_env.setenv("PITCHROOM_GREENLIGHT_SCORE", "80")

        settings = load_pipeline_settings()

        assert settings.gate_anchored is True
        assert settings.default_platform == "Apple TV+"
        assert settings.evaluator_input_chars == 250
        assert settings.context_char_limit == 4000
        assert settings.greenlight_score == 80
