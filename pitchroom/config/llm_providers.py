"""
LLM Provider Configuration - BYOK (Bring Your Own Key) Support
Supports OpenAI, OpenRouter, Google Gemini, and Anthropic Claude
"""

import os
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, Field, SecretStr


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    CLAUDE = "claude"


# Role ids, in the order they first appear in a generation run.
ROLE_IDS: Tuple[str, ...] = (
    "discovery_scout",
    "market_analyst",
    "chief_scientist",
    "field_producer",
    "story_producer",
    "commissioning_editor",
    "showrunner",
    "adversary",
    "evaluator",
    "consultant",
)


# ============================================================================
# Model Catalogue by Provider
# ============================================================================
# model id -> display name and the roles it is a good fit for

_ANALYSTS = ("discovery_scout", "market_analyst", "field_producer")
_WRITERS = ("story_producer", "commissioning_editor", "showrunner")
_CRITICS = ("chief_scientist", "adversary", "evaluator")

OPENAI_MODELS: Dict[str, Dict[str, Any]] = {
    "gpt-4o": {"name": "GPT-4o", "roles": _WRITERS + ("evaluator",)},
    "gpt-4o-mini": {"name": "GPT-4o Mini", "roles": ("consultant",) + _ANALYSTS},
    "o3-mini": {"name": "o3-mini", "roles": ("chief_scientist", "adversary")},
}

OPENROUTER_MODELS: Dict[str, Dict[str, Any]] = {
    "anthropic/claude-3.5-sonnet": {"name": "Claude 3.5 Sonnet via OpenRouter", "roles": _WRITERS},
    "google/gemini-2.0-flash-exp": {"name": "Gemini 2.0 Flash via OpenRouter", "roles": _ANALYSTS},
    "openai/gpt-4o": {"name": "GPT-4o via OpenRouter", "roles": _CRITICS},
}

# Only Gemini models honour the google_search tool flag.
GEMINI_MODELS: Dict[str, Dict[str, Any]] = {
    "gemini-2.0-flash": {"name": "Gemini 2.0 Flash", "roles": ROLE_IDS},
    "gemini-1.5-pro": {"name": "Gemini 1.5 Pro", "roles": ("showrunner", "evaluator")},
    "gemini-1.5-flash": {"name": "Gemini 1.5 Flash", "roles": ("consultant",)},
}

CLAUDE_MODELS: Dict[str, Dict[str, Any]] = {
    "claude-sonnet-4-20250514": {"name": "Claude Sonnet 4", "roles": ("story_producer", "showrunner")},
    "claude-3-5-sonnet-20241022": {"name": "Claude 3.5 Sonnet", "roles": ("commissioning_editor", "consultant")},
    "claude-3-5-haiku-20241022": {"name": "Claude 3.5 Haiku", "roles": ("evaluator",)},
}


# ============================================================================
# Provider Configuration Models
# ============================================================================

class ProviderConfig(BaseModel):
    """Base configuration for an LLM provider."""
    provider: LLMProvider
    api_key: SecretStr
    base_url: Optional[str] = None
    default_model: str
    enabled: bool = True

    catalogue: ClassVar[Dict[str, Dict[str, Any]]] = {}

    def has_model(self, model: str) -> bool:
        return model in self.catalogue


class OpenAIConfig(ProviderConfig):
    provider: LLMProvider = LLMProvider.OPENAI
    base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-4o"

    catalogue: ClassVar[Dict[str, Dict[str, Any]]] = OPENAI_MODELS


class OpenRouterConfig(ProviderConfig):
    """OpenRouter speaks the OpenAI wire protocol."""
    provider: LLMProvider = LLMProvider.OPENROUTER
    base_url: str = "https://openrouter.ai/api/v1"
    default_model: str = "anthropic/claude-3.5-sonnet"

    catalogue: ClassVar[Dict[str, Dict[str, Any]]] = OPENROUTER_MODELS


class GeminiConfig(ProviderConfig):
    provider: LLMProvider = LLMProvider.GEMINI
    default_model: str = "gemini-2.0-flash"

    catalogue: ClassVar[Dict[str, Dict[str, Any]]] = GEMINI_MODELS


class ClaudeConfig(ProviderConfig):
    provider: LLMProvider = LLMProvider.CLAUDE
    default_model: str = "claude-3-5-sonnet-20241022"

    catalogue: ClassVar[Dict[str, Dict[str, Any]]] = CLAUDE_MODELS


# ============================================================================
# Role Model Assignment
# ============================================================================

_DEFAULT_PROVIDER = LLMProvider.GEMINI
_DEFAULT_MODEL = "gemini-2.0-flash"


class AgentModelConfig(BaseModel):
    """Provider and model for each role. Every role defaults to Gemini Flash."""
    discovery_scout_provider: LLMProvider = _DEFAULT_PROVIDER
    discovery_scout_model: str = _DEFAULT_MODEL
    market_analyst_provider: LLMProvider = _DEFAULT_PROVIDER
    market_analyst_model: str = _DEFAULT_MODEL
    chief_scientist_provider: LLMProvider = _DEFAULT_PROVIDER
    chief_scientist_model: str = _DEFAULT_MODEL
    field_producer_provider: LLMProvider = _DEFAULT_PROVIDER
    field_producer_model: str = _DEFAULT_MODEL
    story_producer_provider: LLMProvider = _DEFAULT_PROVIDER
    story_producer_model: str = _DEFAULT_MODEL
    commissioning_editor_provider: LLMProvider = _DEFAULT_PROVIDER
    commissioning_editor_model: str = _DEFAULT_MODEL
    showrunner_provider: LLMProvider = _DEFAULT_PROVIDER
    showrunner_model: str = _DEFAULT_MODEL
    adversary_provider: LLMProvider = _DEFAULT_PROVIDER
    adversary_model: str = _DEFAULT_MODEL
    evaluator_provider: LLMProvider = _DEFAULT_PROVIDER
    evaluator_model: str = _DEFAULT_MODEL
    consultant_provider: LLMProvider = _DEFAULT_PROVIDER
    consultant_model: str = _DEFAULT_MODEL

    def for_role(self, role_id: str) -> Tuple[LLMProvider, str]:
        """Return the (provider, model) pair assigned to a role."""
        if role_id not in ROLE_IDS:
            raise ValueError(f"Unknown role: {role_id}")
        return getattr(self, f"{role_id}_provider"), getattr(self, f"{role_id}_model")

    def route_all(self, provider: LLMProvider, model: str) -> None:
        for role_id in ROLE_IDS:
            setattr(self, f"{role_id}_provider", provider)
            setattr(self, f"{role_id}_model", model)


# ============================================================================
# Master Configuration
# ============================================================================

class LLMConfiguration(BaseModel):
    """Keys for each provider (bring your own), role routing and call policy."""

    openai: Optional[OpenAIConfig] = None
    openrouter: Optional[OpenRouterConfig] = None
    gemini: Optional[GeminiConfig] = None
    claude: Optional[ClaudeConfig] = None

    agent_models: AgentModelConfig = Field(default_factory=AgentModelConfig)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_retries: int = Field(default=2, ge=0, le=10, description="Retries after the first attempt")
    retry_base_delay: float = Field(default=1.0, ge=0.0, le=60.0, description="Backoff base in seconds")
    timeout_seconds: int = Field(default=120, ge=10, le=600)

    def get_provider_config(self, provider: LLMProvider) -> Optional[ProviderConfig]:
        return getattr(self, provider.value)

    def get_enabled_providers(self) -> List[LLMProvider]:
        enabled = []
        for provider in LLMProvider:
            provider_config = self.get_provider_config(provider)
            if provider_config is not None and provider_config.enabled:
                enabled.append(provider)
        return enabled

    def validate_agent_models(self) -> List[str]:
        """One message per role whose provider or model cannot be used."""
        errors = []
        for role_id in ROLE_IDS:
            provider, model = self.agent_models.for_role(role_id)
            provider_config = self.get_provider_config(provider)
            if provider_config is None:
                errors.append(f"{role_id}: Provider {provider.value} is not configured")
            elif not provider_config.enabled:
                errors.append(f"{role_id}: Provider {provider.value} is disabled")
            elif not provider_config.has_model(model):
                errors.append(f"{role_id}: Model {model} not available for {provider.value}")
        return errors


# ============================================================================
# Helper Functions
# ============================================================================

_CATALOGUES: Dict[LLMProvider, Dict[str, Dict[str, Any]]] = {
    LLMProvider.OPENAI: OPENAI_MODELS,
    LLMProvider.OPENROUTER: OPENROUTER_MODELS,
    LLMProvider.GEMINI: GEMINI_MODELS,
    LLMProvider.CLAUDE: CLAUDE_MODELS,
}

_PROVIDER_ENV: Tuple[Tuple[LLMProvider, str, Type[ProviderConfig]], ...] = (
    (LLMProvider.OPENAI, "OPENAI_API_KEY", OpenAIConfig),
    (LLMProvider.OPENROUTER, "OPENROUTER_API_KEY", OpenRouterConfig),
    (LLMProvider.GEMINI, "GEMINI_API_KEY", GeminiConfig),
    (LLMProvider.CLAUDE, "ANTHROPIC_API_KEY", ClaudeConfig),
)


def get_models_for_role(role_id: str) -> Dict[str, List[str]]:
    """Catalogued models suited to ``role_id``, grouped by provider name."""
    recommended = {}
    for provider, models in _CATALOGUES.items():
        matches = [model_id for model_id, info in models.items() if role_id in info["roles"]]
        if matches:
            recommended[provider.value] = matches
    return recommended


def create_default_config_from_env() -> LLMConfiguration:
    """Build configuration from provider keys and PITCHROOM_* overrides.

    ``PITCHROOM_DEFAULT_PROVIDER`` routes every role to one provider, using
    ``PITCHROOM_DEFAULT_MODEL`` or that provider's default model.
    """
    config = LLMConfiguration()

    for provider, env_key, config_cls in _PROVIDER_ENV:
        api_key = os.getenv(env_key)
        if api_key:
            setattr(config, provider.value, config_cls(api_key=SecretStr(api_key)))

    default_provider = os.getenv("PITCHROOM_DEFAULT_PROVIDER")
    if default_provider:
        provider = LLMProvider(default_provider.lower())
        provider_config = config.get_provider_config(provider)
        if provider_config is None:
            raise ValueError(f"PITCHROOM_DEFAULT_PROVIDER={default_provider} but no API key is set for it")
        config.agent_models.route_all(
            provider, os.getenv("PITCHROOM_DEFAULT_MODEL", provider_config.default_model),
        )

    if os.getenv("PITCHROOM_TIMEOUT_SECONDS"):
        config.timeout_seconds = int(os.getenv("PITCHROOM_TIMEOUT_SECONDS"))
    if os.getenv("PITCHROOM_MAX_RETRIES"):
        config.max_retries = int(os.getenv("PITCHROOM_MAX_RETRIES"))

    return config
