"""
PITCHROOM Configuration Module
LLM provider configuration and pipeline settings.
"""

from .llm_providers import (
    CLAUDE_MODELS,
    GEMINI_MODELS,
    # Model Definitions
    OPENAI_MODELS,
    OPENROUTER_MODELS,
    ROLE_IDS,
    AgentModelConfig,
    ClaudeConfig,
    GeminiConfig,
    LLMConfiguration,
    # Enums
    LLMProvider,
    OpenAIConfig,
    OpenRouterConfig,
    # Configuration Models
    ProviderConfig,
    create_default_config_from_env,
    get_models_for_role,
)
from .pipeline import PipelineSettings, load_pipeline_settings

__all__ = [
    "LLMProvider",
    "ROLE_IDS",
    "OPENAI_MODELS",
    "OPENROUTER_MODELS",
    "GEMINI_MODELS",
    "CLAUDE_MODELS",
    "ProviderConfig",
    "OpenAIConfig",
    "OpenRouterConfig",
    "GeminiConfig",
    "ClaudeConfig",
    "AgentModelConfig",
    "LLMConfiguration",
    "get_models_for_role",
    "create_default_config_from_env",
    "PipelineSettings",
    "load_pipeline_settings",
]
