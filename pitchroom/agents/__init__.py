"""
PITCHROOM Agents Module
Generation service adapters, role definitions and the agent invoker.
"""

from .base import (
    GOOGLE_SEARCH,
    ClaudeClient,
    GeminiClient,
    GenerationServiceError,
    LLMClient,
    OpenAIClient,
    create_llm_client,
    create_role_clients,
)
from .invoker import (
    AgentInvoker,
    CancellationToken,
    RetryPolicy,
    exponential_backoff,
    is_retryable_error,
)
from .roles import ROLES, RoleConfig

__all__ = [
    "GOOGLE_SEARCH",
    "LLMClient",
    "OpenAIClient",
    "ClaudeClient",
    "GeminiClient",
    "GenerationServiceError",
    "create_llm_client",
    "create_role_clients",
    "AgentInvoker",
    "CancellationToken",
    "RetryPolicy",
    "exponential_backoff",
    "is_retryable_error",
    "ROLES",
    "RoleConfig",
]
