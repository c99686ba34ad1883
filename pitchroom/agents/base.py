"""
Generation service adapters for PITCHROOM.
One LLMClient per provider; errors surface as GenerationServiceError(status, message).
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..config import LLMConfiguration, LLMProvider

# Tool flags understood by the adapters.
GOOGLE_SEARCH = "google_search"


class GenerationServiceError(Exception):
    """Error returned by the generation service, as status + message."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        if self.status is not None:
            return f"HTTP {self.status}: {self.message}"
        return self.message


def _status_of(error: Exception) -> Optional[int]:
    """Best-effort HTTP status extraction from provider SDK exceptions."""
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None


class LLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        tools: Optional[Sequence[str]] = None,
        history: Optional[List[Dict[str, str]]] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        """Generate a response from the LLM.

        History entries are ``{"role": "user" | "assistant", "content": str}``.
        """
        pass


class OpenAIClient(LLMClient):
    """OpenAI API client implementation (also used for OpenRouter)."""

    def __init__(self, api_key: str, model: str, base_url: str = "https://api.openai.com/v1"):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._client = None

    async def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            # Retries are owned by the AgentInvoker
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url, max_retries=0)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        tools: Optional[Sequence[str]] = None,
        history: Optional[List[Dict[str, str]]] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        client = await self._get_client()
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(history or [])
        messages.append({"role": "user", "content": user_prompt})

        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
        except Exception as e:
            raise GenerationServiceError(str(e), status=_status_of(e)) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class ClaudeClient(LLMClient):
    """Anthropic Claude API client implementation."""

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client = None

    async def _get_client(self):
        if self._client is None:
            from anthropic import AsyncAnthropic
            self._client = AsyncAnthropic(api_key=self.api_key, max_retries=0)
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        tools: Optional[Sequence[str]] = None,
        history: Optional[List[Dict[str, str]]] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        client = await self._get_client()
        if json_mode:
            system_prompt = f"{system_prompt}\n\nYou MUST respond with valid JSON only, no other text."

        messages = list(history or [])
        messages.append({"role": "user", "content": user_prompt})

        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=max_tokens or 4096,
                system=system_prompt,
                messages=messages,
                temperature=temperature,
            )
        except Exception as e:
            raise GenerationServiceError(str(e), status=_status_of(e)) from e

        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")


class GeminiClient(LLMClient):
    """Google Gemini API client implementation. Honours the google_search tool flag."""

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._configured = False

    def _get_model(self, system_prompt: str, tools: Optional[Sequence[str]]):
        import google.generativeai as genai
        if not self._configured:
            genai.configure(api_key=self.api_key)
            self._configured = True

        kwargs = {"system_instruction": system_prompt}
        if tools and GOOGLE_SEARCH in tools:
            kwargs["tools"] = "google_search_retrieval"
        return genai.GenerativeModel(self.model, **kwargs)

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        tools: Optional[Sequence[str]] = None,
        history: Optional[List[Dict[str, str]]] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        model = self._get_model(system_prompt, tools)
        generation_config = {"temperature": temperature}
        if max_tokens:
            generation_config["max_output_tokens"] = max_tokens
        if json_mode:
            generation_config["response_mime_type"] = "application/json"

        try:
            if history:
                chat = model.start_chat(history=[
                    {"role": "model" if turn["role"] == "assistant" else "user", "parts": [turn["content"]]}
                    for turn in history
                ])
                response = await chat.send_message_async(user_prompt, generation_config=generation_config)
            else:
                response = await model.generate_content_async(user_prompt, generation_config=generation_config)
            return response.text
        except Exception as e:
            raise GenerationServiceError(str(e), status=_status_of(e)) from e


def create_llm_client(
    provider: LLMProvider,
    config: LLMConfiguration,
    model: str,
) -> LLMClient:
    """Factory function to create appropriate LLM client."""

    if provider == LLMProvider.OPENAI:
        if not config.openai:
            raise ValueError("OpenAI configuration not provided")
        return OpenAIClient(
            api_key=config.openai.api_key.get_secret_value(),
            model=model,
            base_url=config.openai.base_url,
        )

    elif provider == LLMProvider.OPENROUTER:
        if not config.openrouter:
            raise ValueError("OpenRouter configuration not provided")
        return OpenAIClient(  # OpenRouter uses OpenAI-compatible API
            api_key=config.openrouter.api_key.get_secret_value(),
            model=model,
            base_url=config.openrouter.base_url,
        )

    elif provider == LLMProvider.CLAUDE:
        if not config.claude:
            raise ValueError("Claude configuration not provided")
        return ClaudeClient(
            api_key=config.claude.api_key.get_secret_value(),
            model=model,
        )

    elif provider == LLMProvider.GEMINI:
        if not config.gemini:
            raise ValueError("Gemini configuration not provided")
        return GeminiClient(
            api_key=config.gemini.api_key.get_secret_value(),
            model=model,
        )

    else:
        raise ValueError(f"Unsupported provider: {provider}")


def create_role_clients(config: LLMConfiguration, role_ids: Sequence[str]) -> Dict[str, LLMClient]:
    """Build one client per role from the agent model assignment.

    Roles sharing a provider/model pair share a client instance.
    """
    cache: Dict[tuple, LLMClient] = {}
    clients: Dict[str, LLMClient] = {}
    for role_id in role_ids:
        provider, model = config.agent_models.for_role(role_id)
        key = (provider, model)
        if key not in cache:
            cache[key] = create_llm_client(provider, config, model)
        clients[role_id] = cache[key]
    return clients
