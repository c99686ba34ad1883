"""
Agent Invoker for PITCHROOM.

A single call to the generation service with a timeout, bounded retry with
exponential backoff, and cooperative cancellation. This is the only place the
pipeline waits on an external resource.
"""

import asyncio
import contextlib
import logging
import time
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

import httpx

from ..core.errors import FatalRunError, PipelineCancelled, TransientServiceError
from .base import GenerationServiceError, LLMClient
from .roles import RoleConfig

logger = logging.getLogger("pitchroom.invoker")


class CancellationToken:
    """Cooperative cancellation shared by a session and its in-flight calls."""

    def __init__(self):
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise PipelineCancelled("Run cancelled")

    async def wait(self) -> None:
        await self._event.wait()


def exponential_backoff(base_delay: float = 1.0) -> Callable[[int], float]:
    """Delay after failed attempt n (0-based): base, 2*base, 4*base, ..."""
    def backoff(attempt: int) -> float:
        return base_delay * (2 ** attempt)
    return backoff


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts an invocation gets and how long to wait between them.

    ``sleep`` is injectable so tests can run against a fake clock.
    """
    max_attempts: int = 3
    backoff: Callable[[int], float] = exponential_backoff(1.0)
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @classmethod
    def from_retries(
        cls,
        retries: int = 2,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> "RetryPolicy":
        return cls(max_attempts=retries + 1, backoff=exponential_backoff(base_delay), sleep=sleep)

    def with_retries(self, retries: int) -> "RetryPolicy":
        return replace(self, max_attempts=retries + 1)


def is_retryable_error(error: Exception) -> bool:
    """Check if an error is retryable (transient network/API errors).

    Retryable errors include:
    - Timeouts, connection errors and empty responses
    - HTTP 408, 409, 429 and 5xx
    - Provider overload / rate limit messages

    Non-retryable errors include:
    - HTTP 400, 401, 403, 404
    - Invalid API key or model errors
    """
    if isinstance(error, (TransientServiceError, asyncio.TimeoutError, httpx.TransportError, ConnectionError)):
        return True

    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status in (408, 409, 429) or status >= 500

    error_str = str(error).lower()

    non_retryable_patterns = [
        "401", "403", "400", "404",
        "invalid api key", "invalid_api_key", "authentication",
        "unauthorized", "forbidden", "invalid model",
        "model not found", "does not exist", "permission denied",
    ]
    for pattern in non_retryable_patterns:
        if pattern in error_str:
            return False

    retryable_patterns = [
        "429", "rate limit", "rate_limit", "ratelimit",
        "500", "502", "503", "504",
        "timeout", "timed out", "connection",
        "overloaded", "overload", "capacity", "resource exhausted",
        "temporarily unavailable", "service unavailable",
        "internal server error", "bad gateway", "gateway timeout",
    ]
    for pattern in retryable_patterns:
        if pattern in error_str:
            return True

    return False


class AgentInvoker:
    """Invokes one role against the generation service.

    Clients are resolved per role from ``role_clients``, falling back to
    ``llm_client``.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        role_clients: Optional[Dict[str, LLMClient]] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout_seconds: float = 120.0,
        temperature: float = 0.7,
    ):
        if llm_client is None and not role_clients:
            raise ValueError("AgentInvoker needs a default llm_client or role_clients")
        self.llm_client = llm_client
        self.role_clients = dict(role_clients or {})
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature

    def client_for(self, role: RoleConfig) -> LLMClient:
        client = self.role_clients.get(role.id, self.llm_client)
        if client is None:
            raise ValueError(f"No LLM client configured for role {role.id}")
        return client

    async def invoke(
        self,
        role: RoleConfig,
        context: str,
        *,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        tools: Optional[Sequence[str]] = None,
        history: Optional[List[Dict[str, str]]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> str:
        """Call ``role`` with ``context`` and return non-empty text.

        Raises:
            PipelineCancelled: the token fired before or during a call.
            FatalRunError: retries exhausted, a non-retryable service error,
                or an empty response on every attempt.
        """
        policy = self.retry_policy if retries is None else self.retry_policy.with_retries(retries)
        timeout = timeout or self.timeout_seconds
        tools = role.tools if tools is None else tuple(tools)
        client = self.client_for(role)

        logger.info(f"[invoke] Role: {role.id}, tools: {list(tools)}, max_attempts: {policy.max_attempts}")

        last_error: Optional[Exception] = None
        for attempt in range(policy.max_attempts):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            start_time = time.time()
            try:
                text = await self._call_once(client, role, context, tools, history, timeout, cancel_token)
            except PipelineCancelled:
                logger.info(f"[invoke] Role {role.id} cancelled on attempt {attempt + 1}")
                raise
            except (GenerationServiceError, TransientServiceError, asyncio.TimeoutError,
                    httpx.TransportError, ConnectionError) as e:
                if isinstance(e, asyncio.TimeoutError):
                    e = TransientServiceError(f"timed out after {timeout}s", status=408)
                last_error = e
                logger.warning(f"[invoke] Role {role.id} attempt {attempt + 1}/{policy.max_attempts} failed: {e}")
                if not is_retryable_error(e):
                    logger.error(f"[invoke] Non-retryable error for {role.id}: {e}")
                    raise FatalRunError(role.id, str(e)) from e
            else:
                if text and text.strip():
                    duration_ms = int((time.time() - start_time) * 1000)
                    logger.info(f"[invoke] Role {role.id} complete in {duration_ms}ms, attempts: {attempt + 1}")
                    return text
                last_error = TransientServiceError("empty response from generation service")
                logger.warning(f"[invoke] Role {role.id} attempt {attempt + 1}/{policy.max_attempts} returned empty text")

            if attempt < policy.max_attempts - 1:
                delay = policy.backoff(attempt)
                logger.info(f"[invoke] Retry attempt {attempt + 2}/{policy.max_attempts} for {role.id} after {delay:.1f}s delay")
                await policy.sleep(delay)

        logger.error(f"[invoke] All {policy.max_attempts} attempts exhausted for {role.id}")
        raise FatalRunError(
            role.id,
            f"retries exhausted after {policy.max_attempts} attempts: {last_error}",
        ) from last_error

    async def _call_once(
        self,
        client: LLMClient,
        role: RoleConfig,
        context: str,
        tools: Sequence[str],
        history: Optional[List[Dict[str, str]]],
        timeout: float,
        cancel_token: Optional[CancellationToken],
    ) -> str:
        call = asyncio.ensure_future(asyncio.wait_for(
            client.generate(
                system_prompt=role.system_prompt,
                user_prompt=context,
                tools=list(tools),
                history=history,
                temperature=self.temperature,
                json_mode=role.json_output,
            ),
            timeout,
        ))
        if cancel_token is None:
            return await call

        waiter = asyncio.ensure_future(cancel_token.wait())
        try:
            done, _ = await asyncio.wait({call, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            call.cancel()
            raise
        finally:
            waiter.cancel()

        if call in done:
            return call.result()

        call.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await call
        raise PipelineCancelled(f"Run cancelled while {role.id} was generating")
