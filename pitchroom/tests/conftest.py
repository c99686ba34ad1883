"""
Pytest configuration and fixtures for PITCHROOM tests.

This module provides:
- Network blocking fixture to prevent accidental API calls in CI
- A scripted fake LLM client, one instance per role
- A fake clock for retry backoff
"""

import json
import socket
from typing import Dict, List, Optional
from unittest.mock import patch

import pytest

from pitchroom.agents.base import LLMClient
from pitchroom.agents.invoker import AgentInvoker, RetryPolicy
from pitchroom.config import ROLE_IDS
from pitchroom.models import DIMENSION_NAMES


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""
    pass


def _block_socket_connect(*args, **kwargs):
    """Block all socket connections to prevent accidental API calls."""
    raise NetworkBlockedError(
        "Network access is blocked in unit tests. "
        "If you need to test network functionality, use mocks. "
        "This prevents accidental OpenAI/Anthropic/Gemini API calls that cost money."
    )


@pytest.fixture(autouse=True)
def block_network():
    """
    Automatically block all network connections in tests.

    Every generation service call in the suite goes through FakeLLMClient.
    """
    with patch.object(socket.socket, 'connect', _block_socket_connect):
        with patch.object(socket, 'create_connection', _block_socket_connect):
            yield


class FakeLLMClient(LLMClient):
    """
    Scripted client. Each call consumes the next scripted item; the last one
    repeats. Exceptions in the script are raised, callables are called with
    (system_prompt, user_prompt).
    """

    def __init__(self, script=None, name: str = "fake"):
        if script is None:
            script = [f"{name} output"]
        self.script = list(script) if isinstance(script, (list, tuple)) else [script]
        self.name = name
        self.calls: List[Dict] = []

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        tools=None,
        history=None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "tools": list(tools or []),
            "history": list(history or []),
            "json_mode": json_mode,
        })
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(system_prompt, user_prompt)
        return item


class FakeClock:
    """Records requested sleeps instead of sleeping."""

    def __init__(self):
        self.sleeps: List[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class CallLog:
    """Shared call order across all per-role fake clients."""

    def __init__(self):
        self.order: List[str] = []


class LoggingFakeClient(FakeLLMClient):
    def __init__(self, log: CallLog, script=None, name: str = "fake"):
        super().__init__(script, name)
        self.log = log

    async def generate(self, system_prompt, user_prompt, **kwargs) -> str:
        self.log.order.append(self.name)
        return await super().generate(system_prompt, user_prompt, **kwargs)


def make_scorecard_json(overall: int = 80, scores: Optional[List[int]] = None, recommendations=None) -> str:
    scores = scores or [overall] * len(DIMENSION_NAMES)
    return json.dumps({
        "dimensions": [
            {"name": name, "score": score, "rationale": f"{name} rationale"}
            for name, score in zip(DIMENSION_NAMES, scores)
        ],
        "overall": overall,
        "summary": "Solid pitch.",
        "recommendations": recommendations if recommendations is not None else ["Tighten the hook"],
    })


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def call_log():
    return CallLog()


@pytest.fixture
def make_invoker(fake_clock, call_log):
    """Build an AgentInvoker with one scripted client per role.

    ``scripts`` maps role id to a script; unscripted roles answer
    '<role_id> output'.
    """
    def _make(scripts: Optional[Dict[str, object]] = None, retries: int = 2):
        scripts = scripts or {}
        clients = {
            role_id: LoggingFakeClient(call_log, scripts.get(role_id), name=role_id)
            for role_id in ROLE_IDS
        }
        invoker = AgentInvoker(
            role_clients=clients,
            retry_policy=RetryPolicy.from_retries(retries, 1.0, sleep=fake_clock.sleep),
            timeout_seconds=5,
        )
        return invoker, clients

    return _make
