"""
Error taxonomy for PITCHROOM.

A gate rejection is not an error: it is the ``gated_rejected`` run state.
Patch degradation is not an error either: it is reported through
``PatchResult.strategy``.
"""

from typing import Any, Optional


class PitchroomError(Exception):
    """Base class for all PITCHROOM errors."""
    pass


class TransientServiceError(PitchroomError):
    """A transport or service failure that may succeed on retry."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class FatalRunError(PitchroomError):
    """A run cannot continue: retries exhausted, non-retryable service error, or empty response."""

    def __init__(self, role_id: str, message: str, run: Optional[Any] = None):
        super().__init__(f"{role_id}: {message}")
        self.role_id = role_id
        self.message = message
        self.run = run


class ParseContractViolation(PitchroomError):
    """A structured-output consumer received text it could not parse."""

    def __init__(self, contract: str, raw_text: str, reason: str = ""):
        detail = f" ({reason})" if reason else ""
        super().__init__(f"{contract} response is not valid structured output{detail}")
        self.contract = contract
        self.raw_text = raw_text
        self.reason = reason


class PipelineCancelled(PitchroomError):
    """The session's cancellation token fired. Never retried."""
    pass
