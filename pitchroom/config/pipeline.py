"""
Pipeline settings that are independent of the LLM provider.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field


class PipelineSettings(BaseModel):
    """Behavioural knobs for the sequencer, evaluator and revision session."""
    gate_anchored: bool = Field(
        default=False,
        description="Only honour rejection sentinels on heading lines / at line start",
    )
    default_platform: Optional[str] = Field(
        default=None,
        description="Platform note used when a run does not specify one",
    )
    evaluator_input_chars: int = Field(
        default=500,
        ge=0,
        description="How much of the original input the evaluator sees",
    )
    context_char_limit: int = Field(
        default=0,
        ge=0,
        description="Per-output truncation when building agent context (0 = unlimited)",
    )
    greenlight_score: int = Field(
        default=85,
        ge=1,
        le=100,
        description="Commissioning Editor score that ends the quality revision loop",
    )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_pipeline_settings() -> PipelineSettings:
    """Create pipeline settings from PITCHROOM_* environment variables."""
    settings = PipelineSettings(gate_anchored=_env_bool("PITCHROOM_GATE_ANCHORED", False))

    if os.getenv("PITCHROOM_DEFAULT_PLATFORM"):
        settings.default_platform = os.getenv("PITCHROOM_DEFAULT_PLATFORM")
    if os.getenv("PITCHROOM_EVALUATOR_INPUT_CHARS"):
        settings.evaluator_input_chars = int(os.getenv("PITCHROOM_EVALUATOR_INPUT_CHARS"))
    if os.getenv("PITCHROOM_CONTEXT_CHAR_LIMIT"):
        settings.context_char_limit = int(os.getenv("PITCHROOM_CONTEXT_CHAR_LIMIT"))
    if os.getenv("PITCHROOM_GREENLIGHT_SCORE"):
        settings.greenlight_score = int(os.getenv("PITCHROOM_GREENLIGHT_SCORE"))

    return settings
