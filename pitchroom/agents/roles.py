"""
Role definitions for the pitch development team.
A role is data: an id, a display name, its instructions and the tool flags it may use.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..prompts.evaluator import EVALUATOR_SYSTEM_PROMPT
from ..prompts.personas import (
    ADVERSARY_SYSTEM_PROMPT,
    CHIEF_SCIENTIST_SYSTEM_PROMPT,
    COMMISSIONING_EDITOR_SYSTEM_PROMPT,
    DISCOVERY_SCOUT_SYSTEM_PROMPT,
    FIELD_PRODUCER_SYSTEM_PROMPT,
    MARKET_ANALYST_SYSTEM_PROMPT,
    REFINEMENT_CONSULTANT_SYSTEM_PROMPT,
    SHOWRUNNER_SYSTEM_PROMPT,
    STORY_PRODUCER_SYSTEM_PROMPT,
)
from .base import GOOGLE_SEARCH


@dataclass(frozen=True)
class RoleConfig:
    """Instructions and capabilities for one agent role."""
    id: str
    name: str
    system_prompt: str
    tools: Tuple[str, ...] = field(default_factory=tuple)
    json_output: bool = False


DISCOVERY_SCOUT = RoleConfig(
    id="discovery_scout",
    name="Discovery Scout",
    system_prompt=DISCOVERY_SCOUT_SYSTEM_PROMPT,
    tools=(GOOGLE_SEARCH,),
)

MARKET_ANALYST = RoleConfig(
    id="market_analyst",
    name="Market Analyst",
    system_prompt=MARKET_ANALYST_SYSTEM_PROMPT,
    tools=(GOOGLE_SEARCH,),
)

CHIEF_SCIENTIST = RoleConfig(
    id="chief_scientist",
    name="Chief Scientist",
    system_prompt=CHIEF_SCIENTIST_SYSTEM_PROMPT,
    tools=(GOOGLE_SEARCH,),
)

FIELD_PRODUCER = RoleConfig(
    id="field_producer",
    name="Field Producer",
    system_prompt=FIELD_PRODUCER_SYSTEM_PROMPT,
)

STORY_PRODUCER = RoleConfig(
    id="story_producer",
    name="Story Producer",
    system_prompt=STORY_PRODUCER_SYSTEM_PROMPT,
)

COMMISSIONING_EDITOR = RoleConfig(
    id="commissioning_editor",
    name="Commissioning Editor",
    system_prompt=COMMISSIONING_EDITOR_SYSTEM_PROMPT,
)

SHOWRUNNER = RoleConfig(
    id="showrunner",
    name="Showrunner",
    system_prompt=SHOWRUNNER_SYSTEM_PROMPT,
)

ADVERSARY = RoleConfig(
    id="adversary",
    name="Gatekeeper",
    system_prompt=ADVERSARY_SYSTEM_PROMPT,
    tools=(GOOGLE_SEARCH,),
)

EVALUATOR = RoleConfig(
    id="evaluator",
    name="Quality Evaluator",
    system_prompt=EVALUATOR_SYSTEM_PROMPT,
    json_output=True,
)

CONSULTANT = RoleConfig(
    id="consultant",
    name="Refinement Consultant",
    system_prompt=REFINEMENT_CONSULTANT_SYSTEM_PROMPT,
)


ROLES: Dict[str, RoleConfig] = {
    role.id: role
    for role in (
        DISCOVERY_SCOUT,
        MARKET_ANALYST,
        CHIEF_SCIENTIST,
        FIELD_PRODUCER,
        STORY_PRODUCER,
        COMMISSIONING_EDITOR,
        SHOWRUNNER,
        ADVERSARY,
        EVALUATOR,
        CONSULTANT,
    )
}

