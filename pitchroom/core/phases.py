"""
Phase definitions for the two pipeline modes.
"""

from dataclasses import dataclass
from typing import Tuple

from ..agents.roles import (
    ADVERSARY,
    CHIEF_SCIENTIST,
    COMMISSIONING_EDITOR,
    DISCOVERY_SCOUT,
    FIELD_PRODUCER,
    MARKET_ANALYST,
    SHOWRUNNER,
    STORY_PRODUCER,
    RoleConfig,
)
from ..prompts import tasks


@dataclass(frozen=True)
class AgentSlot:
    """One invocation of a role within a phase."""
    role: RoleConfig
    label: str
    task: str


@dataclass(frozen=True)
class Phase:
    """An ordered group of slots.

    A ``revision_loop`` phase is optional: it repeats its slots up to
    ``RunOptions.max_revisions`` times while the latest review scores below
    greenlight, and is skipped entirely otherwise.
    """
    ordinal: int
    name: str
    slots: Tuple[AgentSlot, ...]
    revision_loop: bool = False


GENERATION_PHASES: Tuple[Phase, ...] = (
    Phase(1, "Discovery", (
        AgentSlot(DISCOVERY_SCOUT, "Discovery Brief", tasks.DISCOVERY_TASK),
    )),
    Phase(2, "Market Strategy", (
        AgentSlot(MARKET_ANALYST, "Market Mandate", tasks.MARKET_TASK),
    )),
    Phase(3, "Science & Feasibility", (
        AgentSlot(CHIEF_SCIENTIST, "Animal Fact Sheet", tasks.SCIENCE_TASK),
        AgentSlot(FIELD_PRODUCER, "Logistics & Feasibility", tasks.LOGISTICS_TASK),
    )),
    Phase(4, "Creative Synthesis", (
        AgentSlot(STORY_PRODUCER, "Draft V1", tasks.DRAFT_TASK),
    )),
    Phase(5, "Critique", (
        AgentSlot(COMMISSIONING_EDITOR, "Murder Board", tasks.MURDER_BOARD_TASK),
        AgentSlot(SHOWRUNNER, "Revision Directives", tasks.DIRECTIVES_TASK),
        AgentSlot(STORY_PRODUCER, "Draft V2", tasks.REVISION_TASK),
        AgentSlot(COMMISSIONING_EDITOR, "Greenlight Review", tasks.GREENLIGHT_REVIEW_TASK),
    )),
    Phase(6, "Quality Revision", (
        AgentSlot(SHOWRUNNER, "Targeted Directives", tasks.TARGETED_DIRECTIVES_TASK),
        AgentSlot(STORY_PRODUCER, "Revised Draft", tasks.REDRAFT_TASK),
        AgentSlot(COMMISSIONING_EDITOR, "Revision Review", tasks.RE_REVIEW_TASK),
    ), revision_loop=True),
    Phase(7, "Final Synthesis", (
        AgentSlot(ADVERSARY, "Gatekeeper Audit", tasks.GATEKEEPER_TASK),
        AgentSlot(SHOWRUNNER, "Master Pitch Deck", tasks.FINAL_DECK_TASK),
    )),
)

# Assessment enters directly at critique of the submitted material.
ASSESSMENT_PHASES: Tuple[Phase, ...] = (
    Phase(1, "Critique", (
        AgentSlot(MARKET_ANALYST, "Market Assessment", tasks.ASSESS_MARKET_TASK),
        AgentSlot(CHIEF_SCIENTIST, "Science Assessment", tasks.ASSESS_SCIENCE_TASK),
        AgentSlot(FIELD_PRODUCER, "Logistics Assessment", tasks.ASSESS_LOGISTICS_TASK),
        AgentSlot(COMMISSIONING_EDITOR, "Murder Board", tasks.ASSESS_CRITIQUE_TASK),
    )),
    Phase(2, "Optimisation", (
        AgentSlot(SHOWRUNNER, "Optimisation Plan", tasks.OPTIMISATION_PLAN_TASK),
        AgentSlot(STORY_PRODUCER, "Optimised Script", tasks.OPTIMISED_SCRIPT_TASK),
        AgentSlot(COMMISSIONING_EDITOR, "Final Review", tasks.FINAL_REVIEW_TASK),
    )),
    Phase(3, "Final Synthesis", (
        AgentSlot(SHOWRUNNER, "Master Pitch Deck", tasks.ASSESS_FINAL_DECK_TASK),
    )),
)
