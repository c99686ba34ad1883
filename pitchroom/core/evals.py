"""
Quality Evaluator for PITCHROOM - LLM-as-Judge Scoring

Scores a finished pitch deck on the fixed eight-dimension rubric:
- The evaluator role is grounded with a table of proven hits and a table of
  known failures, both embedded in its instructions
- Output must be bare JSON; one enclosing code fence is tolerated
- Anything that does not parse into exactly eight canonical dimensions raises
  ParseContractViolation; no score is ever guessed

Rejection memos are never sent to the evaluator: callers substitute
``null_scorecard`` (``score_or_null`` does this for them).
"""

import logging
from typing import Any, Dict, List, Optional

from ..agents.invoker import AgentInvoker, CancellationToken
from ..agents.roles import EVALUATOR, RoleConfig
from ..config import PipelineSettings
from ..models import DIMENSION_NAMES, DimensionScore, Scorecard
from ..prompts.evaluator import EVALUATOR_USER_TEMPLATE
from .errors import ParseContractViolation
from .gate import is_rejection_memo, rejection_type
from .structured import parse_json_object, validate_structured

logger = logging.getLogger("pitchroom.evals")

EVALUATOR_CONTRACT = "evaluator"


def null_scorecard(document: str) -> Scorecard:
    """All-null scorecard for a rejection memo."""
    kind = rejection_type(document)
    return Scorecard(
        dimensions=[
            DimensionScore(name=name, score=None, rationale=f"{kind} rejection: not evaluated")
            for name in DIMENSION_NAMES
        ],
        overall=None,
        summary=(
            f"Pipeline halted: {kind} rejection. The premise was judged fundamentally "
            "invalid and no pitch deck was produced."
        ),
        recommendations=[
            f"Revisit the core premise; the {kind.lower()} viability gate rejected this concept.",
            "Adjust the seed idea to address the specific issues raised in the rejection memo.",
        ],
        rejected=True,
        rejection_type=kind,
    )


def _canonical_dimensions(raw: Any, raw_text: str) -> List[Dict[str, Any]]:
    """Map evaluator dimensions onto the canonical names and order."""
    if not isinstance(raw, list):
        raise ParseContractViolation(EVALUATOR_CONTRACT, raw_text, "'dimensions' must be a list")
    if len(raw) != len(DIMENSION_NAMES):
        raise ParseContractViolation(
            EVALUATOR_CONTRACT, raw_text,
            f"expected {len(DIMENSION_NAMES)} dimensions, got {len(raw)}",
        )

    lookup = {name.lower(): name for name in DIMENSION_NAMES}
    by_name: Dict[str, Dict[str, Any]] = {}
    for item in raw:
        if not isinstance(item, dict):
            raise ParseContractViolation(EVALUATOR_CONTRACT, raw_text, "dimension entries must be objects")
        name = lookup.get(str(item.get("name", "")).strip().lower())
        if name is None:
            raise ParseContractViolation(EVALUATOR_CONTRACT, raw_text, f"unknown dimension {item.get('name')!r}")
        if name in by_name:
            raise ParseContractViolation(EVALUATOR_CONTRACT, raw_text, f"duplicate dimension {name!r}")
        by_name[name] = {**item, "name": name}

    return [by_name[name] for name in DIMENSION_NAMES]


def parse_scorecard(text: str) -> Scorecard:
    """Strictly parse an evaluator response into a Scorecard."""
    data = parse_json_object(text, EVALUATOR_CONTRACT)
    data["dimensions"] = _canonical_dimensions(data.get("dimensions"), text)
    data.pop("rejected", None)
    data.pop("rejection_type", None)
    scorecard = validate_structured(data, Scorecard, EVALUATOR_CONTRACT, text)
    if scorecard.is_null:
        raise ParseContractViolation(EVALUATOR_CONTRACT, text, "scores must not be null")
    return scorecard


class QualityEvaluator:
    """
    Rubric-bound scoring agent.

    Uses the evaluator role through the AgentInvoker, so it inherits the
    invoker's timeout, retry and cancellation behaviour.
    """

    def __init__(
        self,
        invoker: AgentInvoker,
        settings: Optional[PipelineSettings] = None,
        role: RoleConfig = EVALUATOR,
    ):
        self.invoker = invoker
        self.settings = settings or PipelineSettings()
        self.role = role

    def _build_user_prompt(self, document: str, original_input: str) -> str:
        limit = self.settings.evaluator_input_chars
        excerpt = original_input[:limit] if limit else original_input
        return EVALUATOR_USER_TEMPLATE.format(original_input=excerpt, document=document)

    async def score(
        self,
        document: str,
        original_input: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Scorecard:
        """Score ``document``. Raises ParseContractViolation on unparseable output."""
        response = await self.invoker.invoke(
            self.role,
            self._build_user_prompt(document, original_input),
            cancel_token=cancel_token,
        )
        try:
            scorecard = parse_scorecard(response)
        except ParseContractViolation:
            logger.error(f"[score] Evaluator response could not be parsed: {response[:200]!r}")
            raise
        logger.info(f"[score] Overall {scorecard.overall}/100")
        return scorecard

    async def score_or_null(
        self,
        document: str,
        original_input: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> Scorecard:
        """Score a document, substituting the null scorecard for rejection memos."""
        if is_rejection_memo(document):
            logger.info("[score_or_null] Document is a rejection memo; skipping evaluator")
            return null_scorecard(document)
        return await self.score(document, original_input, cancel_token=cancel_token)
