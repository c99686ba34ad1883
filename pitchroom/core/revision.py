"""
Revision session for a finished pitch deck.

Owns the live document and a LIFO stack of prior versions. Every accepted
change (patch or rerun) pushes the previous document first, so ``undo``
always restores exactly what was there before.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..agents.invoker import AgentInvoker, CancellationToken
from ..agents.roles import CONSULTANT, RoleConfig
from ..models import (
    PatchResult,
    PipelineMode,
    PipelineRun,
    RewriteProposal,
    RunOptions,
    RunRecord,
    Scorecard,
    TurnClassification,
)
from .errors import ParseContractViolation
from .evals import QualityEvaluator
from .patching import apply_patch_strategies
from .sequencer import PhaseSequencer
from .turns import classify_turn

logger = logging.getLogger("pitchroom.revision")

NOTHING_TO_UNDO = "Nothing to undo."


@dataclass
class RerunOutcome:
    document: str
    run: PipelineRun
    rejected: bool = False


@dataclass
class UndoResult:
    restored: bool
    message: str = ""


def directive_from_scorecard(scorecard: Scorecard) -> str:
    """Turn a scorecard's recommendations into a rerun directive."""
    directive = "Apply all identified improvements from the quality evaluation to strengthen the pitch."
    if scorecard.recommendations:
        directive += " Specific recommendations: " + "; ".join(scorecard.recommendations)
    return directive


class RevisionSession:
    """
    Conversational revision of one live document.

    ``converse`` asks the consultant role; the caller decides whether to act
    on the returned classification with ``apply_patch`` or ``apply_rerun``.
    """

    def __init__(
        self,
        live_document: str,
        seed_input: str,
        sequencer: PhaseSequencer,
        mode: PipelineMode = PipelineMode.GENERATION,
        options: Optional[RunOptions] = None,
        invoker: Optional[AgentInvoker] = None,
        history_store=None,
        cancel_token: Optional[CancellationToken] = None,
        consultant: RoleConfig = CONSULTANT,
    ):
        self.live_document = live_document
        self.seed_input = seed_input
        self.sequencer = sequencer
        self.mode = mode
        self.options = options or RunOptions()
        self.invoker = invoker or sequencer.invoker
        self.history_store = history_store
        self.cancel_token = cancel_token or CancellationToken()
        self.consultant = consultant

        self.revision_history: List[str] = []
        self.conversation: List[Dict[str, str]] = []
        self.scorecard: Optional[Scorecard] = None

    def _push(self) -> None:
        self.revision_history.append(self.live_document)

    def _save(self) -> None:
        if self.history_store is None:
            return
        self.history_store.save(RunRecord(
            seed_input=self.seed_input,
            final_document=self.live_document,
            mode=self.mode,
        ))

    def apply_patch(self, proposal: RewriteProposal) -> PatchResult:
        """Apply a rewrite proposal to the live document."""
        self._push()
        result = apply_patch_strategies(self.live_document, proposal)
        self.live_document = result.document
        logger.info(
            f"[apply_patch] Section '{proposal.section or '?'}' patched with {result.strategy.value}; "
            f"history depth {len(self.revision_history)}"
        )
        self._save()
        return result

    async def apply_rerun(self, directive: str) -> RerunOutcome:
        """Re-run the whole pipeline with a creative directive.

        The session is only touched after the run returns, so FatalRunError
        or PipelineCancelled leave document and history as they were. The
        consultant conversation restarts on the new document.
        """
        logger.info(f"[apply_rerun] Rerunning {self.mode.value} pipeline with directive: {directive[:80]!r}")
        run = await self.sequencer.run(
            self.seed_input,
            mode=self.mode,
            directive=directive,
            options=self.options,
            cancel_token=self.cancel_token,
        )

        self._push()
        self.live_document = run.final_document
        self.conversation.clear()
        if run.is_rejected:
            logger.warning(
                f"[apply_rerun] Rerun was gate-rejected by {run.rejected_by}; "
                "rejection memo is now the live document (undo restores the previous deck)"
            )
            return RerunOutcome(document=run.final_document, run=run, rejected=True)

        self._save()
        return RerunOutcome(document=run.final_document, run=run)

    def undo(self) -> UndoResult:
        if not self.revision_history:
            return UndoResult(restored=False, message=NOTHING_TO_UNDO)
        self.live_document = self.revision_history.pop()
        logger.info(f"[undo] Restored previous version; history depth {len(self.revision_history)}")
        return UndoResult(restored=True, message="Reverted to previous version.")

    async def converse(self, user_message: str) -> TurnClassification:
        """Send a producer message to the consultant and classify the reply."""
        context = (
            f"### Current Pitch Deck\n{self.live_document}\n\n"
            f"### Original Input\n{self.seed_input}\n\n"
            f"### Producer Request\n{user_message}"
        )
        reply = await self.invoker.invoke(
            self.consultant,
            context,
            history=list(self.conversation),
            cancel_token=self.cancel_token,
        )
        self.conversation.append({"role": "user", "content": user_message})
        self.conversation.append({"role": "assistant", "content": reply})

        turn = classify_turn(reply)
        logger.info(f"[converse] Consultant replied with a {turn.kind.value} turn")
        return turn

    async def rescore(self, evaluator: QualityEvaluator) -> Scorecard:
        """Score the live document.

        Raises:
            ParseContractViolation: the evaluator reply was unparseable; the
                previous scorecard is kept.
        """
        try:
            scorecard = await evaluator.score_or_null(
                self.live_document,
                self.seed_input,
                cancel_token=self.cancel_token,
            )
        except ParseContractViolation as e:
            logger.error(f"[rescore] Scoring failed, keeping previous scorecard: {e}")
            raise
        self.scorecard = scorecard
        return scorecard

    def cancel(self) -> None:
        self.cancel_token.cancel()
