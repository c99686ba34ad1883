"""
Phase Sequencer for PITCHROOM.

Runs the phases of a mode in ordinal order, one slot at a time. Every output
is passed through the gate scan; the first rejection ends the run and becomes
its final document verbatim. Later phases never see it.
"""

import logging
import time
from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

from ..agents.invoker import AgentInvoker, CancellationToken
from ..config import PipelineSettings
from ..models import (
    AgentOutput,
    PhaseResult,
    PipelineMode,
    PipelineRun,
    RunOptions,
    RunState,
)
from ..prompts.tasks import GENRE_LABELS, GENRE_LOCK_TEMPLATE
from .documents import extract_score, sanitize_final_output
from .errors import FatalRunError
from .gate import scan_gate
from .phases import ASSESSMENT_PHASES, GENERATION_PHASES, AgentSlot, Phase

logger = logging.getLogger("pitchroom.sequencer")


class PipelineObserver:
    """Advisory progress hooks. Default implementations do nothing."""

    def on_phase_start(self, phase: Phase) -> None:
        pass

    def on_agent_thinking(self, phase: Phase, slot: AgentSlot) -> None:
        pass

    def on_agent_output(self, phase: Phase, output: AgentOutput) -> None:
        pass

    def on_phase_complete(self, phase: Phase, result: PhaseResult) -> None:
        pass


def build_context(slot: AgentSlot, run: PipelineRun, char_limit: int = 0) -> str:
    """Assemble the user message for ``slot`` from everything produced so far."""
    input_heading = "Submitted Material" if run.mode == PipelineMode.ASSESSMENT else "Seed Idea"
    parts = [slot.task, f"### {input_heading}\n{run.input}"]

    prior = run.outputs
    if prior:
        parts.append("### Team Inputs So Far")
        phase_names = {phase.ordinal: phase.name for phase in run.phases}
        for output in prior:
            text = output.text
            if char_limit and len(text) > char_limit:
                text = text[:char_limit] + "\n[...truncated]"
            phase_name = phase_names.get(output.phase_ordinal, str(output.phase_ordinal))
            parts.append(f"#### {output.role_name} ({phase_name})\n{text}")

    notes = []
    if run.options.platform:
        notes.append(f"Target platform: {run.options.platform}. Adapt tone, format and visual language to it.")
    if run.options.delivery_year:
        notes.append(f"Target delivery year: {run.options.delivery_year}. Position against that year's market.")
    if notes:
        parts.append("--- PRODUCTION NOTES ---\n" + "\n".join(notes))

    if run.options.genre:
        genre = GENRE_LABELS.get(run.options.genre, run.options.genre)
        parts.append("--- GENRE LOCK ---\n" + GENRE_LOCK_TEMPLATE.format(genre=genre))

    if run.directive:
        parts.append(
            "--- CREATIVE DIRECTIVE (MANDATORY) ---\n"
            f"{run.directive}\n"
            "This directive overrides any conflicting guidance above. ALL roles must incorporate it."
        )

    return "\n\n".join(parts)


class PhaseSequencer:
    """Runs the ordered phase list for a mode against an AgentInvoker."""

    def __init__(
        self,
        invoker: AgentInvoker,
        settings: Optional[PipelineSettings] = None,
        phases: Optional[Dict[PipelineMode, Sequence[Phase]]] = None,
        observer: Optional[PipelineObserver] = None,
    ):
        self.invoker = invoker
        self.settings = settings or PipelineSettings()
        self.observer = observer or PipelineObserver()
        source = phases or {
            PipelineMode.GENERATION: GENERATION_PHASES,
            PipelineMode.ASSESSMENT: ASSESSMENT_PHASES,
        }
        self.phases: Dict[PipelineMode, Tuple[Phase, ...]] = {
            mode: self._ordered(mode, mode_phases) for mode, mode_phases in source.items()
        }

    @staticmethod
    def _ordered(mode: PipelineMode, phases: Sequence[Phase]) -> Tuple[Phase, ...]:
        ordinals = [phase.ordinal for phase in phases]
        if len(set(ordinals)) != len(ordinals):
            raise ValueError(f"Duplicate phase ordinals for {mode.value}: {ordinals}")
        if any(not phase.slots for phase in phases):
            raise ValueError(f"Every {mode.value} phase needs at least one agent slot")
        return tuple(sorted(phases, key=lambda phase: phase.ordinal))

    def _notify(self, observer: PipelineObserver, hook: str, *args) -> None:
        try:
            getattr(observer, hook)(*args)
        except Exception:
            logger.exception(f"[_notify] Observer hook {hook} raised; continuing")

    async def _run_slot(
        self,
        run: PipelineRun,
        phase: Phase,
        slot: AgentSlot,
        result: PhaseResult,
        observer: PipelineObserver,
        cancel_token: Optional[CancellationToken],
    ) -> bool:
        """Invoke one slot and record its output. Returns True on a gate halt."""
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        self._notify(observer, "on_agent_thinking", phase, slot)

        context = build_context(slot, run, self.settings.context_char_limit)
        start_time = time.time()
        text = await self.invoker.invoke(slot.role, context, cancel_token=cancel_token)
        scan = scan_gate(text, anchored=self.settings.gate_anchored)

        output = AgentOutput(
            role_id=slot.role.id,
            role_name=slot.role.name,
            phase_ordinal=phase.ordinal,
            text=text,
            gate=scan.signal,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        result.outputs.append(output)
        self._notify(observer, "on_agent_output", phase, output)

        if not scan.rejected:
            return False

        run.state = RunState.GATED_REJECTED
        run.gate = scan.signal
        run.rejected_by = slot.role.id
        run.final_document = text
        run.finished_at = datetime.utcnow()
        logger.warning(
            f"[run] Gate halt by {slot.role.id} in phase {phase.ordinal} "
            f"({scan.signal.value}, sentinel '{scan.sentinel}')"
        )
        return True

    def _below_greenlight(self, run: PipelineRun) -> bool:
        score = extract_score(run.outputs[-1].text) if run.outputs else None
        return score is None or score < self.settings.greenlight_score

    async def _run_revision_loop(
        self,
        run: PipelineRun,
        phase: Phase,
        observer: PipelineObserver,
        cancel_token: Optional[CancellationToken],
    ) -> bool:
        """Repeat ``phase`` while the latest review is below greenlight.

        Returns True on a gate halt. The phase is skipped (no PhaseResult)
        when revisions are off or the draft is already greenlit.
        """
        max_rounds = run.options.max_revisions
        if max_rounds <= 0 or not self._below_greenlight(run):
            logger.info(f"[run] Skipping phase {phase.ordinal} ({phase.name}); max_revisions={max_rounds}")
            return False

        result = PhaseResult(ordinal=phase.ordinal, name=phase.name)
        run.phases.append(result)
        self._notify(observer, "on_phase_start", phase)

        for round_number in range(1, max_rounds + 1):
            logger.info(f"[run] Phase {phase.ordinal}: {phase.name} round {round_number}/{max_rounds}")
            for slot in phase.slots:
                if await self._run_slot(run, phase, slot, result, observer, cancel_token):
                    return True
            if not self._below_greenlight(run):
                logger.info(f"[run] Greenlight reached after {round_number} revision round(s)")
                break

        self._notify(observer, "on_phase_complete", phase, result)
        return False

    async def run(
        self,
        input_text: str,
        mode: PipelineMode = PipelineMode.GENERATION,
        directive: Optional[str] = None,
        options: Optional[RunOptions] = None,
        observer: Optional[PipelineObserver] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PipelineRun:
        """Run every phase of ``mode`` and return the finished PipelineRun.

        Raises:
            FatalRunError: an invocation failed for good; ``error.run`` holds
                the partial run in the ``failed`` state.
            PipelineCancelled: the token fired.
        """
        if mode not in self.phases:
            raise ValueError(f"No phases configured for mode {mode.value}")
        if options is None:
            options = RunOptions(platform=self.settings.default_platform)
        observer = observer or self.observer

        run = PipelineRun(input=input_text, mode=mode, directive=directive, options=options)
        logger.info(f"[run] Starting {mode.value} run {run.id} (directive: {bool(directive)})")

        try:
            for phase in self.phases[mode]:
                if phase.revision_loop:
                    if await self._run_revision_loop(run, phase, observer, cancel_token):
                        return run
                    continue

                result = PhaseResult(ordinal=phase.ordinal, name=phase.name)
                run.phases.append(result)
                self._notify(observer, "on_phase_start", phase)
                logger.info(f"[run] Phase {phase.ordinal}: {phase.name}")

                for slot in phase.slots:
                    if await self._run_slot(run, phase, slot, result, observer, cancel_token):
                        return run

                self._notify(observer, "on_phase_complete", phase, result)

        except FatalRunError as e:
            run.state = RunState.FAILED
            run.error = str(e)
            run.finished_at = datetime.utcnow()
            e.run = run
            logger.error(f"[run] Run {run.id} failed: {e}")
            raise

        run.final_document = sanitize_final_output(run.outputs[-1].text)
        run.state = RunState.COMPLETED
        run.finished_at = datetime.utcnow()
        logger.info(f"[run] Run {run.id} completed with {len(run.outputs)} outputs")
        return run
