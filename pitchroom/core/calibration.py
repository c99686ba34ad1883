"""
Benchmark & Calibration Runner for PITCHROOM

Runs a fixed suite of seeds through the pipeline and the evaluator:
- One calibration seed, drawn from the gold standard library, whose score is
  checked against a known expected range
- The ordinary benchmark seeds, aggregated into suite statistics
- Gold standard marker and red flag checks on the calibration deck

Used for:
- Detecting evaluator drift after prompt or model changes
- Regression testing of the whole pipeline
"""

import logging
import random
import time
from dataclasses import replace
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..agents.invoker import AgentInvoker, CancellationToken
from ..agents.roles import EVALUATOR, RoleConfig
from ..models import (
    DIMENSION_NAMES,
    BenchmarkAggregate,
    BenchmarkSeed,
    CalibrationReport,
    CalibrationStatus,
    DimensionAggregate,
    DryrunReport,
    GateSignal,
    MarkerVerdict,
    PipelineRun,
    RedFlagVerdict,
    RunOptions,
    SeedResult,
)
from ..prompts.evaluator import CHECK_USER_TEMPLATE, build_gold_marker_prompt, build_red_flag_prompt
from .corpus import (
    ANCHOR_SEED,
    BENCHMARK_SEEDS,
    GOLD_STANDARD_LIBRARY,
    GOLD_STANDARD_MARKERS,
    red_flags_with_precedents,
)
from .errors import FatalRunError, ParseContractViolation
from .evals import QualityEvaluator, null_scorecard
from .gate import is_rejection_memo, scan_gate
from .structured import parse_structured

logger = logging.getLogger("pitchroom.calibration")

PipelineRunner = Callable[[str, RunOptions], Awaitable[PipelineRun]]
ProgressCallback = Callable[[int, int, str, str], None]

CHECK_FAILED = "Check failed"
WARN_BELOW = 10
WARN_ABOVE = 5


def calibration_status(observed: Optional[int], low: int, high: int) -> CalibrationStatus:
    """PASS inside [low, high]; WARN within 10 below or 5 above; FAIL otherwise."""
    if observed is None:
        return CalibrationStatus.FAIL
    if low <= observed <= high:
        return CalibrationStatus.PASS
    if low - WARN_BELOW <= observed <= high + WARN_ABOVE:
        return CalibrationStatus.WARN
    return CalibrationStatus.FAIL


def calibration_delta(observed: Optional[int], low: int, high: int) -> Optional[int]:
    if observed is None:
        return None
    if observed < low:
        return observed - low
    if observed > high:
        return observed - high
    return 0


# ============================================================================
# Marker checkers
# ============================================================================

class _MarkerEntry(BaseModel):
    id: str
    passed: Optional[bool] = Field(default=None, alias="pass")
    note: str = ""


class _MarkerResponse(BaseModel):
    markers: List[_MarkerEntry]


class _RedFlagEntry(BaseModel):
    id: str
    triggered: Optional[bool] = None
    note: str = ""


class _RedFlagResponse(BaseModel):
    red_flags: List[_RedFlagEntry] = Field(alias="redFlags")


def _checker_role(name: str, system_prompt: str) -> RoleConfig:
    # Checkers share the evaluator's routing and JSON output mode.
    return replace(EVALUATOR, name=name, system_prompt=system_prompt)


async def check_gold_markers(
    invoker: AgentInvoker,
    document: str,
    markers: Sequence[Dict[str, str]] = GOLD_STANDARD_MARKERS,
    cancel_token: Optional[CancellationToken] = None,
) -> List[MarkerVerdict]:
    """Ask the checker which gold standard markers the deck demonstrates.

    Unparseable checker output yields all-None verdicts rather than an error.
    """
    role = _checker_role("Calibration Checker", build_gold_marker_prompt(markers))
    response = await invoker.invoke(role, CHECK_USER_TEMPLATE.format(document=document), cancel_token=cancel_token)
    try:
        parsed = parse_structured(response, _MarkerResponse, "gold_markers")
    except ParseContractViolation as e:
        logger.error(f"[check_gold_markers] {e}")
        return [MarkerVerdict(id=m["id"], label=m["label"], note=CHECK_FAILED) for m in markers]

    by_id = {entry.id: entry for entry in parsed.markers}
    verdicts = []
    for marker in markers:
        entry = by_id.get(marker["id"])
        verdicts.append(MarkerVerdict(
            id=marker["id"],
            label=marker["label"],
            passed=entry.passed if entry else None,
            note=entry.note if entry else "Not reported",
        ))
    return verdicts


async def check_red_flags(
    invoker: AgentInvoker,
    document: str,
    markers: Optional[Sequence[Dict[str, str]]] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> List[RedFlagVerdict]:
    """Ask the checker which failure-library red flags the deck exhibits."""
    markers = markers if markers is not None else red_flags_with_precedents()
    role = _checker_role("Red Flag Checker", build_red_flag_prompt(markers))
    response = await invoker.invoke(role, CHECK_USER_TEMPLATE.format(document=document), cancel_token=cancel_token)
    try:
        parsed = parse_structured(response, _RedFlagResponse, "red_flags")
    except ParseContractViolation as e:
        logger.error(f"[check_red_flags] {e}")
        return [RedFlagVerdict(id=m["id"], label=m["label"], note=CHECK_FAILED) for m in markers]

    by_id = {entry.id: entry for entry in parsed.red_flags}
    verdicts = []
    for marker in markers:
        entry = by_id.get(marker["id"])
        verdicts.append(RedFlagVerdict(
            id=marker["id"],
            label=marker["label"],
            triggered=entry.triggered if entry else None,
            note=entry.note if entry else "Not reported",
        ))
    return verdicts


# ============================================================================
# Runner
# ============================================================================

class CalibrationRunner:
    """
    Runs the benchmark suite and builds the dryrun report.

    Seeds run one at a time. A fatal error or unparseable score fails only
    that seed; cancellation aborts the suite.
    """

    def __init__(
        self,
        evaluator: QualityEvaluator,
        invoker: Optional[AgentInvoker] = None,
        benchmark_seeds: Optional[Sequence[BenchmarkSeed]] = None,
        gold_library: Optional[Sequence[BenchmarkSeed]] = None,
        rng: Optional[random.Random] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        self.evaluator = evaluator
        self.invoker = invoker or evaluator.invoker
        self.benchmark_seeds = self._with_anchor(benchmark_seeds or BENCHMARK_SEEDS)
        self.gold_library = list(gold_library or GOLD_STANDARD_LIBRARY)
        self.rng = rng or random.Random()
        self.cancel_token = cancel_token

    @staticmethod
    def _with_anchor(seeds: Sequence[BenchmarkSeed]) -> List[BenchmarkSeed]:
        seeds = list(seeds)
        if not any(seed.id == ANCHOR_SEED.id for seed in seeds):
            seeds.insert(0, ANCHOR_SEED)
        return seeds

    def pick_calibration_seed(self) -> BenchmarkSeed:
        return self.rng.choice(self.gold_library)

    async def run_dryrun(
        self,
        pipeline_runner: PipelineRunner,
        progress_callback: Optional[ProgressCallback] = None,
        skip_seed_ids: Iterable[str] = (),
        previous_results: Iterable[SeedResult] = (),
        on_seed_complete: Optional[Callable[[SeedResult], None]] = None,
    ) -> DryrunReport:
        """
        Run the calibration seed and every benchmark seed.

        Args:
            pipeline_runner: Coroutine function (seed_text, options) -> PipelineRun
            progress_callback: Called with (index, total, seed_name, status)
            skip_seed_ids: Seeds already completed in an earlier, interrupted dryrun
            previous_results: Results for the skipped seeds, carried into the report
            on_seed_complete: Called with each new SeedResult, for checkpointing

        Returns:
            DryrunReport with per-seed results, aggregate and calibration report
        """
        skip = set(skip_seed_ids)
        results: List[SeedResult] = list(previous_results)

        previous_calibration = next((r.seed for r in results if r.seed.is_calibration), None)
        calibration_seed = previous_calibration or self.pick_calibration_seed()
        seeds = [calibration_seed] + self.benchmark_seeds
        total = len(seeds)
        logger.info(f"[run_dryrun] {total} seeds, calibration: {calibration_seed.name}, skipping {len(skip)}")

        for index, seed in enumerate(seeds):
            if seed.id in skip:
                continue
            if progress_callback:
                progress_callback(index, total, seed.name, "running")

            result = await self._run_seed(seed, pipeline_runner)
            results.append(result)
            logger.info(f"[run_dryrun] Seed {index + 1}/{total} '{seed.name}': {result.status}")

            if progress_callback:
                progress_callback(index, total, seed.name, result.status)
            if on_seed_complete:
                on_seed_complete(result)

        return DryrunReport(
            results=results,
            aggregate=self.aggregate(results),
            calibration=self.build_calibration_report(results),
        )

    async def _run_seed(self, seed: BenchmarkSeed, pipeline_runner: PipelineRunner) -> SeedResult:
        start_time = time.time()
        try:
            run = await pipeline_runner(seed.seed, RunOptions(platform=seed.platform, delivery_year=seed.year))
            document = run.final_document
            gate = run.gate
            if gate == GateSignal.NONE:
                gate = scan_gate(document).signal

            if run.is_rejected or is_rejection_memo(document):
                return SeedResult(
                    seed=seed,
                    status="rejected",
                    final_document=document,
                    scorecard=null_scorecard(document),
                    gate=gate,
                    duration_ms=int((time.time() - start_time) * 1000),
                )

            scorecard = await self.evaluator.score(document, seed.seed, cancel_token=self.cancel_token)
            result = SeedResult(seed=seed, status="done", final_document=document, scorecard=scorecard)
            if seed.is_calibration:
                result.markers = await check_gold_markers(
                    self.invoker, document, cancel_token=self.cancel_token,
                )
                result.red_flags = await check_red_flags(
                    self.invoker, document, cancel_token=self.cancel_token,
                )
        except (FatalRunError, ParseContractViolation) as e:
            logger.error(f"[_run_seed] Seed '{seed.name}' failed: {e}")
            return SeedResult(
                seed=seed,
                status="failed",
                error=str(e),
                duration_ms=int((time.time() - start_time) * 1000),
            )

        result.duration_ms = int((time.time() - start_time) * 1000)
        return result

    @staticmethod
    def aggregate(results: Iterable[SeedResult]) -> BenchmarkAggregate:
        """Suite statistics over the non-calibration seeds."""
        ordinary = [r for r in results if not r.seed.is_calibration]
        scored = [r for r in ordinary if r.status == "done" and r.scorecard and not r.scorecard.is_null]

        dimensions = []
        for name in DIMENSION_NAMES:
            values = [r.scorecard.dimension(name).score for r in scored]
            if values:
                dimensions.append(DimensionAggregate(
                    name=name,
                    avg=round(sum(values) / len(values), 1),
                    min=min(values),
                    max=max(values),
                ))
            else:
                dimensions.append(DimensionAggregate(name=name))

        overall_scores = [r.scorecard.overall for r in scored]
        return BenchmarkAggregate(
            overall=round(sum(overall_scores) / len(overall_scores), 1) if overall_scores else None,
            dimensions=dimensions,
            recommendations=[rec for r in scored for rec in r.scorecard.recommendations],
            total=len(ordinary),
            scored=len(scored),
            rejected=sum(1 for r in ordinary if r.status == "rejected"),
            failed=sum(1 for r in ordinary if r.status == "failed"),
        )

    @staticmethod
    def build_calibration_report(results: Iterable[SeedResult]) -> Optional[CalibrationReport]:
        result = next((r for r in results if r.seed.is_calibration), None)
        if result is None or result.seed.expected_range is None:
            return None

        seed = result.seed
        low, high = seed.expected_range
        observed = None
        if result.status == "done" and result.scorecard is not None:
            observed = result.scorecard.overall

        markers = []
        for verdict in result.markers:
            expected = seed.markers.get(verdict.id)
            agrees = None
            if verdict.passed is not None and expected is not None:
                agrees = verdict.passed == expected
            markers.append(verdict.model_copy(update={"expected": expected, "agrees": agrees}))

        status = calibration_status(observed, low, high)
        if status != CalibrationStatus.PASS:
            logger.warning(f"[calibration] {seed.name}: observed {observed}, expected {low}-{high} -> {status.value}")

        return CalibrationReport(
            seed_id=seed.id,
            seed_name=seed.name,
            observed=observed,
            expected_range=seed.expected_range,
            status=status,
            delta=calibration_delta(observed, low, high),
            markers=markers,
            red_flags=list(result.red_flags),
            agreements=sum(1 for m in markers if m.agrees is True),
            disagreements=sum(1 for m in markers if m.agrees is False),
            red_flags_triggered=sum(1 for f in result.red_flags if f.triggered is True),
            red_flags_total=len(result.red_flags),
        )
