"""
PITCHROOM - Main Entry Point
Natural history pitch deck generation, revision and benchmarking.
"""

import asyncio
import logging
import signal
from typing import Optional

import typer
from dotenv import load_dotenv

from .agents import AgentInvoker, CancellationToken, RetryPolicy, create_role_clients
from .config import (
    ROLE_IDS,
    LLMConfiguration,
    PipelineSettings,
    create_default_config_from_env,
    load_pipeline_settings,
)
from .core.calibration import CalibrationRunner, ProgressCallback
from .core.errors import FatalRunError, ParseContractViolation, PipelineCancelled
from .core.evals import QualityEvaluator
from .core.revision import RevisionSession
from .core.sequencer import PhaseSequencer, PipelineObserver
from .models import DryrunReport, PipelineMode, PipelineRun, RunOptions, RunRecord, RunState, Scorecard
from .services import InMemoryRunHistory, RunHistoryStore

logger = logging.getLogger("pitchroom")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: int = logging.INFO) -> None:
    """Install the stream handler on the package logger once."""
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


class PitchroomOrchestrator:
    """Wires the invoker, sequencer, evaluator and run history together."""

    def __init__(
        self,
        config: LLMConfiguration,
        settings: Optional[PipelineSettings] = None,
        history_store: Optional[RunHistoryStore] = None,
        invoker: Optional[AgentInvoker] = None,
    ):
        self.config = config
        self.settings = settings or PipelineSettings()
        self.history_store = history_store or InMemoryRunHistory()
        self.cancel_token = CancellationToken()

        if invoker is None:
            invoker = AgentInvoker(
                role_clients=create_role_clients(config, ROLE_IDS),
                retry_policy=RetryPolicy.from_retries(config.max_retries, config.retry_base_delay),
                timeout_seconds=config.timeout_seconds,
                temperature=config.temperature,
            )
        self.invoker = invoker
        self.sequencer = PhaseSequencer(self.invoker, self.settings)
        self.evaluator = QualityEvaluator(self.invoker, self.settings)

    async def run_pipeline(
        self,
        input_text: str,
        mode: PipelineMode = PipelineMode.GENERATION,
        directive: Optional[str] = None,
        options: Optional[RunOptions] = None,
        observer: Optional[PipelineObserver] = None,
    ) -> PipelineRun:
        """Run the pipeline; completed runs are saved to the history store."""
        self.cancel_token.reset()
        run = await self.sequencer.run(
            input_text,
            mode=mode,
            directive=directive,
            options=options,
            observer=observer,
            cancel_token=self.cancel_token,
        )
        if run.state == RunState.COMPLETED:
            self.history_store.save(RunRecord(
                id=run.id,
                seed_input=run.input,
                final_document=run.final_document,
                mode=run.mode,
            ))
        return run

    async def score(self, run: PipelineRun) -> Scorecard:
        return await self.evaluator.score_or_null(run.final_document, run.input, cancel_token=self.cancel_token)

    def open_session(self, run: PipelineRun) -> RevisionSession:
        """Start a revision session on a finished run's document."""
        return RevisionSession(
            live_document=run.final_document,
            seed_input=run.input,
            sequencer=self.sequencer,
            mode=run.mode,
            options=run.options,
            invoker=self.invoker,
            history_store=self.history_store,
            cancel_token=self.cancel_token,
        )

    async def run_dryrun(self, progress_callback: Optional[ProgressCallback] = None) -> DryrunReport:
        self.cancel_token.reset()
        runner = CalibrationRunner(self.evaluator, self.invoker, cancel_token=self.cancel_token)

        async def pipeline_runner(seed_text: str, options: RunOptions) -> PipelineRun:
            return await self.sequencer.run(seed_text, options=options, cancel_token=self.cancel_token)

        return await runner.run_dryrun(pipeline_runner, progress_callback=progress_callback)

    def cancel(self) -> None:
        logger.info("[cancel] Cancelling in-flight work")
        self.cancel_token.cancel()


# ============================================================================
# CLI
# ============================================================================

app = typer.Typer(help="PITCHROOM natural history pitch deck pipeline")


def _build_orchestrator() -> PitchroomOrchestrator:
    config = create_default_config_from_env()
    errors = config.validate_agent_models()
    if errors:
        typer.echo("Configuration errors:")
        for error in errors:
            typer.echo(f"  - {error}")
        raise typer.Exit(code=1)
    return PitchroomOrchestrator(config, load_pipeline_settings())


def _install_signal_handlers(orchestrator: PitchroomOrchestrator) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, orchestrator.cancel)


def _print_scorecard(scorecard: Scorecard) -> None:
    typer.echo("\n=== Scorecard ===")
    for dim in scorecard.dimensions:
        score = "-" if dim.score is None else dim.score
        typer.echo(f"  {dim.name}: {score}")
    typer.echo(f"  Overall: {'-' if scorecard.overall is None else scorecard.overall}")
    if scorecard.summary:
        typer.echo(f"\n{scorecard.summary}")
    for rec in scorecard.recommendations:
        typer.echo(f"  * {rec}")


async def _run(
    seed: str,
    mode: PipelineMode,
    platform: Optional[str],
    directive: Optional[str],
    genre: Optional[str] = None,
    max_revisions: int = 0,
) -> int:
    orchestrator = _build_orchestrator()
    _install_signal_handlers(orchestrator)
    options = RunOptions(
        platform=platform or orchestrator.settings.default_platform,
        genre=genre,
        max_revisions=max_revisions,
    )

    try:
        run = await orchestrator.run_pipeline(seed, mode=mode, directive=directive, options=options)
    except FatalRunError as e:
        typer.echo(f"Run failed: {e}", err=True)
        return 1
    except PipelineCancelled:
        typer.echo("Run cancelled.", err=True)
        return 130

    if run.is_rejected:
        typer.echo(f"Pipeline halted by {run.rejected_by} ({run.gate.value}).\n")
    typer.echo(run.final_document)

    try:
        scorecard = await orchestrator.score(run)
    except (FatalRunError, ParseContractViolation) as e:
        typer.echo(f"Scoring failed: {e}", err=True)
        return 2
    except PipelineCancelled:
        typer.echo("Scoring cancelled.", err=True)
        return 130

    _print_scorecard(scorecard)
    return 0


async def _dryrun() -> int:
    orchestrator = _build_orchestrator()
    _install_signal_handlers(orchestrator)

    def progress(index: int, total: int, name: str, status: str) -> None:
        typer.echo(f"[{index + 1}/{total}] {name}: {status}")

    try:
        report = await orchestrator.run_dryrun(progress_callback=progress)
    except PipelineCancelled:
        typer.echo("Dryrun cancelled.", err=True)
        return 130

    agg = report.aggregate
    typer.echo(
        f"\nSeeds: {agg.total}  scored: {agg.scored}  rejected: {agg.rejected}  failed: {agg.failed}"
    )
    typer.echo(f"Overall: {'-' if agg.overall is None else agg.overall}")
    for dim in agg.dimensions:
        if dim.avg is not None:
            typer.echo(f"  {dim.name}: avg {dim.avg} (min {dim.min}, max {dim.max})")

    cal = report.calibration
    if cal is not None:
        low, high = cal.expected_range
        typer.echo(
            f"\nCalibration [{cal.status.value}] {cal.seed_name}: observed {cal.observed}, "
            f"expected {low}-{high}, delta {cal.delta}"
        )
        typer.echo(
            f"  Markers agree {cal.agreements}, disagree {cal.disagreements}; "
            f"red flags {cal.red_flags_triggered}/{cal.red_flags_total}"
        )
    return 0


@app.command()
def run(
    seed: str,
    mode: PipelineMode = typer.Option(PipelineMode.GENERATION, help="generation or assessment"),
    platform: Optional[str] = typer.Option(None, help="Target platform, e.g. Netflix"),
    directive: Optional[str] = typer.Option(None, help="Creative directive applied to every role"),
    genre: Optional[str] = typer.Option(None, help="Genre lock, e.g. nature-noir or free text"),
    max_revisions: int = typer.Option(0, min=0, max=5, help="Re-draft rounds while below greenlight"),
):
    """Run the pipeline on a seed idea (or script, in assessment mode) and score the result."""
    configure_logging()
    raise typer.Exit(code=asyncio.run(_run(seed, mode, platform, directive, genre, max_revisions)))


@app.command()
def dryrun():
    """Run the benchmark suite with a calibration seed."""
    configure_logging()
    raise typer.Exit(code=asyncio.run(_dryrun()))


def main() -> None:
    """Main entry point."""
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
