"""
Unit tests for the PitchroomOrchestrator facade and CLI.
"""

import logging

import pytest
from typer.testing import CliRunner

from conftest import make_scorecard_json
from pitchroom import main as pitchroom_main
from pitchroom.config import LLMConfiguration
from pitchroom.core.errors import FatalRunError
from pitchroom.agents.base import GenerationServiceError
from pitchroom.main import PitchroomOrchestrator, app, configure_logging
from pitchroom.models import PipelineMode, RunState


MEMO = "## ⛔ SCIENTIFIC REJECTION\nNo polar bears in the Sahara.\nPIPELINE HALT RECOMMENDED"


def _orchestrator(make_invoker, scripts=None):
    invoker, clients = make_invoker(scripts)
    return PitchroomOrchestrator(LLMConfiguration(), invoker=invoker), clients


class TestPitchroomOrchestrator:
    """Tests for the facade."""

    @pytest.mark.asyncio
    async def test_completed_run_is_saved(self, make_invoker):
        orchestrator, _ = _orchestrator(make_invoker, {"showrunner": ["Directives", "# Deck"]})

        run = await orchestrator.run_pipeline("Otters of the kelp forest")

        assert run.state == RunState.COMPLETED
        records = orchestrator.history_store.list()
        assert len(records) == 1
        assert records[0].id == run.id
        assert records[0].final_document == "# Deck"

    @pytest.mark.asyncio
    async def test_rejected_run_is_not_saved(self, make_invoker):
        orchestrator, _ = _orchestrator(make_invoker, {"chief_scientist": MEMO})

        run = await orchestrator.run_pipeline("Polar bears in the Sahara")
        scorecard = await orchestrator.score(run)

        assert run.is_rejected
        assert orchestrator.history_store.list() == []
        assert scorecard.is_null
        assert scorecard.rejection_type == "Scientific"

    @pytest.mark.asyncio
    async def test_fatal_run_surfaces_as_error(self, make_invoker):
        orchestrator, _ = _orchestrator(
            make_invoker, {"discovery_scout": GenerationServiceError("bad key", status=401)},
        )

        with pytest.raises(FatalRunError):
            await orchestrator.run_pipeline("Otters")

        assert orchestrator.history_store.list() == []

    @pytest.mark.asyncio
    async def test_session_shares_history_store(self, make_invoker):
        orchestrator, _ = _orchestrator(make_invoker, {
            "showrunner": ["Directives", "# Deck\n## Logline\nOtters."],
            "evaluator": make_scorecard_json(72),
        })
        run = await orchestrator.run_pipeline("Otters", mode=PipelineMode.GENERATION)

        session = orchestrator.open_session(run)
        scorecard = await session.rescore(orchestrator.evaluator)

        assert session.live_document == run.final_document
        assert scorecard.overall == 72
        assert session.history_store is orchestrator.history_store


class TestCLI:
    """Tests for the typer CLI."""

    def test_run_prints_document_and_scorecard(self, make_invoker, monkeypatch):
        orchestrator, _ = _orchestrator(make_invoker, {
            "showrunner": ["Directives", "# Kelp Forest Deck"],
            "evaluator": make_scorecard_json(81),
        })
        monkeypatch.setattr(pitchroom_main, "_build_orchestrator", lambda: orchestrator)
        monkeypatch.setattr(pitchroom_main, "_install_signal_handlers", lambda orch: None)
        monkeypatch.setattr(pitchroom_main, "configure_logging", lambda: None)

        result = CliRunner().invoke(app, ["run", "Otters", "--platform", "Netflix"])

        assert result.exit_code == 0
        assert "# Kelp Forest Deck" in result.output
        assert "Overall: 81" in result.output

    def test_run_reports_fatal_error(self, make_invoker, monkeypatch):
        orchestrator, _ = _orchestrator(
            make_invoker, {"discovery_scout": GenerationServiceError("bad key", status=401)},
        )
        monkeypatch.setattr(pitchroom_main, "_build_orchestrator", lambda: orchestrator)
        monkeypatch.setattr(pitchroom_main, "_install_signal_handlers", lambda orch: None)
        monkeypatch.setattr(pitchroom_main, "configure_logging", lambda: None)

        result = CliRunner().invoke(app, ["run", "Otters"])

        assert result.exit_code == 1

    def test_run_reports_unparseable_scorecard(self, make_invoker, monkeypatch):
        """Test that the deck is still printed when the evaluator reply cannot be parsed."""
        orchestrator, _ = _orchestrator(make_invoker, {
            "showrunner": ["Directives", "# Kelp Forest Deck"],
            "evaluator": "I would rate this deck fairly highly overall.",
        })
        monkeypatch.setattr(pitchroom_main, "_build_orchestrator", lambda: orchestrator)
        monkeypatch.setattr(pitchroom_main, "_install_signal_handlers", lambda orch: None)
        monkeypatch.setattr(pitchroom_main, "configure_logging", lambda: None)

        result = CliRunner().invoke(app, ["run", "Otters"])

        assert result.exit_code == 2
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "# Kelp Forest Deck" in result.output
        assert "Scoring failed" in result.output

    def test_run_passes_genre_and_revisions(self, make_invoker, monkeypatch):
        orchestrator, clients = _orchestrator(make_invoker, {
            "commissioning_editor": ["Score: 50/100", "Score: 60/100", "Score: 90/100"],
            "showrunner": ["Directives", "Tighter", "# Noir Deck"],
            "evaluator": make_scorecard_json(80),
        })
        monkeypatch.setattr(pitchroom_main, "_build_orchestrator", lambda: orchestrator)
        monkeypatch.setattr(pitchroom_main, "_install_signal_handlers", lambda orch: None)
        monkeypatch.setattr(pitchroom_main, "configure_logging", lambda: None)

        result = CliRunner().invoke(app, ["run", "Otters", "--genre", "nature-noir", "--max-revisions", "2"])

        assert result.exit_code == 0
        assert "# Noir Deck" in result.output
        assert "Nature Noir" in clients["discovery_scout"].calls[0]["user_prompt"]
        assert len(clients["commissioning_editor"].calls) == 3


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_handler_installed_once(self):
        logger = logging.getLogger("pitchroom")
        before = list(logger.handlers)
        try:
            configure_logging()
            configure_logging()
            assert len(logger.handlers) == max(len(before), 1)
        finally:
            for handler in logger.handlers[:]:
                if handler not in before:
                    logger.removeHandler(handler)
