"""
Unit tests for the Quality Evaluator.

Tests cover:
- Strict scorecard parsing (fences, canonical order, contract violations)
- Null scorecards for rejection memos
- QualityEvaluator scoring through a mocked invoker
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_scorecard_json
from pitchroom.config import PipelineSettings
from pitchroom.core.errors import ParseContractViolation
from pitchroom.core.evals import QualityEvaluator, null_scorecard, parse_scorecard
from pitchroom.models import DIMENSION_NAMES, Scorecard


SCIENTIFIC_MEMO = "## ⛔ SCIENTIFIC REJECTION\nImpossible.\nPIPELINE HALT RECOMMENDED"


class TestParseScorecard:
    """Tests for parse_scorecard."""

    def test_parses_bare_json(self):
        scorecard = parse_scorecard(make_scorecard_json(82))
        assert scorecard.overall == 82
        assert [d.name for d in scorecard.dimensions] == list(DIMENSION_NAMES)
        assert not scorecard.rejected

    def test_tolerates_one_enclosing_fence(self):
        scorecard = parse_scorecard("```json\n" + make_scorecard_json(75) + "\n```")
        assert scorecard.overall == 75

    def test_reorders_into_canonical_order(self):
        data = json.loads(make_scorecard_json(70))
        data["dimensions"] = list(reversed(data["dimensions"]))
        data["dimensions"][0]["name"] = data["dimensions"][0]["name"].upper()

        scorecard = parse_scorecard(json.dumps(data))

        assert [d.name for d in scorecard.dimensions] == list(DIMENSION_NAMES)

    def test_prose_is_a_violation(self):
        """Test that non-JSON output raises instead of guessing a score."""
        with pytest.raises(ParseContractViolation) as exc_info:
            parse_scorecard("I'd give this deck about an 80.")
        assert exc_info.value.raw_text == "I'd give this deck about an 80."

    def test_missing_dimension_is_a_violation(self):
        data = json.loads(make_scorecard_json(70))
        data["dimensions"] = data["dimensions"][:7]
        with pytest.raises(ParseContractViolation):
            parse_scorecard(json.dumps(data))

    def test_unknown_dimension_is_a_violation(self):
        data = json.loads(make_scorecard_json(70))
        data["dimensions"][3]["name"] = "Vibes"
        with pytest.raises(ParseContractViolation):
            parse_scorecard(json.dumps(data))

    def test_out_of_range_score_is_a_violation(self):
        data = json.loads(make_scorecard_json(70))
        data["dimensions"][0]["score"] = 140
        with pytest.raises(ParseContractViolation):
            parse_scorecard(json.dumps(data))

    def test_null_scores_are_a_violation(self):
        data = json.loads(make_scorecard_json(70))
        for dim in data["dimensions"]:
            dim["score"] = None
        data["overall"] = None
        with pytest.raises(ParseContractViolation):
            parse_scorecard(json.dumps(data))

    def test_json_array_is_a_violation(self):
        with pytest.raises(ParseContractViolation):
            parse_scorecard("[1, 2, 3]")


class TestNullScorecard:
    """Tests for null_scorecard."""

    def test_scientific_rejection(self):
        scorecard = null_scorecard(SCIENTIFIC_MEMO)

        assert scorecard.is_null
        assert scorecard.rejected
        assert scorecard.rejection_type == "Scientific"
        assert all(d.score is None for d in scorecard.dimensions)
        assert [d.name for d in scorecard.dimensions] == list(DIMENSION_NAMES)

    def test_ethical_rejection(self):
        assert null_scorecard("## ETHICAL REJECTION").rejection_type == "Ethical"

    def test_partial_nulls_rejected_by_model(self):
        """Test that a scorecard cannot mix null and numeric scores."""
        data = json.loads(make_scorecard_json(70))
        data["dimensions"][0]["score"] = None
        with pytest.raises(ValueError):
            Scorecard.model_validate(data)


class TestQualityEvaluator:
    """Tests for QualityEvaluator."""

    def _evaluator(self, response, settings=None):
        invoker = MagicMock()
        invoker.invoke = AsyncMock(return_value=response)
        return QualityEvaluator(invoker, settings), invoker

    @pytest.mark.asyncio
    async def test_score(self):
        evaluator, invoker = self._evaluator(make_scorecard_json(88))

        scorecard = await evaluator.score("# Deck", "Seed idea")

        assert scorecard.overall == 88
        role, prompt = invoker.invoke.call_args.args
        assert role.id == "evaluator"
        assert prompt.startswith("Evaluate the following pitch deck.")
        assert "Seed idea" in prompt
        assert "# Deck" in prompt

    @pytest.mark.asyncio
    async def test_original_input_is_truncated(self):
        evaluator, invoker = self._evaluator(make_scorecard_json(88))

        await evaluator.score("# Deck", "x" * 600 + "TAIL")

        prompt = invoker.invoke.call_args.args[1]
        assert "x" * 500 in prompt
        assert "x" * 501 not in prompt
        assert "TAIL" not in prompt

    @pytest.mark.asyncio
    async def test_truncation_follows_settings(self):
        evaluator, invoker = self._evaluator(make_scorecard_json(88), PipelineSettings(evaluator_input_chars=10))

        await evaluator.score("# Deck", "abcdefghijKLMNOP")

        prompt = invoker.invoke.call_args.args[1]
        assert "abcdefghij" in prompt
        assert "KLMNOP" not in prompt

    @pytest.mark.asyncio
    async def test_score_raises_on_prose(self):
        evaluator, _ = self._evaluator("Great deck, 9/10!")
        with pytest.raises(ParseContractViolation):
            await evaluator.score("# Deck", "Seed")

    @pytest.mark.asyncio
    async def test_score_or_null_skips_evaluator_for_memo(self):
        evaluator, invoker = self._evaluator(make_scorecard_json(88))

        scorecard = await evaluator.score_or_null(SCIENTIFIC_MEMO, "Grizzlies in Antarctica")

        assert scorecard.is_null
        invoker.invoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_score_or_null_scores_ordinary_deck(self):
        evaluator, invoker = self._evaluator(make_scorecard_json(64))

        scorecard = await evaluator.score_or_null("# Deck", "Seed")

        assert scorecard.overall == 64
        invoker.invoke.assert_awaited_once()
