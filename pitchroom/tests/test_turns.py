"""
Unit tests for conversational turn classification.
"""

from pitchroom.core.turns import classify_turn, parse_rewrites
from pitchroom.models import TurnKind


REWRITE_REPLY = """Tightened the logline as requested.

<rewrite>
<section>Logline</section>
<original>A film about fish.</original>
<revised>In the dark, every light is a lie.</revised>
<rationale>Sharper hook.</rationale>
</rewrite>

Let me know if you want more."""


class TestClassifyTurn:
    """Tests for classify_turn."""

    def test_plain_answer(self):
        turn = classify_turn("  The budget is driven by the submersible days.  ")
        assert turn.kind == TurnKind.ANSWER
        assert turn.commentary == "The budget is driven by the submersible days."
        assert turn.proposals == []
        assert turn.directive is None

    def test_rewrite(self):
        turn = classify_turn(REWRITE_REPLY)

        assert turn.kind == TurnKind.REWRITE
        assert len(turn.proposals) == 1
        proposal = turn.proposals[0]
        assert proposal.section == "Logline"
        assert proposal.original == "A film about fish."
        assert proposal.revised == "In the dark, every light is a lie."
        assert proposal.rationale == "Sharper hook."
        assert "<rewrite>" not in turn.commentary
        assert turn.commentary.startswith("Tightened the logline")
        assert turn.commentary.endswith("Let me know if you want more.")

    def test_multiple_rewrites(self):
        reply = (
            "<rewrite><section>A</section><original>one</original><revised>1</revised></rewrite>"
            "<rewrite><section>B</section><original>two</original><revised>2</revised></rewrite>"
        )
        turn = classify_turn(reply)
        assert [p.section for p in turn.proposals] == ["A", "B"]
        assert turn.proposals[0].rationale == ""

    def test_rerun(self):
        turn = classify_turn("Big change needed.\n<rerun>Reframe as a survival thriller</rerun>")
        assert turn.kind == TurnKind.RERUN
        assert turn.directive.directive == "Reframe as a survival thriller"
        assert turn.commentary == "Big change needed."

    def test_rerun_wins_over_rewrite(self):
        """Test that a rerun block takes precedence over rewrite blocks."""
        reply = REWRITE_REPLY + "\n<rerun>Start over with a night-time focus</rerun>"
        turn = classify_turn(reply)
        assert turn.kind == TurnKind.RERUN
        assert turn.proposals == []

    def test_empty_rerun_is_ignored(self):
        turn = classify_turn("<rerun>   </rerun>")
        assert turn.kind == TurnKind.ANSWER

    def test_tags_case_insensitive(self):
        turn = classify_turn("<RERUN>Go bigger</RERUN>")
        assert turn.kind == TurnKind.RERUN


class TestParseRewrites:
    """Tests for parse_rewrites."""

    def test_incomplete_block_skipped(self):
        reply = "<rewrite><section>A</section><revised>only revised</revised></rewrite>"
        assert parse_rewrites(reply) == []

    def test_multiline_excerpt_keeps_inner_whitespace(self):
        reply = "<rewrite><original>\n  line one\n  line two\n</original><revised>\nnew\n</revised></rewrite>"
        proposal = parse_rewrites(reply)[0]
        assert proposal.original == "  line one\n  line two"
        assert proposal.revised == "new"
