"""
Unit tests for the gate interpreter and document helpers.

Tests cover:
- Sentinel detection and precedence
- Anchored scanning
- Rejection memo detection and labelling
- Fence stripping, section splitting and final output sanitising
"""

from pitchroom.core.documents import extract_score, sanitize_final_output, split_sections, strip_enclosing_fence
from pitchroom.core.gate import is_rejection_memo, rejection_type, scan_gate
from pitchroom.models import GateSignal


SCIENTIFIC_MEMO = """## ⛔ SCIENTIFIC REJECTION

**Reason:** Grizzly bears do not live in Antarctica.

PIPELINE HALT RECOMMENDED"""


class TestScanGate:
    """Tests for scan_gate."""

    def test_clean_text_passes(self):
        """Test that ordinary output carries no signal."""
        scan = scan_gate("## Market Analysis\nStrong demand for ocean content.")
        assert scan.signal == GateSignal.NONE
        assert not scan.rejected

    def test_empty_text_passes(self):
        assert scan_gate("").signal == GateSignal.NONE

    def test_scientific_heading(self):
        """Test that the scientific heading maps to premise impossibility."""
        scan = scan_gate(SCIENTIFIC_MEMO)
        assert scan.signal == GateSignal.PREMISE_IMPOSSIBILITY
        assert scan.rejected

    def test_ethical_heading(self):
        scan = scan_gate("## ⛔ ETHICAL REJECTION\nBaiting protected species is not permissible.")
        assert scan.signal == GateSignal.ETHICS_OF_METHOD

    def test_case_insensitive(self):
        assert scan_gate("## scientific rejection").signal == GateSignal.PREMISE_IMPOSSIBILITY

    def test_halt_phrase_alone(self):
        """Test that the generic halt phrase halts with its own signal."""
        scan = scan_gate("Verdict: PIPELINE HALT RECOMMENDED")
        assert scan.signal == GateSignal.GENERAL_HALT

    def test_category_wins_over_halt_phrase(self):
        """Test that a category sentinel beats an earlier halt phrase."""
        text = "PIPELINE HALT RECOMMENDED\n\n## ETHICAL REJECTION\nDetails."
        assert scan_gate(text).signal == GateSignal.ETHICS_OF_METHOD

    def test_earlier_category_wins(self):
        text = "## ETHICAL REJECTION\nFirst.\n\n## SCIENTIFIC REJECTION\nSecond."
        assert scan_gate(text).signal == GateSignal.ETHICS_OF_METHOD

    def test_substring_mode_matches_prose(self):
        """Test that the default scan matches sentinels mentioned in prose."""
        text = "We considered whether a SCIENTIFIC REJECTION was warranted and decided not."
        assert scan_gate(text).rejected

    def test_anchored_mode_ignores_prose(self):
        """Test that anchored scanning only honours headings and line starts."""
        text = "We considered whether a SCIENTIFIC REJECTION was warranted and decided not."
        assert not scan_gate(text, anchored=True).rejected

    def test_anchored_mode_heading_and_line_start(self):
        assert scan_gate(SCIENTIFIC_MEMO, anchored=True).signal == GateSignal.PREMISE_IMPOSSIBILITY
        halt = scan_gate("Notes\n**PIPELINE HALT RECOMMENDED**", anchored=True)
        assert halt.signal == GateSignal.GENERAL_HALT


class TestRejectionMemo:
    """Tests for is_rejection_memo and rejection_type."""

    def test_sentinel_is_memo(self):
        assert is_rejection_memo(SCIENTIFIC_MEMO)

    def test_memo_markers(self):
        """Test that memo markers count for scoring but never halt."""
        text = "INTERNAL REJECTION MEMO\nThis concept is DEAD ON ARRIVAL."
        assert is_rejection_memo(text)
        assert not scan_gate(text).rejected

    def test_ordinary_deck_is_not_memo(self):
        assert not is_rejection_memo("# Deep Ocean\n## Logline\nPredators of the abyss.")

    def test_rejection_types(self):
        assert rejection_type(SCIENTIFIC_MEMO) == "Scientific"
        assert rejection_type("## ETHICAL REJECTION") == "Ethical"
        assert rejection_type("DEAD ON ARRIVAL") == "Editorial"


class TestDocuments:
    """Tests for document helpers."""

    def test_strip_enclosing_fence(self):
        assert strip_enclosing_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strip_without_fence(self):
        assert strip_enclosing_fence('  {"a": 1}\n') == '{"a": 1}'

    def test_inner_fences_untouched(self):
        text = "Intro\n```\ncode\n```\nOutro"
        assert strip_enclosing_fence(text) == text

    def test_split_sections_round_trip(self):
        """Test that joining split sections reproduces the document."""
        document = "Preamble\n# Title\nBody\n## Logline\nA hunt.\n#### Notes\nEnd"
        sections = split_sections(document)
        assert sections[0] == "Preamble"
        assert sections[1].startswith("# Title")
        assert len(sections) == 4
        assert "\n".join(sections) == document

    def test_sanitize_final_output(self):
        """Test that fences, roleplay preambles and routing notes are removed."""
        raw = (
            "```markdown\n"
            "Okay, Showrunner here, pulling it all together.\n"
            "# Midnight Zone\n"
            "## Logline\n"
            "Hunters in the dark (Routed to Chief Scientist).\n"
            "```"
        )
        cleaned = sanitize_final_output(raw)
        assert cleaned.startswith("# Midnight Zone")
        assert "Routed to" not in cleaned
        assert "Showrunner here" not in cleaned


class TestExtractScore:
    """Tests for extract_score."""

    def test_labelled_score(self):
        assert extract_score("## Verdict\nGreenlight Score: 82 / 100\nClose.") == 82

    def test_bare_fraction(self):
        assert extract_score("Overall this lands at 64/100.") == 64

    def test_labelled_score_wins_over_earlier_fraction(self):
        assert extract_score("Vector 3 was 40/100.\nScore: 77/100") == 77

    def test_no_score(self):
        assert extract_score("No rating given.") is None
