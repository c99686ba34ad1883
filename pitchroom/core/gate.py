"""
Gate Interpreter for PITCHROOM.

Scans agent output for the fixed rejection sentinels. Every gate decision in
the codebase goes through ``scan_gate``; nothing else sniffs for sentinels.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..models import GateSignal

SCIENTIFIC_SENTINEL = "SCIENTIFIC REJECTION"
ETHICAL_SENTINEL = "ETHICAL REJECTION"
HALT_SENTINEL = "PIPELINE HALT RECOMMENDED"

# Extra phrases that mark a document as a rejection memo for scoring purposes.
# They never halt a run.
MEMO_MARKERS = ("DEAD ON ARRIVAL", "INTERNAL REJECTION MEMO")

_CATEGORY_SENTINELS = (
    (SCIENTIFIC_SENTINEL, GateSignal.PREMISE_IMPOSSIBILITY),
    (ETHICAL_SENTINEL, GateSignal.ETHICS_OF_METHOD),
)

_HEADING_LINE = re.compile(r"^\s*#{1,6}\s")
_LINE_START_NOISE = re.compile(r"^[\s>*_`\-]*")


@dataclass(frozen=True)
class GateScan:
    """Result of scanning one output for gate sentinels."""
    signal: GateSignal = GateSignal.NONE
    sentinel: Optional[str] = None
    position: int = -1

    @property
    def rejected(self) -> bool:
        return self.signal != GateSignal.NONE


_PASS = GateScan()


def _find_anywhere(upper: str, sentinel: str) -> int:
    return upper.find(sentinel)


def _find_on_heading(upper: str, sentinel: str) -> int:
    offset = 0
    for line in upper.splitlines(keepends=True):
        if _HEADING_LINE.match(line):
            index = line.find(sentinel)
            if index >= 0:
                return offset + index
        offset += len(line)
    return -1


def _find_at_line_start(upper: str, sentinel: str) -> int:
    offset = 0
    for line in upper.splitlines(keepends=True):
        lead = _LINE_START_NOISE.match(line).end()
        if line.startswith(sentinel, lead):
            return offset + lead
        offset += len(line)
    return -1


def scan_gate(text: str, anchored: bool = False) -> GateScan:
    """Return the gate signal carried by ``text``.

    Matching is case-insensitive. A category heading wins over the generic
    halt phrase; when both categories appear the earlier one wins. With
    ``anchored`` set, category sentinels only count on markdown heading lines
    and the halt phrase only at the start of a line.
    """
    if not text:
        return _PASS

    upper = text.upper()
    find_heading = _find_on_heading if anchored else _find_anywhere
    find_halt = _find_at_line_start if anchored else _find_anywhere

    best = _PASS
    for sentinel, signal in _CATEGORY_SENTINELS:
        position = find_heading(upper, sentinel)
        if position >= 0 and (best.position < 0 or position < best.position):
            best = GateScan(signal=signal, sentinel=sentinel, position=position)
    if best.rejected:
        return best

    position = find_halt(upper, HALT_SENTINEL)
    if position >= 0:
        return GateScan(signal=GateSignal.GENERAL_HALT, sentinel=HALT_SENTINEL, position=position)
    return _PASS


def is_rejection_memo(text: str) -> bool:
    """True when a document is a rejection memo rather than a deliverable."""
    if scan_gate(text).rejected:
        return True
    upper = (text or "").upper()
    return any(marker in upper for marker in MEMO_MARKERS)


def rejection_type(text: str) -> str:
    """Human label for the kind of rejection a memo carries."""
    signal = scan_gate(text).signal
    if signal == GateSignal.PREMISE_IMPOSSIBILITY:
        return "Scientific"
    if signal == GateSignal.ETHICS_OF_METHOD:
        return "Ethical"
    return "Editorial"
