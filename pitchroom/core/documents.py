"""
Text helpers for markdown documents produced by the pipeline.
"""

import re
from typing import List, Optional

_ENCLOSING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n(.*?)\n?```\s*$", re.DOTALL)
_SECTION_SPLIT = re.compile(r"\n(?=#{1,4} )")
_ROLEPLAY_PREAMBLE = re.compile(
    r"\A\s*(?:okay|alright|right|sure)[,.!]?\s[^\n]*?"
    r"(?:showrunner|editor|scientist|producer|analyst|gatekeeper)\s+here\b.*?(?=^#|^\*\*working title)",
    re.IGNORECASE | re.DOTALL | re.MULTILINE,
)
_ROUTING_NOTE = re.compile(r"\(Routed to [^)]+\)", re.IGNORECASE)
_SCORE_PATTERNS = (
    re.compile(r"Score:\s*(\d{1,3})\s*/\s*100", re.IGNORECASE),
    re.compile(r"(\d{1,3})\s*/\s*100"),
)


def strip_enclosing_fence(text: str) -> str:
    """Remove one fenced block wrapping the whole text, if present."""
    match = _ENCLOSING_FENCE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def split_sections(document: str) -> List[str]:
    """Split a document into heading-led sections (levels 1-4).

    The first element holds any preamble before the first heading line.
    Joining the result with "\\n" reproduces the document.
    """
    return _SECTION_SPLIT.split(document)


def sanitize_final_output(text: str) -> str:
    """Strip wrapper fences and agent meta-commentary from a final deck."""
    cleaned = strip_enclosing_fence(text)
    cleaned = _ROLEPLAY_PREAMBLE.sub("", cleaned, count=1)
    cleaned = _ROUTING_NOTE.sub("", cleaned)
    return cleaned.strip()


def extract_score(text: str) -> Optional[int]:
    """Pull a "Score: NN/100" style rating out of a review, or None."""
    for pattern in _SCORE_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None
