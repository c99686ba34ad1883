"""
Tiered patch strategies for applying a RewriteProposal to a document.

Each strategy is a pure function returning the patched document, or None to
hand over to the next tier. The last tier always succeeds.
"""

import logging
from typing import Callable, Optional, Tuple

from ..models import PatchResult, PatchStrategy, RewriteProposal
from .documents import split_sections

logger = logging.getLogger("pitchroom.patching")

PatchFn = Callable[[str, RewriteProposal], Optional[str]]


def try_exact(document: str, proposal: RewriteProposal) -> Optional[str]:
    """Replace the first verbatim occurrence of the original excerpt."""
    if not proposal.original or proposal.original not in document:
        return None
    return document.replace(proposal.original, proposal.revised, 1)


def _anchor_line(excerpt: str) -> str:
    for line in excerpt.splitlines():
        if line.strip():
            return line.strip()
    return ""


def try_section_anchor(document: str, proposal: RewriteProposal) -> Optional[str]:
    """Replace the whole heading-led section that contains the excerpt's first line."""
    anchor = _anchor_line(proposal.original)
    if not anchor:
        return None

    sections = split_sections(document)
    for index, section in enumerate(sections):
        if not section.lstrip().startswith("#"):
            continue
        if anchor in section:
            sections[index] = proposal.revised
            return "\n".join(sections)
    return None


def try_append(document: str, proposal: RewriteProposal) -> Optional[str]:
    return f"{document}\n\n{proposal.revised}"


PATCH_STRATEGIES: Tuple[Tuple[PatchStrategy, PatchFn], ...] = (
    (PatchStrategy.EXACT, try_exact),
    (PatchStrategy.SECTION_ANCHOR, try_section_anchor),
    (PatchStrategy.APPEND, try_append),
)


def apply_patch_strategies(
    document: str,
    proposal: RewriteProposal,
    strategies: Tuple[Tuple[PatchStrategy, PatchFn], ...] = PATCH_STRATEGIES,
) -> PatchResult:
    """Run the strategies in order and report which one produced the result."""
    for strategy, patch in strategies:
        patched = patch(document, proposal)
        if patched is not None:
            if strategy != PatchStrategy.EXACT:
                logger.warning(
                    f"[apply_patch] Exact match failed for section '{proposal.section or '?'}'; "
                    f"applied with {strategy.value} strategy"
                )
            return PatchResult(document=patched, strategy=strategy)
    raise ValueError("No patch strategy produced a document")
