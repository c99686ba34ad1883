"""
Conversational turn classification.

A consultant reply is exactly one of:
- Answer: plain prose, no tags
- Rewrite: one or more <rewrite> blocks with <section>, <original>, <revised>, <rationale>
- Rerun: a <rerun> block, which wins over any <rewrite> blocks in the same reply
"""

import logging
import re
from typing import List, Optional

from ..models import RerunDirective, RewriteProposal, TurnClassification, TurnKind

logger = logging.getLogger("pitchroom.turns")

_RERUN_BLOCK = re.compile(r"<rerun>(.*?)</rerun>", re.IGNORECASE | re.DOTALL)
_REWRITE_BLOCK = re.compile(r"<rewrite>(.*?)</rewrite>", re.IGNORECASE | re.DOTALL)
_FIELD = "<{0}>(.*?)</{0}>"


def _field(block: str, name: str) -> Optional[str]:
    match = re.search(_FIELD.format(name), block, re.IGNORECASE | re.DOTALL)
    return match.group(1) if match else None


def _commentary(reply: str) -> str:
    text = _RERUN_BLOCK.sub("", reply)
    text = _REWRITE_BLOCK.sub("", text)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def parse_rewrites(reply: str) -> List[RewriteProposal]:
    proposals = []
    for index, block in enumerate(_REWRITE_BLOCK.findall(reply)):
        original = _field(block, "original")
        revised = _field(block, "revised")
        if original is None or revised is None:
            logger.warning(f"[parse_rewrites] Rewrite block {index + 1} lacks <original> or <revised>; ignored")
            continue
        proposals.append(RewriteProposal(
            section=(_field(block, "section") or "").strip(),
            original=original.strip("\r\n"),
            revised=revised.strip("\r\n"),
            rationale=(_field(block, "rationale") or "").strip(),
        ))
    return proposals


def classify_turn(reply: str) -> TurnClassification:
    """Classify a consultant reply into Answer, Rewrite or Rerun."""
    reply = reply or ""
    commentary = _commentary(reply)

    rerun = _RERUN_BLOCK.search(reply)
    if rerun and rerun.group(1).strip():
        return TurnClassification(
            kind=TurnKind.RERUN,
            commentary=commentary,
            directive=RerunDirective(directive=rerun.group(1).strip()),
        )

    proposals = parse_rewrites(reply)
    if proposals:
        return TurnClassification(kind=TurnKind.REWRITE, commentary=commentary, proposals=proposals)

    return TurnClassification(kind=TurnKind.ANSWER, commentary=reply.strip())
