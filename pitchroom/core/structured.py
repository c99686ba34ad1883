"""
Strict structured-output parsing shared by the evaluator and the calibration checkers.
"""

import json
import logging
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .documents import strip_enclosing_fence
from .errors import ParseContractViolation

logger = logging.getLogger("pitchroom.structured")

T = TypeVar("T", bound=BaseModel)


def parse_json_object(text: str, contract: str) -> Dict[str, Any]:
    """Strip one enclosing fence and parse a JSON object. No guessing."""
    cleaned = strip_enclosing_fence(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"[parse_json_object] {contract}: invalid JSON ({e.msg} at {e.pos})")
        raise ParseContractViolation(contract, text, f"invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        logger.error(f"[parse_json_object] {contract}: expected an object, got {type(data).__name__}")
        raise ParseContractViolation(contract, text, "expected a JSON object")
    return data


def validate_structured(data: Dict[str, Any], model: Type[T], contract: str, raw_text: str) -> T:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"[validate_structured] {contract}: {e.error_count()} validation error(s)")
        raise ParseContractViolation(contract, raw_text, str(e)) from e


def parse_structured(text: str, model: Type[T], contract: str) -> T:
    """Parse ``text`` into ``model`` or raise ParseContractViolation."""
    return validate_structured(parse_json_object(text, contract), model, contract, text)
