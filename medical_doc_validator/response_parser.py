"""
Parsing of the model's free-form reply into a ValidationResult.

Gemini is asked for bare JSON but frequently wraps it in a markdown code
fence anyway. Everything that depends on the model's formatting habits lives
in strip_code_fences(), so a change in those habits is a one-function fix.

Normalization rules:
  - isValid counts only when it is literally the JSON boolean true
  - a missing or empty reason becomes "Validation completed"
  - doctor fields pass through untouched (None when absent)
  - confidence outside high/medium/low becomes "medium"
"""

from __future__ import annotations

import json
import re
from typing import Any

from .exceptions import MalformedResponseError
from .models import Confidence, ValidationResult

DEFAULT_REASON = "Validation completed"

_JSON_FENCE = re.compile(r"```json\n?")
_BARE_FENCE = re.compile(r"```\n?")


# ─── Fence Stripping ─────────────────────────────────────────────────


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json / ``` code fence from model output.

    Text that does not start with a fence is only trimmed.
    """
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = _BARE_FENCE.sub("", _JSON_FENCE.sub("", cleaned)).strip()
    elif cleaned.startswith("```"):
        cleaned = _BARE_FENCE.sub("", cleaned).strip()
    return cleaned


# ─── JSON Decoding ───────────────────────────────────────────────────


def parse_model_response(text: str) -> dict[str, Any]:
    """Strip fences and decode the reply as a JSON object.

    Raises:
        MalformedResponseError: the text is not JSON, or not a JSON object.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Model response is not valid JSON: {e}",
            details={"response": cleaned[:500]},
        ) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Model response is a JSON {type(data).__name__}, expected an object",
            details={"response": cleaned[:500]},
        )
    return data


# ─── Normalization ───────────────────────────────────────────────────


def normalize_result(data: dict[str, Any]) -> ValidationResult:
    """Coerce a decoded model reply into the fixed ValidationResult shape."""
    return ValidationResult(
        is_valid=data.get("isValid") is True,
        reason=_safe_str(data.get("reason")) or DEFAULT_REASON,
        doctor_name=_safe_str(data.get("doctorName")),
        doctor_qualification=_safe_str(data.get("doctorQualification")),
        confidence=_safe_confidence(data.get("confidence")),
    )


def parse_validation_result(text: str) -> ValidationResult:
    """Full pipeline: raw model text → ValidationResult."""
    return normalize_result(parse_model_response(text))


# ─── Safe Type Converters ────────────────────────────────────────────


def _safe_str(value: object) -> str | None:
    """None stays None; anything else is rendered as text."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _safe_confidence(value: object) -> Confidence:
    """Match a confidence label case-insensitively, defaulting to medium."""
    if isinstance(value, str):
        try:
            return Confidence(value.strip().lower())
        except ValueError:
            pass
    return Confidence.MEDIUM
