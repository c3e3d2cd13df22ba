"""
Pydantic models for the validation contract.

ValidationResult is the only thing a caller ever receives back, so its shape
is fixed: success, a malformed model reply, a network failure, or missing
configuration all produce one. Field names are snake_case in Python and
camelCase on the wire (``isValid``, ``doctorName``, ...).
"""

from __future__ import annotations

import base64
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# ─── Confidence Levels ──────────────────────────────────────────────


class Confidence(str, Enum):
    """How sure the model claims to be about its verdict."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ─── Encoded Payload ────────────────────────────────────────────────


class EncodedPayload(BaseModel):
    """A document's bytes as base64 text, tagged with its MIME type.

    Created per call and discarded once the model request completes.
    """

    model_config = ConfigDict(frozen=True)

    content_type: str
    data: str  # base64, no line breaks

    def to_bytes(self) -> bytes:
        """Decode back to the original document bytes."""
        return base64.b64decode(self.data)


# ─── Validation Result ──────────────────────────────────────────────


class ValidationResult(BaseModel):
    """The verdict returned for every validation call."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    reason: str
    doctor_name: Optional[str] = None
    doctor_qualification: Optional[str] = None
    confidence: Confidence = Confidence.MEDIUM

    def to_dict(self) -> dict:
        """Wire representation with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
