"""
Validation client: policy prompt → Gemini → parsed ValidationResult.

Design:
  - One implementation, validate(), whatever the input source; the path and
    buffer entry points only differ in how they build the EncodedPayload.
  - The credential is checked before any file read or network call.
  - No call ever raises. Every failure (missing key, unreadable file,
    network error, non-JSON reply) becomes a negative result with
    confidence "low" and the error message as the reason.
  - One model call per validation; no retries, no caching.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from pathlib import Path

from .config import ValidatorConfig
from .encoding import encode_bytes, encode_file
from .exceptions import ConfigurationError
from .models import Confidence, EncodedPayload, ValidationResult
from .response_parser import parse_validation_result
from .transport import GeminiTransport, ModelTransport

logger = logging.getLogger(__name__)


# ─── Policy Prompt ───────────────────────────────────────────────────

POLICY_PROMPT = """\
You are a medical document validator for a leave approval system.
Decide whether the attached document is acceptable proof of illness.

ACCEPTANCE CRITERIA:
1. It is a genuine medical document (medical certificate, prescription,
   medical report, discharge summary, or similar).
2. It carries a doctor's signature.
3. The signing doctor holds MBBS or a higher qualification (MD, MS, DM,
   DNB, MCh, etc.). MBBS is the minimum; anything equal or higher passes.
4. It contains medical information about the patient.
5. It shows no sign of forgery, editing, or tampering.

REJECT the document if:
- there is no signature,
- the doctor's qualification is missing or below MBBS,
- it looks fake, edited, or assembled from other documents.

Respond with ONLY a JSON object, no other text:
{{
  "isValid": true or false,
  "reason": "why the document was accepted or rejected",
  "doctorName": "doctor's name if found, otherwise null",
  "doctorQualification": "doctor's qualification if found (e.g. MBBS, MD), otherwise null",
  "confidence": "high" | "medium" | "low"
}}

Employee Name: {subject_name}
Analyze the attached medical document and return the validation result.
"""


def build_prompt(subject_name: str) -> str:
    """Fill the policy prompt with the name of the person requesting leave."""
    return POLICY_PROMPT.format(subject_name=subject_name)


# ─── Client ──────────────────────────────────────────────────────────


class MedicalDocumentValidator:
    """Validates medical documents against the leave-approval policy.

    Usage:
        validator = MedicalDocumentValidator(ValidatorConfig.from_env())
        result = await validator.validate_file("note.pdf", "Jane Doe")
        if not result.is_valid:
            print(result.reason)
    """

    def __init__(
        self,
        config: ValidatorConfig,
        transport: ModelTransport | None = None,
    ):
        self.config = config
        self._transport = transport

    async def validate(
        self, payload: EncodedPayload, subject_name: str
    ) -> ValidationResult:
        """Validate an already-encoded document. Never raises."""
        try:
            self._require_configured()
            prompt = build_prompt(subject_name)
            text = await self._get_transport().generate(prompt, payload)
            result = parse_validation_result(text)
        except Exception as e:
            return _failure(e)

        logger.info(
            "Validated %s document: valid=%s confidence=%s",
            payload.content_type,
            result.is_valid,
            result.confidence.value,
        )
        logger.debug("Validation subject: %s", subject_name)
        return result

    async def validate_file(
        self, path: str | Path, subject_name: str
    ) -> ValidationResult:
        """Read, encode, and validate a document on disk. Never raises."""
        try:
            self._require_configured()
            payload = await asyncio.to_thread(encode_file, path)
        except Exception as e:
            return _failure(e)
        return await self.validate(payload, subject_name)

    async def validate_buffer(
        self, data: bytes, content_type: str, subject_name: str
    ) -> ValidationResult:
        """Encode and validate an in-memory upload. Never raises."""
        try:
            self._require_configured()
            payload = encode_bytes(data, content_type)
        except Exception as e:
            return _failure(e)
        return await self.validate(payload, subject_name)

    # ─── Internals ──────────────────────────────────────────────────

    def _require_configured(self) -> None:
        if not self.config.is_configured:
            raise ConfigurationError(
                "Gemini API key is not configured. "
                "Please set GEMINI_API_KEY in environment variables."
            )

    def _get_transport(self) -> ModelTransport:
        if self._transport is None:
            self._transport = GeminiTransport(self.config)
        return self._transport


def _failure(error: Exception) -> ValidationResult:
    """The single negative result every failure collapses into."""
    logger.error("Error validating medical document: %s", error)
    return ValidationResult(
        is_valid=False,
        reason=f"Validation error: {error}",
        doctor_name=None,
        doctor_qualification=None,
        confidence=Confidence.LOW,
    )


# ─── Module-level Entry Points ───────────────────────────────────────


@lru_cache(maxsize=1)
def default_validator() -> MedicalDocumentValidator:
    """Validator built from the environment on first use, then reused."""
    return MedicalDocumentValidator(ValidatorConfig.from_env())


def _resolve(
    config: ValidatorConfig | None, transport: ModelTransport | None
) -> MedicalDocumentValidator:
    if config is None and transport is None:
        return default_validator()
    return MedicalDocumentValidator(config or default_validator().config, transport)


async def validate_medical_document(
    path: str | Path,
    subject_name: str,
    config: ValidatorConfig | None = None,
    transport: ModelTransport | None = None,
) -> ValidationResult:
    """Validate a medical document stored at ``path``."""
    return await _resolve(config, transport).validate_file(path, subject_name)


async def validate_medical_document_from_buffer(
    data: bytes,
    content_type: str,
    subject_name: str,
    config: ValidatorConfig | None = None,
    transport: ModelTransport | None = None,
) -> ValidationResult:
    """Validate a medical document held in memory (e.g. a direct upload)."""
    return await _resolve(config, transport).validate_buffer(
        data, content_type, subject_name
    )
