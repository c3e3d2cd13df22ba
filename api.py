"""
Medical Document Validator — FastAPI Server
============================================

HTTP front end for validating uploaded medical documents.

Endpoints:
    POST /validate/file     Upload a PDF/image for validation
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Form, HTTPException, UploadFile
from pydantic import BaseModel

from medical_doc_validator import __version__
from medical_doc_validator.client import MedicalDocumentValidator
from medical_doc_validator.config import ValidatorConfig
from medical_doc_validator.encoding import mime_type_for
from medical_doc_validator.models import ValidationResult

MAX_UPLOAD_BYTES = 10 * 1_048_576

# ─── Application Lifespan (build validator once) ────────────────────

_validator: MedicalDocumentValidator | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Read configuration once on startup; a missing key only warns."""
    global _validator  # noqa: PLW0603
    _validator = MedicalDocumentValidator(ValidatorConfig.from_env())
    yield
    _validator = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Medical Document Validator API",
    description=(
        "Checks uploaded medical certificates for leave approval. "
        "The document is interpreted by Gemini; the response is parsed "
        "defensively into a fixed verdict shape."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Response Schemas ────────────────────────────────────────────────


class HealthResponse(BaseModel):
    status: str
    version: str
    model_name: str
    model_configured: bool


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_validator() -> MedicalDocumentValidator:
    if _validator is None:
        raise HTTPException(status_code=503, detail="Validator not initialised")
    return _validator


def _resolve_content_type(file: UploadFile) -> str:
    """Prefer the declared upload type; fall back to the filename extension."""
    declared = (file.content_type or "").split(";")[0].strip().lower()
    if declared and declared != "application/octet-stream":
        return declared
    return mime_type_for(file.filename or "")


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/validate/file",
    summary="Validate an uploaded medical document",
    tags=["Validation"],
    response_model=ValidationResult,
    responses={
        413: {"description": "File too large (max 10 MB)"},
        422: {"description": "Empty file or missing form fields"},
        503: {"description": "Validator not yet initialised"},
    },
)
async def validate_document_file(
    file: UploadFile, subject_name: str = Form(..., min_length=1)
) -> ValidationResult:
    """Upload a PDF or image of a medical certificate.

    Always answers 200 with a verdict once the upload itself is acceptable:
    - **isValid**: `true` only if the model approved the document
    - **reason**: the model's explanation, or the error that prevented a verdict
    - **confidence**: `high`, `medium` or `low` (`low` for every error)
    """
    if file.size and file.size > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 10 MB)")

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large (max 10 MB)")
    if not content:
        raise HTTPException(status_code=422, detail="Uploaded file is empty")

    validator = _get_validator()
    return await validator.validate_buffer(
        content, _resolve_content_type(file), subject_name
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Validator not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and model configuration."""
    validator = _get_validator()
    return HealthResponse(
        status="healthy",
        version=__version__,
        model_name=validator.config.model_name,
        model_configured=validator.config.is_configured,
    )
