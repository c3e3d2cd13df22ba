"""
Input normalization: file path or raw buffer → EncodedPayload.

Both public entry points funnel through here so the client only ever deals
with one payload shape, whatever the input source.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path

from .exceptions import DocumentReadError
from .models import EncodedPayload

logger = logging.getLogger(__name__)


# ─── MIME Lookup ─────────────────────────────────────────────────────

MIME_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

# Unknown extensions are sent as PDF, not as a generic binary type.
DEFAULT_MIME_TYPE = "application/pdf"


def mime_type_for(path: str | Path) -> str:
    """Map a filename's extension to the MIME type sent to the model."""
    ext = Path(path).name.rsplit(".", 1)[-1].lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


# ─── Encoders ────────────────────────────────────────────────────────


def encode_bytes(data: bytes, content_type: str) -> EncodedPayload:
    """Base64-encode an in-memory document under a caller-declared type."""
    return EncodedPayload(
        content_type=content_type,
        data=base64.b64encode(data).decode("ascii"),
    )


def encode_file(path: str | Path) -> EncodedPayload:
    """Read a document from disk and encode it.

    Raises:
        DocumentReadError: the file is missing, unreadable, or a directory.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise DocumentReadError(
            f"Error reading file: {e}",
            details={"path": str(path)},
        ) from e

    content_type = mime_type_for(path)
    logger.debug("Read %d bytes from %s (%s)", len(raw), path, content_type)
    return encode_bytes(raw, content_type)
