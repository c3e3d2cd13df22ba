"""
Transport to the external multimodal model.

The client talks to a ModelTransport, never to the SDK directly, so tests
can swap in a fake that returns canned text. GeminiTransport is the real
implementation: one prompt plus one inline document, one text reply.
Each transport owns its own SDK client, so validators built with different
keys never share a credential.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from .config import ValidatorConfig
from .exceptions import ConfigurationError, TransportError
from .models import EncodedPayload

logger = logging.getLogger(__name__)


class ModelTransport(Protocol):
    """Anything that can send a prompt and a document and return text."""

    async def generate(self, prompt: str, payload: EncodedPayload) -> str: ...


class GeminiTransport:
    """Google Gemini adapter built on the ``google-genai`` SDK."""

    def __init__(self, config: ValidatorConfig) -> None:
        if not config.api_key:
            raise ConfigurationError(
                "Gemini API key is not configured. "
                "Please set GEMINI_API_KEY in environment variables."
            )

        from google import genai

        self.model_name = config.model_name
        self._client = genai.Client(api_key=config.api_key)

    async def generate(self, prompt: str, payload: EncodedPayload) -> str:
        """Send prompt + inline document; return the reply text.

        Raises:
            TransportError: the request failed or the reply carried no text.
        """
        from google.genai import types

        document_part = types.Part.from_bytes(
            data=payload.to_bytes(), mime_type=payload.content_type
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_name,
                contents=[prompt, document_part],
            )
        except Exception as e:
            raise TransportError(
                f"Gemini request failed: {e}",
                details={"model": self.model_name},
            ) from e

        text = _extract_response_text(response)
        if not text:
            raise TransportError(
                "Gemini returned an empty response",
                details={"model": self.model_name},
            )
        return text


def _extract_response_text(response: Any) -> str | None:
    """Read ``response.text``; blocked candidates yield None or raise."""
    try:
        return response.text
    except ValueError as e:
        logger.error("Gemini response has no text part: %s", e)
        return None
