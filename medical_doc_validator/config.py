"""
Configuration for the validation client.

Read once at startup from the environment (and a local .env file, if any),
then passed explicitly into MedicalDocumentValidator. A missing API key is
not fatal here: it is logged, and each validation call then resolves to a
negative result instead of contacting the model.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-1.5-flash"


class ValidatorConfig(BaseModel):
    """Credential and model selection for the Gemini client."""

    api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "ValidatorConfig":
        """Build a config from GEMINI_API_KEY / GEMINI_MODEL_NAME."""
        if load_dotenv_file:
            load_dotenv()

        config = cls(
            api_key=os.environ.get("GEMINI_API_KEY") or None,
            model_name=os.environ.get("GEMINI_MODEL_NAME") or DEFAULT_MODEL_NAME,
        )
        if not config.is_configured:
            logger.warning(
                "GEMINI_API_KEY not found in environment variables. "
                "Document validation will fail."
            )
        return config
