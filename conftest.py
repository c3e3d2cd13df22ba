"""Pytest configuration: ensures the project root is importable."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from medical_doc_validator.client import default_validator  # noqa: E402


class _NoNetworkTransport:
    def __init__(self, config):
        raise AssertionError("tests must not construct a real Gemini transport")


@pytest.fixture(autouse=True)
def _no_llm_calls(monkeypatch):
    """Prevent real Gemini calls and ambient credentials leaking into tests."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL_NAME", raising=False)
    default_validator.cache_clear()
    with patch("medical_doc_validator.client.GeminiTransport", _NoNetworkTransport), \
            patch("medical_doc_validator.config.load_dotenv", return_value=False):
        yield
    default_validator.cache_clear()
