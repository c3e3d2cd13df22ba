"""
Tests for the Gemini transport adapter.

``google.genai.Client`` is monkeypatched, so no request ever leaves the
process.
"""

from __future__ import annotations

import pytest

from medical_doc_validator.config import ValidatorConfig
from medical_doc_validator.encoding import encode_bytes
from medical_doc_validator.exceptions import ConfigurationError, TransportError
from medical_doc_validator.transport import GeminiTransport


class _Response:
    def __init__(self, text: str | None = None, blocked: bool = False):
        self._text = text
        self._blocked = blocked

    @property
    def text(self) -> str | None:
        if self._blocked:
            raise ValueError("response was blocked")
        return self._text


class _FakeModels:
    def __init__(self, owner: "_FakeClient"):
        self.owner = owner

    async def generate_content(self, model, contents):
        self.owner.requests.append({"model": model, "contents": contents})
        if isinstance(_FakeClient.response, Exception):
            raise _FakeClient.response
        return _FakeClient.response


class _FakeAio:
    def __init__(self, owner: "_FakeClient"):
        self.models = _FakeModels(owner)


class _FakeClient:
    instances: list["_FakeClient"] = []
    response: object = None

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.requests: list[dict] = []
        self.aio = _FakeAio(self)
        _FakeClient.instances.append(self)


@pytest.fixture
def fake_genai(monkeypatch):
    _FakeClient.instances = []
    _FakeClient.response = _Response('{"isValid": true}')
    monkeypatch.setattr("google.genai.Client", _FakeClient)
    return _FakeClient


CONFIG = ValidatorConfig(api_key="secret", model_name="gemini-test")


class TestGeminiTransport:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            GeminiTransport(ValidatorConfig())

    def test_builds_own_client(self, fake_genai):
        transport = GeminiTransport(CONFIG)
        assert fake_genai.instances[0].api_key == "secret"
        assert transport.model_name == "gemini-test"

    @pytest.mark.asyncio
    async def test_sends_prompt_with_inline_document(self, fake_genai):
        transport = GeminiTransport(CONFIG)

        text = await transport.generate("PROMPT", encode_bytes(b"%PDF-1.7", "application/pdf"))

        assert text == '{"isValid": true}'
        request = fake_genai.instances[0].requests[0]
        assert request["model"] == "gemini-test"
        prompt, part = request["contents"]
        assert prompt == "PROMPT"
        assert part.inline_data.data == b"%PDF-1.7"
        assert part.inline_data.mime_type == "application/pdf"

    @pytest.mark.asyncio
    async def test_transports_keep_separate_credentials(self, fake_genai):
        first = GeminiTransport(ValidatorConfig(api_key="KEY-A"))
        second = GeminiTransport(ValidatorConfig(api_key="KEY-B"))

        await first.generate("a", encode_bytes(b"x", "image/png"))
        await second.generate("b", encode_bytes(b"y", "image/png"))

        client_a, client_b = fake_genai.instances
        assert client_a.api_key == "KEY-A"
        assert client_b.api_key == "KEY-B"
        assert [r["contents"][0] for r in client_a.requests] == ["a"]
        assert [r["contents"][0] for r in client_b.requests] == ["b"]

    @pytest.mark.asyncio
    async def test_sdk_failure_is_wrapped(self, fake_genai):
        fake_genai.response = ConnectionError("unreachable")
        transport = GeminiTransport(CONFIG)

        with pytest.raises(TransportError, match="unreachable") as exc:
            await transport.generate("p", encode_bytes(b"x", "image/png"))
        assert exc.value.details == {"model": "gemini-test"}

    @pytest.mark.asyncio
    async def test_blocked_response_is_transport_error(self, fake_genai):
        fake_genai.response = _Response(blocked=True)
        with pytest.raises(TransportError, match="empty response"):
            await GeminiTransport(CONFIG).generate("p", encode_bytes(b"x", "image/png"))

    @pytest.mark.asyncio
    async def test_missing_text_is_transport_error(self, fake_genai):
        fake_genai.response = _Response(None)
        with pytest.raises(TransportError):
            await GeminiTransport(CONFIG).generate("p", encode_bytes(b"x", "image/png"))
