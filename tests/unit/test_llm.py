"""Tests for the LLM layer: shared summary/generate surface, providers, factory.

Provider SDK clients are replaced with mocks; tenacity's back-off is set to
zero so retry tests run instantly.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import ollama
import pytest
from tenacity import wait_none

from kenai.services.llm import create_llm
from kenai.services.llm.base import SUMMARY_TEMPERATURE, BaseLLM
from kenai.services.llm.claude import ClaudeLLM
from kenai.services.llm.ollama import OllamaLLM

SETTINGS = SimpleNamespace(
    llm_provider="ollama",
    claude_api_key="sk-test-key",
    claude_model="claude-sonnet-4-20250514",
    ollama_base_url="http://localhost:11434",
    ollama_model="llama3.2",
    summary_language="Swedish",
)


@pytest.fixture(autouse=True)
def _no_backoff(monkeypatch):
    monkeypatch.setattr(ClaudeLLM._complete.retry, "wait", wait_none())
    monkeypatch.setattr(OllamaLLM._complete.retry, "wait", wait_none())


# ---------------------------------------------------------------------------
# Shared surface
# ---------------------------------------------------------------------------


class RecordingLLM(BaseLLM):
    """Provider stub that remembers every completion request."""

    def __init__(self) -> None:
        super().__init__(language="Swedish", temperature=0.6)
        self.calls = []

    async def _complete(self, prompt, system, temperature, max_tokens):
        self.calls.append((prompt, system, temperature, max_tokens))
        return "svar"


class TestBaseLLM:
    async def test_generate_uses_default_temperature(self):
        llm = RecordingLLM()

        assert await llm.generate("hej") == "svar"
        assert llm.calls == [("hej", None, 0.6, None)]

    async def test_generate_forwards_options(self):
        llm = RecordingLLM()

        await llm.generate("idéer", system="expert", temperature=0.8, max_tokens=50)

        assert llm.calls == [("idéer", "expert", 0.8, 50)]

    async def test_summarize_sends_transcript_with_language_prompt(self):
        llm = RecordingLLM()

        await llm.summarize("Vi pratade om budgeten.")

        prompt, system, temperature, _ = llm.calls[0]
        assert prompt == "Vi pratade om budgeten."
        assert "in Swedish" in system
        assert "plain text" in system
        assert temperature == SUMMARY_TEMPERATURE

    async def test_summarize_language_override(self):
        llm = RecordingLLM()

        await llm.summarize("text", language="English")

        assert "in English" in llm.calls[0][1]


# ---------------------------------------------------------------------------
# Claude
# ---------------------------------------------------------------------------


def _claude_message(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


@pytest.fixture
def claude():
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=_claude_message("Kort sammanfattning."))
    with (
        patch("kenai.services.llm.claude.get_settings", return_value=SETTINGS),
        patch("kenai.services.llm.claude.anthropic.AsyncAnthropic", return_value=client) as cls,
    ):
        llm = ClaudeLLM()
    cls.assert_called_once_with(api_key="sk-test-key")
    return llm, client.messages.create


class TestClaudeLLM:
    async def test_summary_request(self, claude):
        llm, create = claude

        assert await llm.summarize("transkript") == "Kort sammanfattning."

        request = create.call_args.kwargs
        assert request["model"] == "claude-sonnet-4-20250514"
        assert request["messages"] == [{"role": "user", "content": "transkript"}]
        assert "Swedish" in request["system"]
        assert request["temperature"] == SUMMARY_TEMPERATURE
        assert request["max_tokens"] == 1024

    async def test_generate_without_system(self, claude):
        llm, create = claude

        await llm.generate("ping", max_tokens=10)

        request = create.call_args.kwargs
        assert "system" not in request
        assert request["max_tokens"] == 10

    async def test_joins_text_blocks(self, claude):
        llm, create = claude
        create.return_value = _claude_message("Del ett. ", "Del två.")

        assert await llm.generate("x") == "Del ett. Del två."

    async def test_connection_error_retried_then_raised(self, claude):
        llm, create = claude
        create.side_effect = anthropic.APIConnectionError(request=MagicMock())

        with pytest.raises(ConnectionError, match="Claude unavailable"):
            await llm.generate("x")
        assert create.await_count == 3

    async def test_timeout_translated(self, claude):
        llm, create = claude
        create.side_effect = anthropic.APITimeoutError(request=MagicMock())

        with pytest.raises(TimeoutError):
            await llm.summarize("x")

    async def test_rate_limit_is_transient(self, claude):
        llm, create = claude
        create.side_effect = [
            anthropic.RateLimitError(
                message="Rate limit exceeded",
                response=MagicMock(status_code=429, headers={}),
                body=None,
            ),
            _claude_message("ok"),
        ]

        assert await llm.generate("x") == "ok"

    async def test_status_error_not_retried(self, claude):
        llm, create = claude
        create.side_effect = anthropic.BadRequestError(
            message="bad model",
            response=MagicMock(status_code=400, headers={}),
            body=None,
        )

        with pytest.raises(RuntimeError, match="Claude API error"):
            await llm.generate("x")
        assert create.await_count == 1


# ---------------------------------------------------------------------------
# Ollama
# ---------------------------------------------------------------------------


@pytest.fixture
def local_llm():
    client = MagicMock()
    client.chat = AsyncMock(
        return_value=SimpleNamespace(message=SimpleNamespace(content="Kort sammanfattning."))
    )
    with (
        patch("kenai.services.llm.ollama.get_settings", return_value=SETTINGS),
        patch("kenai.services.llm.ollama.ollama.AsyncClient", return_value=client) as cls,
    ):
        llm = OllamaLLM()
    cls.assert_called_once_with(host="http://localhost:11434")
    return llm, client.chat


class TestOllamaLLM:
    async def test_summary_request(self, local_llm):
        llm, chat = local_llm

        assert await llm.summarize("transkript") == "Kort sammanfattning."

        request = chat.call_args.kwargs
        assert request["model"] == "llama3.2"
        system, user = request["messages"]
        assert system["role"] == "system" and "Swedish" in system["content"]
        assert user == {"role": "user", "content": "transkript"}
        assert request["options"] == {"temperature": SUMMARY_TEMPERATURE}

    async def test_max_tokens_maps_to_num_predict(self, local_llm):
        llm, chat = local_llm

        await llm.generate("ping", max_tokens=10)

        request = chat.call_args.kwargs
        assert request["messages"] == [{"role": "user", "content": "ping"}]
        assert request["options"]["num_predict"] == 10

    async def test_server_down_retried_then_raised(self, local_llm):
        llm, chat = local_llm
        chat.side_effect = ConnectionError("Connection refused")

        with pytest.raises(ConnectionError, match="Ollama unreachable"):
            await llm.generate("x")
        assert chat.await_count == 3

    async def test_timeout_translated(self, local_llm):
        llm, chat = local_llm
        chat.side_effect = httpx.ReadTimeout("slow")

        with pytest.raises(TimeoutError, match="timed out"):
            await llm.generate("x")

    async def test_response_error(self, local_llm):
        llm, chat = local_llm
        chat.side_effect = ollama.ResponseError("model 'llama3.2' not found", status_code=404)

        with pytest.raises(RuntimeError, match="not found"):
            await llm.summarize("x")
        assert chat.await_count == 1


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestCreateLLM:
    def test_provider_from_settings(self):
        with (
            patch("kenai.services.llm.get_settings", return_value=SETTINGS),
            patch("kenai.services.llm.ollama.get_settings", return_value=SETTINGS),
            patch("kenai.services.llm.ollama.ollama.AsyncClient"),
        ):
            assert isinstance(create_llm(), OllamaLLM)

    def test_explicit_provider(self):
        with (
            patch("kenai.services.llm.claude.get_settings", return_value=SETTINGS),
            patch("kenai.services.llm.claude.anthropic.AsyncAnthropic"),
        ):
            assert isinstance(create_llm(" Claude "), ClaudeLLM)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm("openai")
