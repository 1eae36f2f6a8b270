"""Anthropic Claude provider (``anthropic.AsyncAnthropic``)."""

import logging

import anthropic

from kenai.core.config import get_settings
from kenai.services.llm.base import BaseLLM, transient_retry

logger = logging.getLogger(__name__)


class ClaudeLLM(BaseLLM):
    """Claude Messages API client.

    Args:
        api_key: Anthropic key (falls back to settings).
        model: Model id (falls back to settings).
        max_tokens: Answer length cap when a call does not set one.
        temperature: Default sampling temperature.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> None:
        settings = get_settings()
        super().__init__(language=settings.summary_language, temperature=temperature)
        self.model = model or settings.claude_model
        self.max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=api_key or settings.claude_api_key)

    @transient_retry
    async def _complete(self, prompt, system, temperature, max_tokens) -> str:
        request: dict = {
            "model": self.model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            message = await self._client.messages.create(**request)
        except anthropic.APITimeoutError as exc:
            logger.warning("Claude request timed out: %s", exc)
            raise TimeoutError(f"Claude request timed out: {exc}") from exc
        except (anthropic.APIConnectionError, anthropic.RateLimitError) as exc:
            logger.warning("Claude unavailable: %s", exc)
            raise ConnectionError(f"Claude unavailable: {exc}") from exc
        except anthropic.APIError as exc:
            logger.error("Claude API error: %s", exc)
            raise RuntimeError(f"Claude API error: {exc}") from exc

        return "".join(block.text for block in message.content if block.type == "text")
