"""Local Ollama provider (``ollama.AsyncClient``)."""

import logging

import httpx
import ollama

from kenai.core.config import get_settings
from kenai.services.llm.base import BaseLLM, transient_retry

logger = logging.getLogger(__name__)


class OllamaLLM(BaseLLM):
    """Chat client for a local Ollama server.

    Args:
        base_url: Server URL (falls back to settings).
        model: Model name, e.g. "llama3.2" (falls back to settings).
        temperature: Default sampling temperature.
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        temperature: float = 0.7,
    ) -> None:
        settings = get_settings()
        super().__init__(language=settings.summary_language, temperature=temperature)
        self.base_url = base_url or settings.ollama_base_url
        self.model = model or settings.ollama_model
        self._client = ollama.AsyncClient(host=self.base_url)

    @transient_retry
    async def _complete(self, prompt, system, temperature, max_tokens) -> str:
        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})
        options: dict = {"temperature": temperature}
        if max_tokens:
            options["num_predict"] = max_tokens

        try:
            response = await self._client.chat(model=self.model, messages=messages, options=options)
        except httpx.TimeoutException as exc:
            logger.warning("Ollama at %s timed out: %s", self.base_url, exc)
            raise TimeoutError(f"Ollama request timed out: {exc}") from exc
        except (ConnectionError, httpx.TransportError) as exc:
            logger.warning("Ollama at %s unreachable: %s", self.base_url, exc)
            raise ConnectionError(f"Ollama unreachable at {self.base_url}: {exc}") from exc
        except ollama.ResponseError as exc:
            logger.error("Ollama error (%s): %s", exc.status_code, exc.error)
            raise RuntimeError(f"Ollama error: {exc.error}") from exc

        return response.message.content or ""
