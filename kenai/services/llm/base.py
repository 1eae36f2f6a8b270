"""
LLM provider interface.

Providers implement a single ``_complete()`` call; ``generate()`` (trend
ideas, connectivity checks) and ``summarize()`` (recording summaries) are
built on top of it so every provider phrases the summary request the same
way.
"""

from abc import ABC, abstractmethod

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

# Providers translate SDK errors into ConnectionError / TimeoutError so this
# policy applies to all of them.
transient_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=16),
    retry=retry_if_exception_type((ConnectionError, TimeoutError)),
    reraise=True,
)

SUMMARY_TEMPERATURE = 0.3


def summary_system_prompt(language: str) -> str:
    return (
        f"You are an assistant that writes short, clear summaries in {language}. "
        "Be concrete and simple. Output plain text only."
    )


class BaseLLM(ABC):
    """Common surface of the Claude and Ollama providers.

    Args:
        language: Language summaries are written in.
        temperature: Default sampling temperature for ``generate()``.
    """

    def __init__(self, language: str, temperature: float = 0.7) -> None:
        self.language = language
        self.temperature = temperature

    @abstractmethod
    async def _complete(
        self,
        prompt: str,
        system: str | None,
        temperature: float,
        max_tokens: int | None,
    ) -> str:
        """Send one prompt and return the model's text.

        Raises:
            ConnectionError: Server unreachable or rate limited (retried).
            TimeoutError: Request timed out (retried).
            RuntimeError: Any other provider error.
        """

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Free-form completion."""
        if temperature is None:
            temperature = self.temperature
        return await self._complete(prompt, system, temperature, max_tokens)

    async def summarize(self, transcript: str, language: str | None = None) -> str:
        """Short plain-text summary of a recording transcript."""
        system = summary_system_prompt(language or self.language)
        return await self._complete(transcript, system, SUMMARY_TEMPERATURE, None)
