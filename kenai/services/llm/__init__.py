"""
LLM providers for recording summaries and trend ideas.
"""

from kenai.core.config import get_settings

from .base import BaseLLM

__all__ = ["BaseLLM", "create_llm"]


def create_llm(provider: str | None = None, **kwargs) -> BaseLLM:
    """Build the provider named by ``provider`` or by ``settings.llm_provider``.

    Raises:
        ValueError: If the provider name is not "claude" or "ollama".
    """
    name = (provider or get_settings().llm_provider).strip().lower()
    if name == "claude":
        from .claude import ClaudeLLM

        return ClaudeLLM(**kwargs)
    if name == "ollama":
        from .ollama import OllamaLLM

        return OllamaLLM(**kwargs)
    raise ValueError(f"Unknown LLM provider: {name!r} (expected 'claude' or 'ollama')")
