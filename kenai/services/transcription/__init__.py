"""
Speech-to-text for uploaded recordings.
"""

from kenai.core.config import get_settings

from .base import BaseSTT

__all__ = ["BaseSTT", "create_stt"]


def create_stt(provider: str | None = None, **kwargs) -> BaseSTT:
    """Build the provider named by ``provider`` or by ``settings.whisper_provider``.

    Raises:
        ValueError: If the provider name is not "local" or "whisper".
    """
    name = (provider or get_settings().whisper_provider).strip().lower()
    if name in ("local", "whisper"):
        from .whisper import WhisperSTT

        return WhisperSTT(**kwargs)
    raise ValueError(f"Unknown STT provider: {name!r} (expected 'local')")
