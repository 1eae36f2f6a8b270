"""Local transcription with faster-whisper.

Models are loaded on first use and shared between instances; decoding is
CPU-bound and runs in a worker thread.
"""

import asyncio
import logging
from functools import lru_cache

from faster_whisper import WhisperModel

from kenai.core.config import get_settings
from kenai.core.exceptions import TranscriptionError
from kenai.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


@lru_cache(maxsize=2)
def load_model(size: str, device: str, compute_type: str) -> WhisperModel:
    logger.info("Loading Whisper model %s (%s, %s)", size, device, compute_type)
    return WhisperModel(size, device=device, compute_type=compute_type)


class WhisperSTT(BaseSTT):
    """faster-whisper transcriber.

    Args:
        model_size: tiny, base, small, medium or large-v3 (falls back to settings).
        device: "cpu" or "cuda".
        compute_type: CTranslate2 compute type, e.g. "int8".
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        settings=None,
    ) -> None:
        settings = settings or get_settings()
        self.model_size = model_size or settings.whisper_model
        self.device = device
        self.compute_type = compute_type
        self.default_language = settings.whisper_default_language or None

    def _transcribe_sync(self, audio_path: str, language: str | None) -> dict:
        model = load_model(self.model_size, self.device, self.compute_type)
        segments, info = model.transcribe(audio_path, language=language, vad_filter=True)
        # segments is a lazy generator; decoding happens while joining
        text = " ".join(part for part in (seg.text.strip() for seg in segments) if part)
        return {"text": text, "language": info.language or language or "unknown"}

    async def transcribe(self, audio_path: str, language: str | None = None) -> dict:
        language = language or self.default_language
        try:
            result = await asyncio.to_thread(self._transcribe_sync, audio_path, language)
        except Exception as exc:
            raise TranscriptionError(f"Whisper transcription failed: {exc}") from exc
        logger.info("Transcribed %s (%s, %d chars)", audio_path, result["language"], len(result["text"]))
        return result
