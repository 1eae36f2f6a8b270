"""Speech-to-text interface used by the summary pipeline."""

from abc import ABC, abstractmethod


class BaseSTT(ABC):
    @abstractmethod
    async def transcribe(self, audio_path: str, language: str | None = None) -> dict:
        """Transcribe an audio file.

        Args:
            audio_path: Path to a WAV (or any format the backend decodes).
            language: ISO 639-1 code, or None to auto-detect.

        Returns:
            ``{"text": str, "language": str}``

        Raises:
            TranscriptionError: If the audio cannot be transcribed.
        """
