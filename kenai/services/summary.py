"""Transcribe-and-summarize pipeline for uploaded recordings.

Downloads the audio behind a public URL, transcribes it with the
configured STT provider and asks the LLM for a short summary.
"""

import logging
import tempfile
from pathlib import Path

import httpx

from kenai.core.config import get_settings
from kenai.core.exceptions import AudioFetchError, KenaiError, SummarizationError
from kenai.core.models import SummarizeResponse
from kenai.services.llm import BaseLLM, create_llm
from kenai.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)


class SummaryService:
    """Turns a recording URL into ``{transcript, summary}``.

    Args:
        llm: LLM provider used for the summary.
        stt: STT provider used for the transcript.
        timeout: Download timeout in seconds.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        llm: BaseLLM,
        stt: BaseSTT,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._llm = llm
        self._stt = stt
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "SummaryService":
        settings = get_settings()
        return cls(
            llm=create_llm(provider=settings.llm_provider),
            stt=create_stt(provider=settings.whisper_provider),
        )

    async def fetch_audio(self, url: str) -> bytes:
        """Download the audio file.

        Raises:
            AudioFetchError: On a non-2xx response or a transport failure.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True
            ) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise AudioFetchError(f"Could not fetch audio file: {exc}") from exc
        if not resp.is_success:
            raise AudioFetchError(f"Could not fetch audio file: HTTP {resp.status_code}")
        return resp.content

    async def summarize_url(self, url: str) -> SummarizeResponse:
        """Download, transcribe and summarize one recording."""
        logger.info("Fetching audio from %s", url)
        audio = await self.fetch_audio(url)

        suffix = Path(httpx.URL(url).path).suffix or ".wav"
        with tempfile.TemporaryDirectory() as tmp:
            audio_path = Path(tmp) / f"audio{suffix}"
            audio_path.write_bytes(audio)
            logger.info("Audio fetched (%d bytes), transcribing", len(audio))
            result = await self._stt.transcribe(str(audio_path))

        transcript = result["text"]
        logger.info("Transcription done (%d chars)", len(transcript))

        try:
            summary = await self._llm.summarize(transcript)
        except KenaiError:
            raise
        except Exception as exc:
            raise SummarizationError(f"Summary generation failed: {exc}") from exc

        logger.info("Summary generated")
        return SummarizeResponse(transcript=transcript, summary=summary.strip())
