"""
Kenai exception hierarchy.

All application-specific exceptions inherit from KenaiError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class KenaiError(Exception):
    """Base exception for all Kenai errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "KENAI_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class MicrophonePermissionError(KenaiError, PermissionError):
    """Raised when the platform or the user denies microphone access."""

    def __init__(self, detail: str = "Microphone access denied") -> None:
        super().__init__(
            detail=detail,
            code="MICROPHONE_DENIED",
            status_code=403,
        )


class EncodingError(KenaiError):
    """Raised when captured buffers cannot be packed into a WAV artifact."""

    def __init__(self, detail: str = "WAV packing failed") -> None:
        super().__init__(
            detail=detail,
            code="ENCODING_ERROR",
            status_code=500,
        )


class UploadError(KenaiError):
    """Raised when the object-storage upload fails (non-2xx or network)."""

    def __init__(self, detail: str = "Upload failed") -> None:
        super().__init__(
            detail=detail,
            code="UPLOAD_ERROR",
            status_code=502,
        )


class AudioFetchError(KenaiError):
    """Raised when a remote audio file cannot be downloaded."""

    def __init__(self, detail: str = "Could not fetch audio file") -> None:
        super().__init__(
            detail=detail,
            code="AUDIO_FETCH_ERROR",
            status_code=502,
        )


class TranscriptionError(KenaiError):
    """Raised when STT processing fails."""

    def __init__(self, detail: str = "Transcription failed") -> None:
        super().__init__(
            detail=detail,
            code="TRANSCRIPTION_ERROR",
            status_code=500,
        )


class SummarizationError(KenaiError):
    """Raised when LLM summarization fails."""

    def __init__(self, detail: str = "Summarization failed") -> None:
        super().__init__(
            detail=detail,
            code="SUMMARIZATION_ERROR",
            status_code=500,
        )


class RecordingNotFoundError(KenaiError):
    """Raised when a stored recording artifact does not exist."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            detail=f"Recording not found: {filename}",
            code="RECORDING_NOT_FOUND",
            status_code=404,
        )


class ExportError(KenaiError):
    """Raised when PDF export fails."""

    def __init__(self, detail: str = "Export failed") -> None:
        super().__init__(detail=detail, code="EXPORT_ERROR", status_code=500)


class ReelError(KenaiError):
    """Raised when ffmpeg cannot build a reel from the given clips."""

    def __init__(self, detail: str = "Reel build failed") -> None:
        super().__init__(detail=detail, code="REEL_ERROR", status_code=500)
