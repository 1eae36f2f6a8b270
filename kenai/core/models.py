"""
Pydantic v2 request / response models used across the API layer.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------


class RecorderState(StrEnum):
    """Capture state machine states."""

    idle = "idle"
    recording = "recording"
    stopping = "stopping"
    done = "done"


class StartRecordingRequest(BaseModel):
    """POST /api/recorder/start request body (optional)."""

    max_duration_ms: int | None = Field(default=None, gt=0)


class ArtifactInfo(BaseModel):
    """Metadata for a finished WAV artifact."""

    filename: str
    size_bytes: int
    playback_url: str
    download_url: str
    share_url: str | None = None


class RecorderStatusResponse(BaseModel):
    """Snapshot of the recorder returned by every recorder endpoint."""

    state: RecorderState
    elapsed: str = "00:00"
    max_duration_ms: int
    sample_rate: int | None = None
    upload_in_progress: bool = False
    artifact: ArtifactInfo | None = None
    status: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Summary / export / mail
# ---------------------------------------------------------------------------


class SummarizeRequest(BaseModel):
    """POST /api/summarize request body."""

    url: str | None = None


class SummarizeResponse(BaseModel):
    """Transcript of an uploaded recording plus its short summary."""

    transcript: str
    summary: str


class ExportPdfRequest(BaseModel):
    """POST /api/export-pdf request body."""

    text: str = ""


class SummaryEmailRequest(BaseModel):
    """POST /api/send-summary-email request body."""

    email: str = ""
    text: str = ""


class OkResponse(BaseModel):
    """Generic acknowledgement."""

    ok: bool = True


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------


class TrendIdea(BaseModel):
    """One short-video idea suggested for a niche."""

    title: str
    idea: str
    hashtags: list[str] = Field(default_factory=list)


class TrendsResponse(BaseModel):
    """GET /api/trends response."""

    platform: str
    country: str = "SE"
    items: list[TrendIdea] = Field(default_factory=list)
