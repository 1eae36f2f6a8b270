"""Shared pytest fixtures for the Kenai test suite.

Provides a fake capture source that tests feed by hand, mock LLM/STT
providers, and recorder/service instances wired to them.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import numpy as np
import pytest

from kenai.core.exceptions import MicrophonePermissionError
from kenai.services.audio.capture import CaptureSource

# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------


class FakeCaptureSource(CaptureSource):
    """In-memory capture source; tests push blocks with ``feed()``."""

    def __init__(self, sample_rate: int = 44100, deny: bool = False) -> None:
        self.sample_rate = sample_rate
        self.deny = deny
        self.deliver = None
        self.opened = 0
        self.disconnected = 0
        self.released = 0

    async def open(self, deliver) -> int:
        if self.deny:
            raise MicrophonePermissionError("Permission denied by user")
        self.opened += 1
        self.deliver = deliver
        return self.sample_rate

    async def disconnect(self) -> None:
        self.disconnected += 1
        self.deliver = None

    async def release(self) -> None:
        self.released += 1

    def feed(self, *channels: np.ndarray) -> None:
        """Deliver one block, one array per channel."""
        assert self.deliver is not None, "source is not open"
        self.deliver([np.asarray(c, dtype=np.float32) for c in channels])


@pytest.fixture
def source():
    return FakeCaptureSource()


@pytest.fixture
def denied_source():
    return FakeCaptureSource(deny=True)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def make_settings(**overrides):
    """Return a fake Settings object with fast recorder timers."""
    defaults = {
        "recorder_max_duration_ms": 60_000,
        "recorder_tick_ms": 10,
        "recorder_deadline_grace_ms": 600,
        "recorder_channels": 1,
        "recorder_blocksize": 4096,
        "recorder_device": None,
        "recordings_dir": "data/recordings",
        "summary_language": "Swedish",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


@pytest.fixture
def settings():
    return make_settings()


# ---------------------------------------------------------------------------
# LLM / STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm():
    """Create a mock LLM provider implementing the BaseLLM interface."""
    from kenai.services.llm.base import BaseLLM

    llm = AsyncMock(spec=BaseLLM)
    llm.summarize.return_value = "Kort sammanfattning."
    llm.generate.return_value = "ok"
    return llm


@pytest.fixture
def mock_stt():
    """Create a mock STT provider with a default transcribe response."""
    from kenai.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = {
        "text": "Det här är en testinspelning.",
        "language": "sv",
    }
    return stt


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sine_chunk():
    """4096 samples of a 440 Hz sine at half amplitude (44.1 kHz)."""
    t = np.arange(4096, dtype=np.float64) / 44100
    return (0.5 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)


@pytest.fixture
def settings_factory():
    """Build fake settings with per-test overrides."""
    return make_settings
