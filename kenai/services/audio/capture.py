"""Capture source interface.

A capture source opens an input stream at the device's native sample rate
and delivers float32 blocks, one array per channel, to a callback running
on the asyncio event loop.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

import numpy as np

FrameCallback = Callable[[list[np.ndarray]], None]


class CaptureSource(ABC):
    """Interface for anything that can feed audio blocks to the recorder."""

    @abstractmethod
    async def open(self, deliver: FrameCallback) -> int:
        """Start capturing and return the active sample rate in Hz.

        Raises:
            MicrophonePermissionError: If the input device cannot be opened.
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Stop delivering blocks. No callback may fire after this returns."""

    @abstractmethod
    async def release(self) -> None:
        """Free the underlying device. Safe to call more than once."""


def create_capture_source(provider: str = "microphone", **kwargs) -> CaptureSource:
    """
    Factory function to create a capture source.

    Args:
        provider: Source name ("microphone" or "sounddevice").
        **kwargs: Source-specific configuration (channels, blocksize, device).

    Returns:
        CaptureSource implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider in ("microphone", "sounddevice"):
        from .microphone import SoundDeviceSource

        return SoundDeviceSource(**kwargs)
    raise ValueError(f"Unknown capture source: {provider}")
