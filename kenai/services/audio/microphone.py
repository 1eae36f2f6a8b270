"""PortAudio microphone capture via ``sounddevice``."""

import asyncio
import logging

import numpy as np
import sounddevice as sd

from kenai.core.exceptions import MicrophonePermissionError
from kenai.services.audio.capture import CaptureSource, FrameCallback

logger = logging.getLogger(__name__)


class SoundDeviceSource(CaptureSource):
    """Capture from a PortAudio input device.

    The PortAudio callback runs on the driver thread; every block is copied
    and handed to the event loop with ``call_soon_threadsafe`` so delivery
    order equals arrival order.

    Args:
        channels: Number of input channels to open.
        blocksize: Samples per callback block.
        device: Device name or index (None = system default input).
    """

    def __init__(
        self,
        channels: int = 1,
        blocksize: int = 4096,
        device: str | int | None = None,
    ) -> None:
        self._channels = channels
        self._blocksize = blocksize
        self._device = device
        self._stream: sd.InputStream | None = None

    async def open(self, deliver: FrameCallback) -> int:
        loop = asyncio.get_running_loop()

        def _callback(indata: np.ndarray, frames: int, time_info, status) -> None:
            if status:
                logger.warning("Audio callback status: %s", status)
            chunk = [indata[:, c].copy() for c in range(indata.shape[1])]
            loop.call_soon_threadsafe(deliver, chunk)

        try:
            info = sd.query_devices(self._device, kind="input")
            sample_rate = int(info["default_samplerate"])
            self._stream = sd.InputStream(
                samplerate=sample_rate,
                channels=self._channels,
                dtype="float32",
                blocksize=self._blocksize,
                device=self._device,
                callback=_callback,
            )
            self._stream.start()
        except (sd.PortAudioError, ValueError) as exc:
            await self.release()
            raise MicrophonePermissionError(f"Microphone unavailable: {exc}") from exc

        logger.info(
            "Input stream opened: %d Hz, %d channel(s), %d samples/block",
            sample_rate,
            self._channels,
            self._blocksize,
        )
        return sample_rate

    async def disconnect(self) -> None:
        if self._stream is not None and self._stream.active:
            # stop() waits for the callback in flight, so keep it off the loop
            await asyncio.to_thread(self._stream.stop)

    async def release(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()
            logger.debug("Input stream closed")
