"""Recording session and capture state machine.

``Recorder`` drives one ``Session`` at a time through
``idle -> recording -> stopping -> done``. While recording it collects
float32 blocks from a ``CaptureSource``; on stop it disconnects the source,
seals the session and packs it into a WAV ``Artifact``.

Auto-stop uses two timers: a periodic tick that tracks elapsed time and
stops once the configured maximum is reached, and a hard deadline at
``max + grace`` in case the tick stalls.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

import numpy as np

from kenai.core.exceptions import EncodingError, MicrophonePermissionError
from kenai.core.models import RecorderState
from kenai.core.utils import recording_filename
from kenai.services.audio.capture import CaptureSource
from kenai.services.audio.wav import encode_wav, frame_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A finished WAV recording."""

    data: bytes
    filename: str
    sample_rate: int
    channels: int = 1
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def content_type(self) -> str:
        return "audio/wav"


@dataclass
class Session:
    """One recording attempt and its captured sample buffers.

    ``buffers[c]`` holds the chunks of channel ``c`` in arrival order.
    A sealed session accepts no more chunks.
    """

    sample_rate: int
    max_duration_ms: int
    channels: int = 1
    started_at: float = field(default_factory=time.monotonic)
    buffers: list[list[np.ndarray]] = field(default_factory=list)
    sealed: bool = False

    def __post_init__(self) -> None:
        if not self.buffers:
            self.buffers = [[] for _ in range(self.channels)]

    @property
    def frames(self) -> int:
        return frame_count(self.buffers)

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000.0

    def append(self, channel_data: Sequence[np.ndarray]) -> None:
        """Store one captured block, one array per channel."""
        for c, samples in enumerate(channel_data[: self.channels]):
            self.buffers[c].append(np.asarray(samples, dtype=np.float32))

    def seal(self) -> None:
        self.sealed = True

    def to_artifact(self, now: datetime | None = None) -> Artifact:
        """Encode the captured audio.

        Raises:
            EncodingError: If the buffers are empty or malformed.
        """
        now = now or datetime.now()
        data = encode_wav(self.buffers, self.sample_rate, self.channels)
        return Artifact(
            data=data,
            filename=recording_filename(now),
            sample_rate=self.sample_rate,
            channels=self.channels,
            created_at=now,
        )


class Recorder:
    """Capture state machine for a single microphone.

    Args:
        source: Where audio blocks come from.
        max_duration_ms: Default auto-stop threshold.
        tick_ms: Interval of the elapsed-time tick.
        deadline_grace_ms: Extra time before the hard deadline fires.
        channels: Channels to capture and pack.
        on_done: Awaited with the artifact (or None) once a stop completes.
    """

    def __init__(
        self,
        source: CaptureSource,
        max_duration_ms: int = 60_000,
        tick_ms: int = 250,
        deadline_grace_ms: int = 600,
        channels: int = 1,
        on_done: Callable[["Artifact | None"], Awaitable[None]] | None = None,
    ) -> None:
        self._source = source
        self.max_duration_ms = max_duration_ms
        self._tick_interval = tick_ms / 1000.0
        self._deadline_grace_ms = deadline_grace_ms
        self._channels = channels
        self._on_done = on_done

        self.state = RecorderState.idle
        self.session: Session | None = None
        self.artifact: Artifact | None = None
        self.elapsed_ms: float = 0.0
        self.status: list[str] = []

        self._tick_task: asyncio.Task | None = None
        self._deadline: asyncio.TimerHandle | None = None
        self._stop_task: asyncio.Task | None = None
        self._done = asyncio.Event()
        self._background: set[asyncio.Task] = set()

    # -- status --

    def log_status(self, message: str) -> None:
        """Append a user-visible status line and mirror it to the logger."""
        self.status.append(message)
        logger.info("[recorder] %s", message)

    @property
    def is_busy(self) -> bool:
        return self.state in (RecorderState.recording, RecorderState.stopping)

    # -- start --

    async def start(self, max_duration_ms: int | None = None) -> Session | None:
        """Open the microphone and begin a new session.

        Returns:
            The new session, or None if a recording is already in progress.

        Raises:
            MicrophonePermissionError: If microphone access is denied.
                Any other failure to open the source is re-raised as well;
                in both cases the source is released and the state is idle.
        """
        if self.is_busy:
            logger.debug("start() ignored in state %s", self.state)
            return None

        if max_duration_ms is not None:
            self.max_duration_ms = max_duration_ms
        self.state = RecorderState.recording
        self.status = ["Requesting microphone..."]
        self.artifact = None
        self.elapsed_ms = 0.0
        self._done.clear()

        try:
            sample_rate = await self._source.open(self.on_frame)
        except Exception as exc:
            detail = exc.detail if isinstance(exc, MicrophonePermissionError) else str(exc)
            self.log_status(f"Error: {detail}")
            try:
                await self._source.release()
            finally:
                self.state = RecorderState.idle
                self._done.set()
            raise

        if self.state is not RecorderState.recording:
            # stopped or reset while the device was opening
            await self._source.release()
            return None

        self.session = Session(
            sample_rate=sample_rate,
            max_duration_ms=self.max_duration_ms,
            channels=self._channels,
        )
        self.log_status(f"Microphone OK, capturing at {sample_rate} Hz")

        loop = asyncio.get_running_loop()
        self._tick_task = loop.create_task(self._tick())
        self._deadline = loop.call_later(
            (self.max_duration_ms + self._deadline_grace_ms) / 1000.0,
            self._on_deadline,
        )
        self.log_status("Recording...")
        return self.session

    # -- capture --

    def on_frame(self, channel_data: Sequence[np.ndarray]) -> None:
        """Receive one captured block (one array per channel)."""
        session = self.session
        if session is None or session.sealed:
            return
        session.append(channel_data)

    # -- timers --

    async def _tick(self) -> None:
        while self.state is RecorderState.recording and self.session is not None:
            await asyncio.sleep(self._tick_interval)
            if self.session is None:
                return
            self.elapsed_ms = self.session.elapsed_ms
            if self.elapsed_ms >= self.max_duration_ms:
                self.log_status("Auto-stop")
                await self.stop()
                return

    def _on_deadline(self) -> None:
        self._deadline = None
        if self.state is not RecorderState.recording:
            return
        self.log_status("Auto-stop (hard deadline)")
        task = asyncio.get_running_loop().create_task(self.stop())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _cancel_timers(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        if self._tick_task is not None:
            # a tick that triggered this stop is cancelled too; stop() is shielded
            self._tick_task.cancel()
            self._tick_task = None

    # -- stop --

    async def stop(self) -> Artifact | None:
        """Stop recording and pack the captured audio.

        Concurrent callers share the same stop operation. Calling this while
        idle or done does nothing.

        Returns:
            The WAV artifact, or None if nothing was produced.
        """
        if self.state is RecorderState.stopping and self._stop_task is not None:
            return await asyncio.shield(self._stop_task)
        if self.state is not RecorderState.recording:
            logger.debug("stop() ignored in state %s", self.state)
            return None

        self.state = RecorderState.stopping
        self._stop_task = asyncio.get_running_loop().create_task(self._finish())
        return await asyncio.shield(self._stop_task)

    async def _finish(self) -> Artifact | None:
        session = self.session
        self._cancel_timers()
        self.log_status("Stopping recording...")

        artifact: Artifact | None = None
        try:
            try:
                await self._source.disconnect()
                # let blocks already queued on the loop reach the session
                await asyncio.sleep(0)
                if session is not None:
                    session.seal()
                    self.elapsed_ms = session.elapsed_ms
                    self.log_status("Building WAV...")
                    try:
                        artifact = session.to_artifact()
                    except EncodingError as exc:
                        logger.error("WAV packing failed: %s", exc.detail)
                        self.log_status(f"Packing error: {exc.detail}")
                    else:
                        self.log_status(f"WAV ready: {artifact.size / 1024 / 1024:.2f} MB")
            finally:
                await self._source.release()
                self.session = None
                self._stop_task = None
                self.artifact = artifact
                if self.state is RecorderState.stopping:
                    self.state = RecorderState.done if session is not None else RecorderState.idle

            if self._on_done is not None:
                await self._on_done(artifact)
        finally:
            self._done.set()
        return artifact

    # -- safety net --

    async def reset(self) -> None:
        """Force the idle state and release the microphone."""
        self._cancel_timers()
        if self.session is not None:
            self.session.seal()
            self.session = None
        try:
            await self._source.disconnect()
        finally:
            await self._source.release()
            self.state = RecorderState.idle
            self._done.set()

    async def wait_done(self) -> Artifact | None:
        """Wait until the current recording has stopped."""
        await self._done.wait()
        return self.artifact
