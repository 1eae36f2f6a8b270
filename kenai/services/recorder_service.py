"""Recorder orchestration: capture, local save, and cancellable upload.

``RecorderService`` owns the single ``Recorder`` of the process. Every
finished artifact is written to the local ``ArtifactStore`` (playback and
download) and then uploaded to Supabase Storage as a background
``asyncio.Task`` that can be cancelled with ``cancel_upload()``.

Usage::

    service = RecorderService.from_settings()
    await service.start()
    ...
    await service.stop()
"""

import asyncio
import logging

from kenai.core.config import Settings, get_settings
from kenai.core.exceptions import UploadError
from kenai.core.models import ArtifactInfo, RecorderState, RecorderStatusResponse
from kenai.core.utils import format_elapsed
from kenai.services.audio.capture import CaptureSource, create_capture_source
from kenai.services.audio.recorder import Artifact, Recorder
from kenai.services.storage.artifacts import ArtifactStore
from kenai.services.storage.supabase import SupabaseStorage

logger = logging.getLogger(__name__)


class RecorderService:
    """Glue between the recorder, local artifact files and the uploader.

    Args:
        source: Capture source handed to the recorder.
        store: Where finished artifacts are written.
        storage: Object-storage uploader.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        source: CaptureSource,
        store: ArtifactStore,
        storage: SupabaseStorage,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._store = store
        self._storage = storage
        self.recorder = Recorder(
            source,
            max_duration_ms=self._settings.recorder_max_duration_ms,
            tick_ms=self._settings.recorder_tick_ms,
            deadline_grace_ms=self._settings.recorder_deadline_grace_ms,
            channels=self._settings.recorder_channels,
            on_done=self._on_done,
        )
        self.share_url: str | None = None
        self._upload_task: asyncio.Task | None = None
        self._finished = asyncio.Event()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RecorderService":
        """Build a service wired to the real microphone and Supabase."""
        settings = settings or get_settings()
        source = create_capture_source(
            "microphone",
            channels=settings.recorder_channels,
            blocksize=settings.recorder_blocksize,
            device=settings.recorder_device,
        )
        return cls(
            source=source,
            store=ArtifactStore(settings.recordings_dir),
            storage=SupabaseStorage(),
            settings=settings,
        )

    @property
    def store(self) -> ArtifactStore:
        return self._store

    # -- recording --

    async def start(self, max_duration_ms: int | None = None) -> RecorderStatusResponse:
        """Start a recording; a no-op while one is already running.

        Raises:
            MicrophonePermissionError: If microphone access is denied.
        """
        if not self.recorder.is_busy:
            await self.cancel_upload()
            self.share_url = None
            self._finished.clear()
        await self.recorder.start(max_duration_ms)
        return self.status()

    async def stop(self) -> RecorderStatusResponse:
        """Stop the current recording (no-op when nothing is recording)."""
        await self.recorder.stop()
        return self.status()

    async def reset(self) -> None:
        """Return to a safe idle state after an unexpected failure."""
        await self.cancel_upload()
        await self.recorder.reset()
        self._finished.set()

    async def wait_finished(self) -> None:
        """Wait until the last recording is saved and its upload has ended."""
        await self._finished.wait()
        if self._upload_task is not None:
            await asyncio.gather(self._upload_task, return_exceptions=True)

    async def _on_done(self, artifact: Artifact | None) -> None:
        try:
            if artifact is None:
                return
            self._store.save(artifact.filename, artifact.data)
            if not self._storage.configured:
                self.recorder.log_status("Supabase not configured - skipping upload")
                return
            self._upload_task = asyncio.get_running_loop().create_task(self._upload(artifact))
        finally:
            self._finished.set()

    # -- upload --

    async def _upload(self, artifact: Artifact) -> None:
        self.recorder.log_status("Uploading...")
        try:
            self.share_url = await self._storage.upload(
                artifact.data, artifact.filename, artifact.content_type
            )
        except UploadError as exc:
            self.recorder.log_status(f"Supabase error: {exc.detail}")
        except asyncio.CancelledError:
            self.recorder.log_status("Upload cancelled")
            raise
        else:
            self.recorder.log_status("Upload to Supabase complete")

    @property
    def upload_in_progress(self) -> bool:
        return self._upload_task is not None and not self._upload_task.done()

    async def cancel_upload(self) -> bool:
        """Cancel the in-flight upload, if any. Returns True if one was cancelled."""
        task = self._upload_task
        if task is None or task.done():
            return False
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("Upload cancelled")
        return True

    # -- status --

    def status(self) -> RecorderStatusResponse:
        """Snapshot of the recorder for the API and the CLI."""
        recorder = self.recorder
        session = recorder.session
        elapsed_ms = session.elapsed_ms if session is not None else recorder.elapsed_ms

        artifact_info = None
        artifact = recorder.artifact
        if artifact is not None and recorder.state is RecorderState.done:
            playback_url = f"/api/recordings/{artifact.filename}"
            artifact_info = ArtifactInfo(
                filename=artifact.filename,
                size_bytes=artifact.size,
                playback_url=playback_url,
                download_url=f"{playback_url}?download=true",
                share_url=self.share_url,
            )

        return RecorderStatusResponse(
            state=recorder.state,
            elapsed=format_elapsed(elapsed_ms),
            max_duration_ms=recorder.max_duration_ms,
            sample_rate=session.sample_rate if session is not None else None,
            upload_in_progress=self.upload_in_progress,
            artifact=artifact_info,
            status=list(recorder.status),
        )
