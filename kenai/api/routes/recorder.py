"""
Recorder REST endpoints.

Start/stop the microphone recording, report its status, cancel an in-flight
upload, and serve finished artifacts for playback or download.
All endpoints delegate to ``RecorderService``; no business logic here.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse

from kenai.api.deps import get_recorder_service
from kenai.core.models import OkResponse, RecorderStatusResponse, StartRecordingRequest
from kenai.services.recorder_service import RecorderService

router = APIRouter(tags=["recorder"])


@router.post("/recorder/start", response_model=RecorderStatusResponse)
async def start_recording(
    body: StartRecordingRequest | None = None,
    service: RecorderService = Depends(get_recorder_service),
):
    """Start a new recording (ignored while one is in progress)."""
    max_duration_ms = body.max_duration_ms if body else None
    return await service.start(max_duration_ms)


@router.post("/recorder/stop", response_model=RecorderStatusResponse)
async def stop_recording(service: RecorderService = Depends(get_recorder_service)):
    """Stop the current recording and pack it into a WAV file."""
    return await service.stop()


@router.get("/recorder/status", response_model=RecorderStatusResponse)
async def recorder_status(service: RecorderService = Depends(get_recorder_service)):
    """Current state, elapsed time, artifact links and status log."""
    return service.status()


@router.post("/recorder/upload/cancel", response_model=OkResponse)
async def cancel_upload(service: RecorderService = Depends(get_recorder_service)):
    """Abort the upload of the last recording, if it is still running."""
    return OkResponse(ok=await service.cancel_upload())


@router.get("/recordings/{filename}")
async def get_recording_audio(
    filename: str,
    download: bool = Query(False),
    service: RecorderService = Depends(get_recorder_service),
):
    """Serve a WAV artifact inline for playback, or as an attachment."""
    path = service.store.path_for(filename)
    return FileResponse(
        path,
        media_type="audio/wav",
        filename=filename,
        content_disposition_type="attachment" if download else "inline",
    )
