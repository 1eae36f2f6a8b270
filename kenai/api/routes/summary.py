"""
Summary REST endpoints.

Thin wrappers around the transcribe-and-summarize pipeline, PDF export of
summary text, and a mock e-mail endpoint that only logs the message.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from kenai.api.deps import get_summary_service
from kenai.core.exceptions import KenaiError
from kenai.core.models import (
    ExportPdfRequest,
    OkResponse,
    SummarizeRequest,
    SummarizeResponse,
    SummaryEmailRequest,
)
from kenai.services.export import text_to_pdf
from kenai.services.summary import SummaryService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summary"])


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    body: SummarizeRequest,
    service: SummaryService = Depends(get_summary_service),
):
    """Transcribe the recording at ``url`` and summarize it."""
    if not body.url:
        raise KenaiError(detail="No audio URL received", code="MISSING_URL", status_code=400)
    return await service.summarize_url(body.url)


@router.post("/export-pdf")
async def export_pdf(body: ExportPdfRequest):
    """Render summary text as a downloadable PDF."""
    pdf = text_to_pdf(body.text)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=summary.pdf"},
    )


@router.post("/send-summary-email", response_model=OkResponse)
async def send_summary_email(body: SummaryEmailRequest):
    """Mock mail delivery: log recipient and text, always succeed."""
    logger.info("Mail mock - recipient: %s", body.email)
    logger.info("Mail mock - text: %s", body.text)
    return OkResponse(ok=True)
