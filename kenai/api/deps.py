"""
Lazily created per-application services.

Services live on ``app.state`` and are built on first use, so importing the
app never touches the microphone or loads a model. Tests can pre-populate
``app.state`` with fakes.
"""

from fastapi import Request

from kenai.core.config import get_settings
from kenai.services.llm import BaseLLM, create_llm
from kenai.services.recorder_service import RecorderService
from kenai.services.summary import SummaryService


def get_recorder_service(request: Request) -> RecorderService:
    state = request.app.state
    if getattr(state, "recorder_service", None) is None:
        state.recorder_service = RecorderService.from_settings()
    return state.recorder_service


def get_summary_service(request: Request) -> SummaryService:
    state = request.app.state
    if getattr(state, "summary_service", None) is None:
        state.summary_service = SummaryService.from_settings()
    return state.summary_service


def get_llm(request: Request) -> BaseLLM:
    state = request.app.state
    if getattr(state, "llm", None) is None:
        state.llm = create_llm(provider=get_settings().llm_provider)
    return state.llm
