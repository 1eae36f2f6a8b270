"""Integration test fixtures for Kenai.

Builds a fresh app per test with fake services pre-loaded on ``app.state``
and an ``httpx.AsyncClient`` talking to it over ASGI.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from kenai.api.app import create_app
from kenai.services.recorder_service import RecorderService
from kenai.services.storage import ArtifactStore, SupabaseStorage
from kenai.services.summary import SummaryService


@pytest.fixture
def store(tmp_path):
    return ArtifactStore(tmp_path / "recordings")


@pytest.fixture
def recorder_service(source, store, settings):
    # unconfigured storage: recordings are kept locally, no upload
    storage = SupabaseStorage(base_url="http://localhost", api_key="", bucket="audio", path="reviews")
    return RecorderService(source, store, storage, settings=settings)


@pytest.fixture
def app(recorder_service, mock_llm, mock_stt):
    """Create a fresh FastAPI application with fake services."""
    app = create_app()
    app.state.recorder_service = recorder_service
    app.state.summary_service = SummaryService(llm=mock_llm, stt=mock_stt)
    app.state.llm = mock_llm
    return app


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def lenient_client(app):
    """Client that returns 500 responses instead of re-raising app errors."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
