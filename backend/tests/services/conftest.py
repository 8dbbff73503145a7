"""Service test fixtures — analysis service wired to a mock client + FastAPI test client.

Invariants:
    - No test reaches the real Anthropic API
    - client fixture overrides get_analysis_service with whatever service the test builds
    - Small chunk sizes so chunking is exercised with short transcripts
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tagscript.api.routes.analysis import get_analysis_service
from tagscript.main import app
from tagscript.services.chunk_analyzer import ChunkAnalyzer
from tagscript.services.transcript_analysis import TranscriptAnalysisService


@pytest.fixture
def make_service():
    """Factory: TranscriptAnalysisService backed by the given mock client."""

    def _build(mock_client, chunk_max_tokens=50, threshold_tokens=100):
        analyzer = ChunkAnalyzer(mock_client, model="test-model")
        return TranscriptAnalysisService(
            analyzer,
            chunk_max_tokens=chunk_max_tokens,
            threshold_tokens=threshold_tokens,
            max_concurrency=4,
        )

    return _build


@pytest.fixture
def service_override():
    """Holder the test fills with a TranscriptAnalysisService."""
    holder = {}
    app.dependency_overrides[get_analysis_service] = lambda: holder["service"]
    yield holder
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
