"""Transcript Analysis Routes — analyze a transcript; parse an uploaded .txt/.srt file.

Invariants:
    - Routes delegate to TranscriptAnalysisService / core.transcript_parser (no logic here)
    - The Anthropic client is a process-wide singleton shared by all requests
    - Uploads larger than max_upload_bytes are rejected before decoding

Design Decisions:
    - get_analysis_service is a FastAPI dependency so tests can override it
      with a service backed by a mock client
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from tagscript.config import get_settings
from tagscript.core.errors import TranscriptTooLargeError
from tagscript.core.transcript_parser import parse_upload
from tagscript.infrastructure.anthropic_client import ResilientAnthropicClient
from tagscript.schemas.analysis import AnalyzeRequest, ParsedTranscriptResponse
from tagscript.services.chunk_analyzer import ChunkAnalyzer
from tagscript.services.transcript_analysis import TranscriptAnalysisService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["analysis"])

_anthropic_client: ResilientAnthropicClient | None = None


def _get_anthropic_client() -> ResilientAnthropicClient:
    """Process-wide Anthropic client, reused across requests."""
    global _anthropic_client
    if _anthropic_client is None:
        settings = get_settings()
        _anthropic_client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
    return _anthropic_client


def get_analysis_service() -> TranscriptAnalysisService:
    """FastAPI dependency: analysis pipeline wired from settings."""
    settings = get_settings()
    analyzer = ChunkAnalyzer(
        _get_anthropic_client(),
        model=settings.analysis_model,
        temperature=settings.analysis_temperature,
        chunk_max_tokens=settings.chunk_response_max_tokens,
        single_max_tokens=settings.single_response_max_tokens,
    )
    return TranscriptAnalysisService(
        analyzer,
        chunk_max_tokens=settings.chunk_max_tokens,
        threshold_tokens=settings.chunk_threshold_tokens,
        max_concurrency=settings.analysis_max_concurrency,
    )


@router.post("/analyze")
async def analyze_transcript(
    body: AnalyzeRequest,
    service: TranscriptAnalysisService = Depends(get_analysis_service),
):
    """Analyze a transcript: tags, chapters, ad safety, topics, sentiment."""
    return await service.analyze(body.transcript, body.domain_timestamps())


@router.post("/transcripts/parse", response_model=ParsedTranscriptResponse)
async def parse_transcript_file(file: UploadFile = File(...)):
    """Extract text and timestamps from an uploaded .txt or .srt transcript."""
    limit = get_settings().max_upload_bytes
    raw = await file.read(limit + 1)
    if len(raw) > limit:
        raise TranscriptTooLargeError(len(raw), limit)

    filename = file.filename or ""
    parsed = parse_upload(filename, raw.decode("utf-8-sig", errors="replace"))
    logger.info(
        f"Parsed transcript upload '{filename}' "
        f"({len(parsed.text)} chars, {len(parsed.timestamps)} timestamps)",
    )
    return ParsedTranscriptResponse(
        filename=filename,
        text=parsed.text,
        timestamps=parsed.timestamps,
        has_timestamps=parsed.has_timestamps,
    )
