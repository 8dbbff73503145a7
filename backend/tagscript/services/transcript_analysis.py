"""Transcript Analysis — chooses single vs chunked analysis and assembles the final report.

Invariants:
    - Empty/whitespace transcripts rejected before any model call
    - Chunked path when estimated tokens exceed the threshold OR timestamps are present
    - Chunk calls run concurrently (bounded by max_concurrency); results keep chunk order
    - Any chunk failure fails the whole request (no partial reports) and
      cancels the chunk calls still in flight
    - Report always has tags, chapters, ad_safety or IncompleteAnalysisError is raised
    - Chapters never carry start/end when no timestamps were supplied
"""

import asyncio
import logging

from tagscript.core.aggregation import combine_chunk_results, strip_chapter_times
from tagscript.core.chunking import (
    chunk_start_minutes, estimate_tokens, should_chunk, split_transcript,
)
from tagscript.core.dashboard import build_dashboard
from tagscript.core.domain_types import AnalysisMethod, Timestamp
from tagscript.core.errors import EmptyTranscriptError, IncompleteAnalysisError
from tagscript.core.timestamps import align_chapters_to_timestamps
from tagscript.services.chunk_analyzer import ChunkAnalyzer

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("tags", "chapters", "ad_safety")


class TranscriptAnalysisService:
    """Runs the analysis pipeline for one transcript."""

    def __init__(
        self,
        analyzer: ChunkAnalyzer,
        chunk_max_tokens: int = 4000,
        threshold_tokens: int = 6000,
        max_concurrency: int = 8,
    ) -> None:
        self.analyzer = analyzer
        self.chunk_max_tokens = chunk_max_tokens
        self.threshold_tokens = threshold_tokens
        self.max_concurrency = max(1, max_concurrency)

    async def analyze(
        self, transcript: str, timestamps: list[Timestamp] | None = None,
    ) -> dict:
        if not transcript or not transcript.strip():
            raise EmptyTranscriptError()

        timestamps = timestamps or []
        has_timestamps = bool(timestamps)
        tokens = estimate_tokens(transcript)

        if should_chunk(transcript, has_timestamps, self.threshold_tokens):
            reason = "Timestamps detected" if has_timestamps else "Long transcript detected"
            logger.info(
                f"{reason} ({tokens} tokens). Using chunked analysis.",
                extra={"analysis_method": AnalysisMethod.CHUNKED.value},
            )
            result = await self._analyze_chunked(transcript, timestamps)
        else:
            logger.info(
                f"Short transcript detected ({tokens} tokens). Using single analysis.",
                extra={"analysis_method": AnalysisMethod.SINGLE.value},
            )
            result = await self._analyze_single(transcript, timestamps)

        missing = [k for k in _REQUIRED_KEYS if result.get(k) in (None, "")]
        if missing:
            raise IncompleteAnalysisError(missing)

        result["dashboard"] = build_dashboard(result)
        return result

    async def _analyze_chunked(
        self, transcript: str, timestamps: list[Timestamp],
    ) -> dict:
        has_timestamps = bool(timestamps)
        chunks = split_transcript(transcript, self.chunk_max_tokens, has_timestamps)
        starts = chunk_start_minutes(chunks)
        logger.info(
            f"Split into {len(chunks)} chunks for analysis",
            extra={"total_chunks": len(chunks)},
        )
        logger.debug(
            "Chunk sizes: " + ", ".join(
                f"Chunk {i + 1}: {len(c)} chars" for i, c in enumerate(chunks)
            ),
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(index: int, chunk: str) -> dict:
            async with semaphore:
                return await self.analyzer.analyze_chunk(
                    chunk, index, len(chunks), starts[index],
                    has_timestamps, timestamps,
                )

        tasks = [asyncio.ensure_future(run(i, c)) for i, c in enumerate(chunks)]
        try:
            chunk_results = list(await asyncio.gather(*tasks))
        except BaseException:
            # First failure fails the request: stop the remaining chunk calls
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        if not has_timestamps:
            for chunk in chunk_results:
                if isinstance(chunk.get("chapters"), list):
                    chunk["chapters"] = strip_chapter_times(chunk["chapters"])

        result = combine_chunk_results(chunk_results, transcript, timestamps)
        if has_timestamps:
            result["chapters"] = align_chapters_to_timestamps(
                result["chapters"], timestamps,
            )
        result["warning"] = (
            f"Transcript analyzed in {len(chunks)} chunks for comprehensive coverage"
        )
        result["analysis_method"] = AnalysisMethod.CHUNKED.value
        return result

    async def _analyze_single(
        self, transcript: str, timestamps: list[Timestamp],
    ) -> dict:
        result = await self.analyzer.analyze_single(
            transcript, bool(timestamps), timestamps,
        )
        # Timestamped transcripts always take the chunked path
        if isinstance(result.get("chapters"), list):
            result["chapters"] = strip_chapter_times(result["chapters"])

        result["analysis_method"] = AnalysisMethod.SINGLE.value
        result["original_length"] = len(transcript)
        result["analyzed_length"] = len(transcript)
        return result
