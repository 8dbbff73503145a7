"""Chunk Analyzer — one model call per transcript piece, parsed into an analysis dict.

Invariants:
    - Every call uses SYSTEM_PROMPT + a prompt from core/prompts.py
    - Returned dicts are parsed JSON objects (AnalysisParseError otherwise)
    - Chunk results carry chunkIndex, chunkLength, chunkStartTime, chunkEndTime
    - Every chapter in a chunk result is tagged with its 1-based chunk number
    - Failures are logged with the chunk position and re-raised unchanged
"""

import logging

from tagscript.core.chunking import estimate_end_minute
from tagscript.core.domain_types import Timestamp
from tagscript.core.errors import ErrorContext, TagScriptError
from tagscript.core.prompts import (
    SYSTEM_PROMPT, build_chunk_prompt, build_single_prompt,
)
from tagscript.core.response_parsing import parse_model_json
from tagscript.infrastructure.anthropic_client import (
    ResilientAnthropicClient, response_text,
)

logger = logging.getLogger(__name__)


class ChunkAnalyzer:
    """Sends transcript text to the model and parses the JSON analysis."""

    def __init__(
        self,
        anthropic_client: ResilientAnthropicClient,
        model: str,
        temperature: float = 0.3,
        chunk_max_tokens: int = 600,
        single_max_tokens: int = 800,
    ) -> None:
        self.client = anthropic_client
        self.model = model
        self.temperature = temperature
        self.chunk_max_tokens = chunk_max_tokens
        self.single_max_tokens = single_max_tokens

    async def analyze_chunk(
        self,
        chunk: str,
        index: int,
        total: int,
        start_minute: int = 0,
        has_timestamps: bool = False,
        timestamps: list[Timestamp] | None = None,
    ) -> dict:
        """Analyze chunk `index` of `total`; adds chunk position metadata."""
        context = ErrorContext(chunk_index=index, total_chunks=total)
        prompt = build_chunk_prompt(chunk, index, total, has_timestamps, timestamps)
        try:
            result = await self._complete(prompt, self.chunk_max_tokens, context)
        except TagScriptError as e:
            logger.error(
                f"Error analyzing chunk {index + 1}: {e.message}",
                extra={
                    "chunk_index": index, "total_chunks": total,
                    "error_code": e.code,
                },
            )
            raise

        if isinstance(result.get("chapters"), list):
            result["chapters"] = [
                {**chapter, "chunk": index + 1}
                for chapter in result["chapters"]
                if isinstance(chapter, dict)
            ]
        return {
            **result,
            "chunkIndex": index,
            "chunkLength": len(chunk),
            "chunkStartTime": start_minute,
            "chunkEndTime": estimate_end_minute(start_minute, chunk),
        }

    async def analyze_single(
        self,
        transcript: str,
        has_timestamps: bool = False,
        timestamps: list[Timestamp] | None = None,
    ) -> dict:
        """Analyze a whole transcript in one call."""
        prompt = build_single_prompt(transcript, has_timestamps, timestamps)
        return await self._complete(prompt, self.single_max_tokens, ErrorContext())

    async def _complete(
        self, prompt: str, max_tokens: int, context: ErrorContext,
    ) -> dict:
        response = await self.client.create_message(
            model=self.model,
            max_tokens=max_tokens,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            context=context,
        )
        return parse_model_json(response_text(response), context=context)
