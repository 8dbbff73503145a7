"""Transcript Chunking — splits long transcripts into bounded-size pieces for per-chunk analysis.

Invariants:
    - Every returned chunk is non-empty and stripped
    - Chunk order follows transcript order; no text is reordered or dropped
    - A chunk only exceeds max_chars when a single line/sentence is longer on its own
    - Timestamped transcripts split on line boundaries, preferring lines that open
      with a timestamp; plain transcripts split on sentence boundaries

Design Decisions:
    - Token estimate is len/4 (English average); no tokenizer dependency
    - Timestamp mode closes a chunk early at a timestamp once 70% full or past
      50 lines, so chapters tend to start at cue boundaries
    - Start/end minutes are rough (200 chars per minute), used only for display
"""

import math
import re

from tagscript.core.domain_types import TokenCount

CHARS_PER_TOKEN = 4
CHARS_PER_MINUTE = 200

_TIMESTAMP_LINE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?")
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

_EARLY_SPLIT_RATIO = 0.7
_EARLY_SPLIT_LINES = 50


def estimate_tokens(text: str) -> TokenCount:
    """Rough token estimate: 1 token ≈ 4 characters."""
    return TokenCount(math.ceil(len(text) / CHARS_PER_TOKEN))


def should_chunk(
    transcript: str, has_timestamps: bool, threshold_tokens: int = 6000,
) -> bool:
    """Chunked analysis for long transcripts OR whenever timestamps are present."""
    return has_timestamps or estimate_tokens(transcript) > threshold_tokens


def starts_with_timestamp(line: str) -> bool:
    return _TIMESTAMP_LINE.match(line) is not None


def split_transcript(
    transcript: str,
    max_tokens_per_chunk: int = 4000,
    has_timestamps: bool = False,
) -> list[str]:
    """Split a transcript into chunks of at most max_tokens_per_chunk (estimated)."""
    if not transcript.strip():
        return []
    max_chars = max_tokens_per_chunk * CHARS_PER_TOKEN
    if has_timestamps:
        return _split_at_timestamps(transcript, max_chars)
    return _split_at_sentences(transcript, max_chars)


def _split_at_timestamps(transcript: str, max_chars: int) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    length = 0

    for line in transcript.split("\n"):
        # length tracks the joined size, "\n" separators included
        added = len(line) + (1 if current else 0)
        if current and length + added > max_chars:
            _flush(chunks, current)
            current, length = [line], len(line)
        elif (
            current
            and starts_with_timestamp(line)
            and (length > max_chars * _EARLY_SPLIT_RATIO
                 or len(current) > _EARLY_SPLIT_LINES)
        ):
            _flush(chunks, current)
            current, length = [line], len(line)
        else:
            current.append(line)
            length += added
    _flush(chunks, current)

    # One oversized chunk (e.g. a single very long cue block): halve by lines
    if len(chunks) == 1 and len(chunks[0]) > max_chars * 2:
        lines = chunks[0].split("\n")
        mid = len(lines) // 2
        halves = ["\n".join(lines[:mid]).strip(), "\n".join(lines[mid:]).strip()]
        chunks = [h for h in halves if h]

    return chunks


def _split_at_sentences(transcript: str, max_chars: int) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    length = 0

    for sentence in _SENTENCE_BREAK.split(transcript):
        added = len(sentence) + (1 if current else 0)
        if current and length + added > max_chars:
            _flush(chunks, current, sep=" ")
            current, length = [sentence], len(sentence)
        else:
            current.append(sentence)
            length += added
    _flush(chunks, current, sep=" ")
    return chunks


def _flush(chunks: list[str], parts: list[str], sep: str = "\n") -> None:
    text = sep.join(parts).strip()
    if text:
        chunks.append(text)


def chunk_start_minutes(chunks: list[str]) -> list[int]:
    """Estimated start minute of each chunk from cumulative character position."""
    starts = []
    position = 0
    for chunk in chunks:
        starts.append(position // CHARS_PER_MINUTE)
        position += len(chunk)
    return starts


def estimate_end_minute(start_minute: int, chunk: str) -> int:
    return start_minute + math.ceil(len(chunk) / CHARS_PER_MINUTE)
