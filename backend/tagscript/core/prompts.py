"""Analysis Prompts — builds the chunk and single-pass prompts sent to the model.

Invariants:
    - Both prompts request the same JSON keys (tags, chapters, ad_safety,
      ad_safety_reason, key_topics, sentiment)
    - With timestamps: chapters carry "start" chosen from the supplied list (HH:MM:SS)
    - Without timestamps: chapters carry only "summary"
"""

from tagscript.core.domain_types import AdSafety, Timestamp
from tagscript.core.timestamps import normalize_to_hhmmss

SYSTEM_PROMPT = (
    "You are a content analysis expert. Always return valid JSON format."
)

_SAFETY_CHOICES = " or ".join(f'"{s.value}"' for s in AdSafety)

# LLM prompt templates (str.format): literal braces doubled.
_SCHEMA_TEMPLATE = """{{
  "tags": [{tags}],
  "chapters": [
{chapters}
  ],
  "ad_safety": {safety},
  "ad_safety_reason": "Specific reason based on content found",
  "key_topics": [{topics}],
  "sentiment": "positive" or "neutral" or "negative"
}}"""

_CHUNK_TEMPLATE = """Analyze this transcript chunk (part {part} of {total}) and return a JSON response with the following structure:

{schema}

Guidelines:
- Extract 3-4 relevant content themes/tags that describe the main topics discussed (e.g., "Financial Disputes", "Legal Proceedings", "Business Strategy", "Personal Branding")
- Create 1-2 chapter summaries {chapter_rule}
- For ad safety, classify this chunk and provide a specific reason based on the actual content found
- Identify 2-3 key topics discussed
- Assess overall sentiment of this chunk

{timestamp_rule}

Transcript chunk to analyze:
{text}

Return only valid JSON:"""

_SINGLE_TEMPLATE = """Analyze this transcript and return a JSON response with the following structure:

{schema}

Guidelines:
- Extract 4-6 relevant content themes/tags that describe the main topics discussed (e.g., "Financial Disputes", "Legal Proceedings", "Business Strategy", "Personal Branding")
- Create 3-6 chapter summaries {chapter_rule}
- For ad safety, classify as:
  * ✅ Safe: Family-friendly, no controversial content
  * ⚠️ Needs Review: Some mature themes, mild language, or sensitive topics
  * ❌ Unsafe: Explicit content, strong language, or highly controversial topics
- Provide a specific reason for the ad safety classification based on actual content found
- Identify 3-5 key topics discussed
- Assess overall sentiment

{timestamp_rule}

Transcript to analyze:
{text}

Return only valid JSON:"""

_SAMPLE_STARTS = ("00:00:00", "00:05:30", "00:12:45")


def _schema(n_tags: int, n_chapters: int, n_topics: int, has_timestamps: bool) -> str:
    tags = ", ".join(f'"tag{i}"' for i in range(1, n_tags + 1))
    topics = ", ".join(f'"topic{i}"' for i in range(1, n_topics + 1))
    if has_timestamps:
        rows = [
            f'    {{"start": "{_SAMPLE_STARTS[i]}", "summary": "Brief chapter summary"}}'
            for i in range(n_chapters)
        ]
    else:
        rows = ['    {"summary": "Brief chapter summary"}'] * n_chapters
    return _SCHEMA_TEMPLATE.format(
        tags=tags, chapters=",\n".join(rows), safety=_SAFETY_CHOICES, topics=topics,
    )


def _chapter_rule(has_timestamps: bool) -> str:
    if has_timestamps:
        return "with timestamps from the provided timestamp list in hh:mm:ss format"
    return 'WITHOUT ANY TIMESTAMPS - do not include "start" field in chapters'


def _timestamp_rule(has_timestamps: bool, timestamps: list[Timestamp] | None) -> str:
    if has_timestamps and timestamps:
        allowed = ", ".join(normalize_to_hhmmss(t["start"]) for t in timestamps)
        return f"IMPORTANT: Use only these timestamps in hh:mm:ss format: {allowed}"
    return 'IMPORTANT: Do NOT include any timestamps in chapters. Only include "summary" field.'


def build_chunk_prompt(
    chunk: str,
    index: int,
    total: int,
    has_timestamps: bool = False,
    timestamps: list[Timestamp] | None = None,
) -> str:
    """Prompt for one chunk (part index+1 of total) of a chunked analysis."""
    return _CHUNK_TEMPLATE.format(
        part=index + 1,
        total=total,
        schema=_schema(3, 1, 2, has_timestamps),
        chapter_rule=_chapter_rule(has_timestamps),
        timestamp_rule=_timestamp_rule(has_timestamps, timestamps),
        text=chunk,
    )


def build_single_prompt(
    transcript: str,
    has_timestamps: bool = False,
    timestamps: list[Timestamp] | None = None,
) -> str:
    """Prompt for analyzing a whole (short) transcript in one call."""
    return _SINGLE_TEMPLATE.format(
        schema=_schema(4, 3, 3, has_timestamps),
        chapter_rule=_chapter_rule(has_timestamps),
        timestamp_rule=_timestamp_rule(has_timestamps, timestamps),
        text=transcript,
    )
