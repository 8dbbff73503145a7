"""Result Aggregation — merges per-chunk model results into one transcript report.

Invariants:
    - Tags/topics ranked by frequency across chunks; ties keep first-seen order
    - Ad safety is the most restrictive label seen (worst case wins)
    - Sentiment is a majority vote; ties resolve positive > neutral > negative
    - Chapters concatenated in chunk order, each tagged with its 1-based chunk number
    - Chapters carry no start/end when the transcript had no timestamps

Design Decisions:
    - Rollup starts at Needs Review and only a strictly worse label replaces it,
      so an all-Safe transcript still reports Needs Review (conservative default)
    - Unknown safety labels score as Needs Review; unknown sentiments are ignored
"""

from collections import Counter
from collections.abc import Iterable

from tagscript.core.domain_types import AdSafety, Sentiment, Timestamp

TAGS_LIMIT = 6
TOPICS_LIMIT = 5

_DEFAULT_SAFETY_REASON = "Content requires review"


def rank_by_frequency(lists: Iterable[list | None], limit: int) -> list[str]:
    """Top `limit` items by occurrence count across all lists."""
    counts: Counter[str] = Counter()
    for items in lists:
        if not isinstance(items, list):
            continue
        for item in items:
            if isinstance(item, str) and item.strip():
                counts[item] += 1
    # Counter.most_common is stable: equal counts stay in insertion order
    return [item for item, _ in counts.most_common(limit)]


def rollup_ad_safety(chunk_results: list[dict]) -> tuple[str, str]:
    """Most restrictive (label, reason) across chunks."""
    safety = AdSafety.NEEDS_REVIEW.value
    reason = _DEFAULT_SAFETY_REASON
    for chunk in chunk_results:
        label = chunk.get("ad_safety")
        if AdSafety.score_of(label) > AdSafety.score_of(safety):
            safety = label
            reason = chunk.get("ad_safety_reason") or _DEFAULT_SAFETY_REASON
    return safety, reason


def majority_sentiment(chunk_results: list[dict]) -> str:
    votes = {s.value: 0 for s in Sentiment}
    for chunk in chunk_results:
        label = chunk.get("sentiment")
        if isinstance(label, str) and label in votes:
            votes[label] += 1
    # max() returns the first maximal key, i.e. declaration order on ties
    return max(votes, key=lambda k: votes[k])


def _chapter_dicts(chapters) -> list[dict]:
    if not isinstance(chapters, list):
        return []
    return [c for c in chapters if isinstance(c, dict)]


def strip_chapter_times(chapters: list[dict] | None) -> list[dict]:
    """Drop start/end from chapters (transcripts without timestamps)."""
    return [
        {k: v for k, v in chapter.items() if k not in ("start", "end")}
        for chapter in _chapter_dicts(chapters)
    ]


def combine_chapters(
    chunk_results: list[dict], has_timestamps: bool,
) -> list[dict]:
    chapters = []
    for index, chunk in enumerate(chunk_results):
        for chapter in _chapter_dicts(chunk.get("chapters")):
            chapters.append({**chapter, "chunk": index + 1})
    if not has_timestamps:
        chapters = strip_chapter_times(chapters)
    return chapters


def combine_chunk_results(
    chunk_results: list[dict],
    original_transcript: str,
    timestamps: list[Timestamp] | None = None,
) -> dict:
    """Merge chunk results into the report returned by POST /analyze."""
    safety, safety_reason = rollup_ad_safety(chunk_results)
    return {
        "tags": rank_by_frequency(
            (c.get("tags") for c in chunk_results), TAGS_LIMIT,
        ),
        "chapters": combine_chapters(chunk_results, bool(timestamps)),
        "ad_safety": safety,
        "ad_safety_reason": safety_reason,
        "key_topics": rank_by_frequency(
            (c.get("key_topics") for c in chunk_results), TOPICS_LIMIT,
        ),
        "sentiment": majority_sentiment(chunk_results),
        "chunk_analysis": chunk_results,
        "total_chunks": len(chunk_results),
        "original_length": len(original_transcript),
        "analyzed_length": sum(c.get("chunkLength", 0) for c in chunk_results),
    }
