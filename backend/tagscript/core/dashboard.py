"""Dashboard Series — chart-ready data derived from a chunked analysis report.

Invariants:
    - Only chunked reports (with chunk_analysis) produce a dashboard
    - Zero-valued pie slices are dropped (overlapping labels otherwise)
    - Colors match the badge palette used by static/app.js
"""

from tagscript.core.domain_types import AdSafety, Sentiment

_SENTIMENT_SERIES = (
    ("Positive", Sentiment.POSITIVE, "#10B981"),
    ("Neutral", Sentiment.NEUTRAL, "#6B7280"),
    ("Negative", Sentiment.NEGATIVE, "#EF4444"),
)

_SAFETY_SERIES = (
    ("Safe", AdSafety.SAFE, "#10B981"),
    ("Needs Review", AdSafety.NEEDS_REVIEW, "#F59E0B"),
    ("Unsafe", AdSafety.UNSAFE, "#EF4444"),
)


def _distribution(chunks: list[dict], key: str, series) -> list[dict]:
    slices = []
    for name, label, color in series:
        value = sum(1 for c in chunks if c.get(key) == label.value)
        if value > 0:
            slices.append({"name": name, "value": value, "color": color})
    return slices


def coverage_percent(analyzed_length: int, original_length: int) -> int:
    if original_length <= 0:
        return 0
    return round(analyzed_length / original_length * 100)


def build_dashboard(report: dict) -> dict | None:
    """Sentiment/safety distributions and per-chunk progress for the charts."""
    chunks = report.get("chunk_analysis")
    if not chunks:
        return None
    return {
        "sentiment_distribution": _distribution(chunks, "sentiment", _SENTIMENT_SERIES),
        "safety_distribution": _distribution(chunks, "ad_safety", _SAFETY_SERIES),
        "chunk_progress": [
            {
                "chunk": f"Chunk {i + 1}",
                "length": c.get("chunkLength", 0),
                "tags": len(c.get("tags") or []),
                "topics": len(c.get("key_topics") or []),
            }
            for i, c in enumerate(chunks)
        ],
        "coverage_percent": coverage_percent(
            report.get("analyzed_length", 0), report.get("original_length", 0),
        ),
    }
