"""Domain Types — enums and value types shared across chunking, analysis, and aggregation.

Invariants:
    - Ad-safety labels are the exact strings the model is asked to return
    - AdSafety.score orders labels from least to most restrictive
    - All valid states encoded as Enums; no raw label matching outside this module

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - TypedDict for Timestamp: stays a plain dict on the wire and in the report
"""

from enum import Enum
from typing import NewType, TypedDict


# ─── Value Types ─────────────────────────────────────────────────

TokenCount = NewType("TokenCount", int)


class Timestamp(TypedDict):
    """One cue boundary extracted from a transcript (start/end as strings)."""
    start: str
    end: str


# ─── Enums ───────────────────────────────────────────────────────

class AdSafety(str, Enum):
    """Advertiser-safety classification, worst case wins on rollup."""
    SAFE = "✅ Safe"
    NEEDS_REVIEW = "⚠️ Needs Review"
    UNSAFE = "❌ Unsafe"

    @property
    def score(self) -> int:
        return _SAFETY_SCORES[self]

    @classmethod
    def score_of(cls, label: str | None) -> int:
        """Score for a raw model label. Unknown labels rank as Needs Review."""
        if not isinstance(label, str):
            return _SAFETY_SCORES[cls.NEEDS_REVIEW]
        try:
            return cls(label).score
        except ValueError:
            return _SAFETY_SCORES[cls.NEEDS_REVIEW]


_SAFETY_SCORES = {
    AdSafety.SAFE: 1,
    AdSafety.NEEDS_REVIEW: 2,
    AdSafety.UNSAFE: 3,
}


class Sentiment(str, Enum):
    """Overall tone of a chunk. Declaration order breaks majority-vote ties."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class AnalysisMethod(str, Enum):
    """How a transcript was sent to the model."""
    SINGLE = "single"
    CHUNKED = "chunked"
