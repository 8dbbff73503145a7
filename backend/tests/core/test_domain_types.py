"""Domain Types tests — safety scoring and enum values."""

from tagscript.core.domain_types import AdSafety, AnalysisMethod, Sentiment


def test_safety_scores_order_labels():
    assert AdSafety.SAFE.score < AdSafety.NEEDS_REVIEW.score < AdSafety.UNSAFE.score


def test_score_of_raw_labels():
    assert AdSafety.score_of("❌ Unsafe") == 3
    assert AdSafety.score_of("✅ Safe") == 1


def test_score_of_unknown_label_ranks_as_needs_review():
    assert AdSafety.score_of("unsafe-ish") == AdSafety.NEEDS_REVIEW.score
    assert AdSafety.score_of(None) == AdSafety.NEEDS_REVIEW.score
    assert AdSafety.score_of(["❌ Unsafe"]) == AdSafety.NEEDS_REVIEW.score


def test_enum_values_match_wire_format():
    assert [s.value for s in Sentiment] == ["positive", "neutral", "negative"]
    assert AnalysisMethod.CHUNKED == "chunked"
