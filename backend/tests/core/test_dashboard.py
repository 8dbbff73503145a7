"""Dashboard Series tests — chart data derived from chunked reports."""

from tagscript.core.dashboard import build_dashboard, coverage_percent


def _report(chunks, original=1000, analyzed=950):
    return {
        "chunk_analysis": chunks,
        "original_length": original,
        "analyzed_length": analyzed,
    }


CHUNKS = [
    {"sentiment": "positive", "ad_safety": "✅ Safe", "tags": ["a", "b"],
     "key_topics": ["t"], "chunkLength": 500},
    {"sentiment": "positive", "ad_safety": "❌ Unsafe", "tags": ["c"],
     "key_topics": [], "chunkLength": 450},
]


def test_single_pass_report_has_no_dashboard():
    assert build_dashboard({"tags": ["a"], "chapters": []}) is None


def test_distributions_drop_empty_slices():
    dashboard = build_dashboard(_report(CHUNKS))
    assert dashboard["sentiment_distribution"] == [
        {"name": "Positive", "value": 2, "color": "#10B981"},
    ]
    assert dashboard["safety_distribution"] == [
        {"name": "Safe", "value": 1, "color": "#10B981"},
        {"name": "Unsafe", "value": 1, "color": "#EF4444"},
    ]


def test_chunk_progress_counts_tags_and_topics():
    progress = build_dashboard(_report(CHUNKS))["chunk_progress"]
    assert progress == [
        {"chunk": "Chunk 1", "length": 500, "tags": 2, "topics": 1},
        {"chunk": "Chunk 2", "length": 450, "tags": 1, "topics": 0},
    ]


def test_coverage_percent():
    assert build_dashboard(_report(CHUNKS))["coverage_percent"] == 95
    assert coverage_percent(10, 0) == 0
    assert coverage_percent(2, 3) == 67
