"""Error Hierarchy tests — status codes and response envelope."""

from tagscript.core.errors import (
    AnalysisParseError,
    AnthropicAPIError,
    EmptyTranscriptError,
    ErrorContext,
    IncompleteAnalysisError,
    TranscriptTooLargeError,
)


def test_empty_transcript_envelope():
    body = EmptyTranscriptError().to_response()["error"]
    assert body["code"] == "EMPTY_TRANSCRIPT"
    assert body["message"] == "Transcript cannot be empty"
    assert body["category"] == "validation"
    assert body["context"] == {
        "chunk_index": None, "total_chunks": None, "retry_after_ms": None,
    }


def test_context_carries_chunk_position():
    err = AnalysisParseError("bad json", ErrorContext(chunk_index=2, total_chunks=5))
    assert err.http_status == 502
    context = err.to_response()["error"]["context"]
    assert context["chunk_index"] == 2
    assert context["total_chunks"] == 5


def test_rate_limit_maps_to_429_with_user_message():
    err = AnthropicAPIError("slow down", "rate_limit", retry_after_ms=2000)
    assert err.http_status == 429
    body = err.to_response()["error"]
    assert body["message"] == "Rate limit exceeded. Please try again in a moment."
    assert body["context"]["retry_after_ms"] == 2000


def test_other_api_errors_map_to_503():
    err = AnthropicAPIError("boom", "server_error")
    assert err.http_status == 503
    assert "server_error" in err.message


def test_incomplete_and_too_large():
    assert IncompleteAnalysisError(["tags"]).missing == ["tags"]
    assert TranscriptTooLargeError(20, 10).http_status == 413


def test_timeouts_are_categorized_as_timeout():
    err = AnthropicAPIError("API timeout", "timeout")
    assert err.category.value == "timeout"
    assert err.http_status == 503
    assert AnthropicAPIError("boom", "client_error").category.value == "external_api"
