"""Transcript Parser tests — SRT cues, plain-text timestamps, upload dispatch."""

import pytest

from tagscript.core.errors import UnsupportedFileTypeError
from tagscript.core.transcript_parser import (
    parse_plain_text,
    parse_srt,
    parse_upload,
)

SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:04,000\n"
    "Hello there.\n"
    "\n"
    "2\n"
    "00:00:05,500 --> 00:00:08,000\n"
    "Host:\n"
    "Welcome back.\n"
)


def test_parse_srt_extracts_text_and_cues():
    parsed = parse_srt(SRT)
    assert parsed.text == "Hello there. Welcome back."
    assert parsed.timestamps == [
        {"start": "00:00:01:000", "end": "00:00:04:000"},
        {"start": "00:00:05:500", "end": "00:00:08:000"},
    ]
    assert parsed.has_timestamps


def test_parse_srt_handles_crlf_and_bom():
    parsed = parse_srt("\ufeff" + SRT.replace("\n", "\r\n"))
    assert parsed.text == "Hello there. Welcome back."
    assert len(parsed.timestamps) == 2


def test_parse_srt_without_cues_is_empty():
    parsed = parse_srt("just some words\nwith no cues\n")
    assert parsed.text == ""
    assert not parsed.has_timestamps


def test_parse_plain_text_keeps_text_and_collects_line_timestamps():
    content = "0:15 Intro\n1:02:03 Deep dive\nno stamp"
    parsed = parse_plain_text(content)
    assert parsed.text == content
    assert [t["start"] for t in parsed.timestamps] == ["00:15", "01:02:03"]
    assert all(t["start"] == t["end"] for t in parsed.timestamps)


def test_parse_plain_text_ignores_mid_line_times():
    parsed = parse_plain_text("We met at 10:30 yesterday.")
    assert parsed.timestamps == []
    assert not parsed.has_timestamps


@pytest.mark.parametrize("filename", ["talk.srt", "TALK.SRT"])
def test_parse_upload_dispatches_srt(filename):
    assert parse_upload(filename, SRT).text == "Hello there. Welcome back."


def test_parse_upload_dispatches_txt():
    assert parse_upload("notes.Txt", "00:10 hi").timestamps == [
        {"start": "00:10", "end": "00:10"},
    ]


@pytest.mark.parametrize("filename", ["slides.pdf", "transcript", ""])
def test_parse_upload_rejects_other_files(filename):
    with pytest.raises(UnsupportedFileTypeError) as exc:
        parse_upload(filename, "text")
    assert exc.value.http_status == 415
