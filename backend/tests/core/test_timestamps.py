"""Timestamp Utilities tests — normalization, parsing, chapter alignment."""

from tagscript.core.timestamps import (
    align_chapters_to_timestamps,
    normalize_to_hhmmss,
    parse_time_to_seconds,
)


def test_normalize_pads_three_part_values():
    assert normalize_to_hhmmss("1:2:3") == "01:02:03"


def test_normalize_rolls_minutes_into_hours():
    assert normalize_to_hhmmss("75:30") == "01:15:30"
    assert normalize_to_hhmmss("05:30") == "00:05:30"


def test_normalize_single_part_is_seconds():
    assert normalize_to_hhmmss("45") == "00:00:45"


def test_normalize_empty_and_srt_values():
    assert normalize_to_hhmmss(None) == "00:00:00"
    assert normalize_to_hhmmss("") == "00:00:00"
    assert normalize_to_hhmmss("00:01:02:500") == "00:01:02"


def test_parse_time_to_seconds():
    assert parse_time_to_seconds("01:00:00") == 3600
    assert parse_time_to_seconds("02:30") == 150
    assert parse_time_to_seconds("00:00:10:000") == 10


def test_parse_time_to_seconds_malformed_is_zero():
    assert parse_time_to_seconds("abc") == 0
    assert parse_time_to_seconds("") == 0
    assert parse_time_to_seconds("aa:bb") == 0


_STAMPS = [
    {"start": "00:00:00:000", "end": "00:00:05:000"},
    {"start": "00:05:00:000", "end": "00:05:04:000"},
    {"start": "00:10:00:000", "end": "00:10:03:000"},
]


def test_align_snaps_to_closest_timestamp():
    chapters = [
        {"start": "00:04:50", "summary": "a"},
        {"start": "00:09:00", "summary": "b"},
    ]
    aligned = align_chapters_to_timestamps(chapters, _STAMPS)
    assert aligned[0] == {"start": "00:05:00", "end": "00:05:04", "summary": "a"}
    assert aligned[1]["start"] == "00:10:00"


def test_align_leaves_chapters_without_start():
    chapters = [{"summary": "no time"}]
    assert align_chapters_to_timestamps(chapters, _STAMPS) == chapters


def test_align_without_timestamps_only_normalizes():
    chapters = [{"start": "5:30", "summary": "a"}, {"summary": "b"}]
    assert align_chapters_to_timestamps(chapters, []) == [
        {"start": "00:05:30", "summary": "a"},
        {"summary": "b"},
    ]


def test_align_does_not_mutate_input():
    chapters = [{"start": "00:04:50", "summary": "a"}]
    align_chapters_to_timestamps(chapters, _STAMPS)
    assert chapters == [{"start": "00:04:50", "summary": "a"}]


def test_non_finite_parts_are_zero():
    assert parse_time_to_seconds("inf:00") == 0
    assert parse_time_to_seconds("00:nan") == 0
    assert normalize_to_hhmmss("1e999") == "00:00:00"
    assert normalize_to_hhmmss("inf:30") == "00:00:30"
