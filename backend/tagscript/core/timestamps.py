"""Timestamp Utilities — normalize transcript timestamps and align chapters to them.

Invariants:
    - normalize_to_hhmmss always returns "HH:MM:SS" (zero-padded)
    - parse_time_to_seconds never raises; malformed input is 0 seconds
    - Chapters without a start are passed through untouched
"""

from tagscript.core.domain_types import Timestamp


def _to_int(part: str) -> int:
    try:
        return int(float(part))
    except (ValueError, OverflowError):
        return 0


def normalize_to_hhmmss(value: str | None) -> str:
    """Normalize "S", "MM:SS" or "HH:MM:SS" (or "HH:MM:SS:mmm") to "HH:MM:SS"."""
    if not value:
        return "00:00:00"
    parts = [_to_int(p) for p in value.strip().split(":")]
    if len(parts) >= 3:
        hours, minutes, seconds = parts[:3]
    elif len(parts) == 2:
        minutes, seconds = parts
        hours, minutes = divmod(minutes, 60)
    else:
        hours, minutes, seconds = 0, 0, parts[0]
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_time_to_seconds(value: str | None) -> int:
    """Seconds for "HH:MM:SS" or "MM:SS"; anything else is 0."""
    if not value:
        return 0
    parts = value.strip().split(":")
    if len(parts) == 4:
        parts = parts[:3]  # SRT cue with milliseconds
    if len(parts) == 3:
        return _to_int(parts[0]) * 3600 + _to_int(parts[1]) * 60 + _to_int(parts[2])
    if len(parts) == 2:
        return _to_int(parts[0]) * 60 + _to_int(parts[1])
    return 0


def align_chapters_to_timestamps(
    chapters: list[dict], timestamps: list[Timestamp] | None,
) -> list[dict]:
    """Snap each chapter's start/end to the closest known transcript timestamp.

    Without timestamps, only normalizes any start/end the model supplied.
    """
    if not timestamps:
        aligned = []
        for chapter in chapters:
            chapter = dict(chapter)
            for key in ("start", "end"):
                if chapter.get(key):
                    chapter[key] = normalize_to_hhmmss(str(chapter[key]))
            aligned.append(chapter)
        return aligned

    marks = [(parse_time_to_seconds(t["start"]), t) for t in timestamps]
    aligned = []
    for chapter in chapters:
        if not chapter.get("start"):
            aligned.append(chapter)
            continue
        target = parse_time_to_seconds(str(chapter["start"]))
        _, closest = min(marks, key=lambda m: abs(m[0] - target))
        aligned.append({
            **chapter,
            "start": normalize_to_hhmmss(closest["start"]),
            "end": normalize_to_hhmmss(closest.get("end") or closest["start"]),
        })
    return aligned
