"""Transcript Parser — extracts plain text and cue timestamps from uploaded transcripts.

Invariants:
    - .srt: text is the cue text joined by spaces (indices, cue lines, speaker
      markers removed); timestamps are one {start, end} per cue
    - .txt: text returned unchanged; timestamps collected from lines that open
      with H:MM or H:MM:SS
    - Any other extension raises UnsupportedFileTypeError
"""

import re
from dataclasses import dataclass, field

from tagscript.core.domain_types import Timestamp
from tagscript.core.errors import UnsupportedFileTypeError

_SRT_CUE = re.compile(
    r"(\d{2}:\d{2}:\d{2}),(\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2}),(\d{3})",
)
_SRT_INDEX = re.compile(r"^\d+$")
_SPEAKER_MARKER = re.compile(r"^[A-Z][a-z]+:\s*$")
_LINE_TIMESTAMP = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?")

SUPPORTED_EXTENSIONS = (".srt", ".txt")


@dataclass
class ParsedTranscript:
    text: str
    timestamps: list[Timestamp] = field(default_factory=list)

    @property
    def has_timestamps(self) -> bool:
        return bool(self.timestamps)


def parse_srt(content: str) -> ParsedTranscript:
    """Parse SubRip content into cue text and {start, end} timestamps."""
    timestamps: list[Timestamp] = []
    words: list[str] = []
    in_cue = False

    for raw in content.splitlines():
        line = raw.strip().lstrip("\ufeff")
        cue = _SRT_CUE.search(line)
        if cue:
            timestamps.append({
                "start": f"{cue.group(1)}:{cue.group(2)}",
                "end": f"{cue.group(3)}:{cue.group(4)}",
            })
            in_cue = True
        elif (
            in_cue and line
            and not _SRT_INDEX.match(line)
            and not _SPEAKER_MARKER.match(line)
        ):
            words.append(line)

    return ParsedTranscript(text=" ".join(words).strip(), timestamps=timestamps)


def parse_plain_text(content: str) -> ParsedTranscript:
    """Keep text as-is; collect a timestamp for each line that starts with one."""
    timestamps: list[Timestamp] = []
    for raw in content.split("\n"):
        match = _LINE_TIMESTAMP.match(raw.strip())
        if not match:
            continue
        first, second, third = match.groups()
        if third is not None:
            value = f"{first.zfill(2)}:{second}:{third}"
        else:
            value = f"{first.zfill(2)}:{second}"
        timestamps.append({"start": value, "end": value})
    return ParsedTranscript(text=content, timestamps=timestamps)


def parse_upload(filename: str, content: str) -> ParsedTranscript:
    name = (filename or "").lower()
    if name.endswith(".srt"):
        return parse_srt(content)
    if name.endswith(".txt"):
        return parse_plain_text(content)
    raise UnsupportedFileTypeError(filename or "<unnamed>")
