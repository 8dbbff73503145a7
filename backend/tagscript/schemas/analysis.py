"""Analysis Schemas — Pydantic models for the analyze and transcript-upload endpoints.

Invariants:
    - AnalyzeRequest.transcript is required but may be blank; blank transcripts
      are rejected by the service with EMPTY_TRANSCRIPT (not a schema error)
    - TimestampIn.end defaults to start (plain-text transcripts carry one mark per line)
    - The analysis report itself is returned as a dict: model output keys pass through
"""

from pydantic import BaseModel, Field, model_validator

from tagscript.core.domain_types import Timestamp


class TimestampIn(BaseModel):
    """One transcript timestamp as sent by the dashboard."""
    start: str = Field(min_length=1, max_length=32)
    end: str | None = Field(None, max_length=32)

    @model_validator(mode="after")
    def default_end_to_start(self):
        if not self.end:
            self.end = self.start
        return self

    def to_domain(self) -> Timestamp:
        return {"start": self.start, "end": self.end or self.start}


class AnalyzeRequest(BaseModel):
    """POST /api/v1/analyze body."""
    transcript: str
    timestamps: list[TimestampIn] | None = None

    def domain_timestamps(self) -> list[Timestamp]:
        return [t.to_domain() for t in self.timestamps or []]


class ParsedTranscriptResponse(BaseModel):
    """POST /api/v1/transcripts/parse result."""
    filename: str
    text: str
    timestamps: list[TimestampIn]
    has_timestamps: bool
