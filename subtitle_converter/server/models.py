"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: The IR dataclasses get pydantic mirrors (WordModel, CueModel,
MetadataModel) with conversion helpers both ways. Each endpoint has its
own request and/or response model. Format tags are validated as
SubtitleFormat values directly.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Conversions to/from the IR live here, not in the endpoints
- Times are integer milliseconds on the wire
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from subtitle_converter.core.ir import Cue, Metadata, SubtitleFormat, Word


# ---------------------------------------------------------------------------
# IR mirrors
# ---------------------------------------------------------------------------


class WordModel(BaseModel):
    """One word inside a cue, with optional individual timing."""

    id: str = Field(description="Word identifier, unique within its cue list.")
    text: str = Field(description="Word text.")
    start: Optional[int] = Field(default=None, description="Word start in milliseconds.")
    end: Optional[int] = Field(default=None, description="Word end in milliseconds.")

    def to_ir(self) -> Word:
        return Word(id=self.id, text=self.text, start=self.start, end=self.end)

    @classmethod
    def from_ir(cls, word: Word) -> WordModel:
        return cls(id=word.id, text=word.text, start=word.start, end=word.end)


class CueModel(BaseModel):
    """One timed caption or lyric line."""

    id: str = Field(description="Cue identifier, unique within one document.")
    start: int = Field(description="Cue start in milliseconds.")
    end: int = Field(description="Cue end in milliseconds.")
    text: str = Field(description="Display text; may contain newlines.")
    words: Optional[List[WordModel]] = Field(
        default=None,
        description="Word-level timing, when the source format carries it.",
    )

    def to_ir(self) -> Cue:
        return Cue(
            id=self.id,
            start=self.start,
            end=self.end,
            text=self.text,
            words=None if self.words is None else [w.to_ir() for w in self.words],
        )

    @classmethod
    def from_ir(cls, cue: Cue) -> CueModel:
        return cls(
            id=cue.id,
            start=cue.start,
            end=cue.end,
            text=cue.text,
            words=None if cue.words is None else [WordModel.from_ir(w) for w in cue.words],
        )


class MetadataModel(BaseModel):
    """Document-level tags."""

    title: Optional[str] = Field(default=None, description="Song or programme title.")
    artist: Optional[str] = Field(default=None, description="Performing artist.")
    album: Optional[str] = Field(default=None, description="Album name.")
    by: Optional[str] = Field(default=None, description="Creator of the timing file.")

    def to_ir(self) -> Metadata:
        return Metadata(title=self.title, artist=self.artist, album=self.album, by=self.by)

    @classmethod
    def from_ir(cls, metadata: Metadata) -> MetadataModel:
        return cls(
            title=metadata.title,
            artist=metadata.artist,
            album=metadata.album,
            by=metadata.by,
        )


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DetectRequest(BaseModel):
    """Filename and content to classify."""

    filename: str = Field(default="", description="Original filename; its extension wins when known.")
    content: str = Field(default="", description="Raw document text, sniffed when the extension is unknown.")


class ParseRequest(BaseModel):
    """Raw document text to parse.

    RULES:
    - When format is omitted it is detected from filename and content
    """

    content: str = Field(description="Raw document text.")
    format: Optional[SubtitleFormat] = Field(
        default=None,
        description="Format to parse as. Detected when omitted.",
    )
    filename: str = Field(default="", description="Filename used for detection.")


class ExportRequest(BaseModel):
    """Cues to serialize."""

    cues: List[CueModel] = Field(description="Cues in timeline order.")
    format: SubtitleFormat = Field(description="Target format.")
    metadata: Optional[MetadataModel] = Field(
        default=None,
        description="Document metadata, written by formats that support it.",
    )
    filename_stem: str = Field(
        default="subtitles",
        description="Stem used for the attachment filename.",
    )


class AppendGeneratedRequest(BaseModel):
    """Existing timeline plus generated cues to splice after it."""

    existing: List[CueModel] = Field(description="Current timeline.")
    generated: List[CueModel] = Field(
        description="Cues from the lyric generation service, timed from 0.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class DetectResponse(BaseModel):
    """Detected format tag."""

    format: SubtitleFormat = Field(description="Detected format.")


class ParseResponse(BaseModel):
    """Parsed document."""

    format: SubtitleFormat = Field(description="Format the content was parsed as.")
    cues: List[CueModel] = Field(description="Parsed cues in file order.")
    metadata: MetadataModel = Field(description="Document metadata (empty when absent).")


class TimelineResponse(BaseModel):
    """A cue list returned by a timeline transform."""

    cues: List[CueModel] = Field(description="Resulting timeline.")


class FormatInfoModel(BaseModel):
    """Description of an available format.

    WHY: Clients can query the /formats endpoint to discover which
    formats are supported and what files they produce.
    """

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '.srt').")
    media_type: str = Field(description="MIME type of serialized content.")
    word_timing: bool = Field(description="True when the serializer writes per-word timing.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
