"""Intermediate representation dataclasses for parsed caption documents.

WHY: Six file formats describe the same thing — timed lines of text,
sometimes with timed words inside them — in six different grammars. The
editor, CLI, and HTTP API should only ever see one shape. The IR is that
shape: every parser produces it, every serializer consumes it.

HOW: Four dataclasses and one enum:
  Word           — one token with optional individual start/end
  Cue            — one timed line (possibly multi-line text) with optional words
  Metadata       — document-level title/artist/album/attribution
  ParseResult    — the cues plus metadata returned by every parser
  SubtitleFormat — the closed set of format tags selecting parser/serializer

RULES:
- All times are integer milliseconds
- Word.start / Word.end are None when the source carries no word timing;
  consumers treat None as "inherit from the owning cue"
- When Cue.words is set, joining word texts with single spaces gives
  Cue.text in the formats that use words (not re-validated here)
- start <= end and non-decreasing start order are expected, never enforced
- Records are frozen: transforms return new records via dataclasses.replace
- Ids are deterministic functions of format tag and position
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SubtitleFormat(str, Enum):
    """Closed set of format tags.

    The ``_ENHANCED`` / ``_KARAOKE`` variants share a parser with their base
    format but select the serializer that emits per-word timing.
    """

    LRC = "lrc"
    LRC_ENHANCED = "lrc_enhanced"
    SRT = "srt"
    VTT = "vtt"
    VTT_KARAOKE = "vtt_karaoke"
    TTML = "ttml"
    TTML_KARAOKE = "ttml_karaoke"
    TXT = "txt"
    JSON = "json"

    @property
    def base_format(self) -> SubtitleFormat:
        """The tag whose parser reads this format."""
        return _BASE_FORMATS.get(self, self)

    @property
    def is_word_timed(self) -> bool:
        """True for the serializers that emit per-word timing."""
        return self in _BASE_FORMATS


_BASE_FORMATS = {
    SubtitleFormat.LRC_ENHANCED: SubtitleFormat.LRC,
    SubtitleFormat.VTT_KARAOKE: SubtitleFormat.VTT,
    SubtitleFormat.TTML_KARAOKE: SubtitleFormat.TTML,
}


@dataclass(frozen=True)
class Word:
    """A single token inside a cue, optionally with its own timing.

    RULES:
    - text: the token as displayed, no surrounding whitespace
    - start / end: milliseconds, or None when the format has no word timing
    """

    id: str
    text: str
    start: int | None = None
    end: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "text": self.text}
        if self.start is not None:
            data["start"] = self.start
        if self.end is not None:
            data["end"] = self.end
        return data


@dataclass(frozen=True)
class Cue:
    """One timed subtitle or lyric line.

    RULES:
    - text is the authoritative human-readable line, may contain newlines
    - words is None when the source carried no word-level data
    """

    id: str
    start: int
    end: int
    text: str
    words: list[Word] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "text": self.text,
        }
        if self.words is not None:
            data["words"] = [w.to_dict() for w in self.words]
        return data


@dataclass(frozen=True)
class Metadata:
    """Document-level tags.

    Populated by LRC (all fields), VTT (title only) and JSON (whatever the
    document carries). Absent for SRT, TTML, and TXT.
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    by: str | None = None

    def is_empty(self) -> bool:
        return not any((self.title, self.artist, self.album, self.by))

    def to_dict(self) -> dict[str, str]:
        data: dict[str, str] = {}
        for key in ("title", "artist", "album", "by"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        """Build Metadata from a loose mapping, ignoring unknown keys.

        Non-string values are converted with str(); None and missing keys
        stay None.
        """
        if not isinstance(data, dict):
            return cls()
        values: dict[str, str | None] = {}
        for key in ("title", "artist", "album", "by"):
            value = data.get(key)
            values[key] = None if value is None else str(value)
        return cls(**values)


@dataclass(frozen=True)
class ParseResult:
    """The sole output of every parser."""

    cues: list[Cue] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cues": [c.to_dict() for c in self.cues],
            "metadata": self.metadata.to_dict(),
        }
