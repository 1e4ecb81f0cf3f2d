"""Format registry and parse/serialize dispatch.

WHY: The CLI, HTTP API, and editor need one entry point per direction —
"parse this text as format X", "serialize these cues as format Y" — and one
lookup describing each format (name, file suffix, MIME type).

HOW: FORMATS maps every SubtitleFormat member to its FormatInfo.
``parse_content`` and ``stringify_content`` branch over the closed enum and
call the matching module function; karaoke/enhanced variants reuse their
base format's parser and pass a flag to its serializer.

RULES:
- Every SubtitleFormat member has exactly one branch in each dispatcher
  and one FORMATS entry
- Format arguments may be SubtitleFormat members or their string values;
  an unknown value raises ValueError listing the available tags
- Content problems never raise — see the individual parsers
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Union

from subtitle_converter.core.ir import Cue, Metadata, ParseResult, SubtitleFormat
from subtitle_converter.formats.base import ExportOutput, FormatInfo
from subtitle_converter.formats.json_cues import parse_json, stringify_json
from subtitle_converter.formats.lrc import parse_lrc, stringify_lrc
from subtitle_converter.formats.plain_text import parse_txt, stringify_txt
from subtitle_converter.formats.srt import parse_srt, stringify_srt
from subtitle_converter.formats.ttml import parse_ttml, stringify_ttml
from subtitle_converter.formats.vtt import parse_vtt, stringify_vtt

FormatTag = Union[SubtitleFormat, str]

FORMATS: Dict[SubtitleFormat, FormatInfo] = {
    SubtitleFormat.LRC: FormatInfo("LRC", ".lrc", "text/plain"),
    SubtitleFormat.LRC_ENHANCED: FormatInfo("Enhanced LRC", "-enhanced.lrc", "text/plain"),
    SubtitleFormat.SRT: FormatInfo("SubRip", ".srt", "application/x-subrip"),
    SubtitleFormat.VTT: FormatInfo("WebVTT", ".vtt", "text/vtt"),
    SubtitleFormat.VTT_KARAOKE: FormatInfo("WebVTT (karaoke)", "-karaoke.vtt", "text/vtt"),
    SubtitleFormat.TTML: FormatInfo("TTML", ".ttml", "application/ttml+xml"),
    SubtitleFormat.TTML_KARAOKE: FormatInfo("TTML (karaoke)", "-karaoke.ttml", "application/ttml+xml"),
    SubtitleFormat.TXT: FormatInfo("Plain Text", ".txt", "text/plain"),
    SubtitleFormat.JSON: FormatInfo("JSON", ".json", "application/json"),
}


def resolve_format(value: FormatTag) -> SubtitleFormat:
    """Turn a format tag or its string value into a SubtitleFormat.

    Raises:
        ValueError: If the value names no known format.
    """
    if isinstance(value, SubtitleFormat):
        return value
    try:
        return SubtitleFormat(str(value).strip().lower())
    except ValueError:
        available = ", ".join(f.value for f in SubtitleFormat)
        raise ValueError(
            "Unknown format '{}'. Available: {}".format(value, available)
        ) from None


def parse_content(content: str, fmt: FormatTag) -> ParseResult:
    """Parse raw text in the given format into cues and metadata."""
    base = resolve_format(fmt).base_format
    if base is SubtitleFormat.LRC:
        return parse_lrc(content)
    if base is SubtitleFormat.SRT:
        return parse_srt(content)
    if base is SubtitleFormat.VTT:
        return parse_vtt(content)
    if base is SubtitleFormat.TTML:
        return parse_ttml(content)
    if base is SubtitleFormat.JSON:
        return parse_json(content)
    if base is SubtitleFormat.TXT:
        return parse_txt(content)
    raise ValueError("No parser for format '{}'".format(base.value))


def stringify_content(
    cues: Sequence[Cue],
    fmt: FormatTag,
    metadata: Optional[Metadata] = None,
) -> str:
    """Serialize cues to raw text in the given format."""
    target = resolve_format(fmt)
    if target is SubtitleFormat.LRC:
        return stringify_lrc(cues, enhanced=False, metadata=metadata)
    if target is SubtitleFormat.LRC_ENHANCED:
        return stringify_lrc(cues, enhanced=True, metadata=metadata)
    if target is SubtitleFormat.SRT:
        return stringify_srt(cues)
    if target is SubtitleFormat.VTT:
        return stringify_vtt(cues, karaoke=False, metadata=metadata)
    if target is SubtitleFormat.VTT_KARAOKE:
        return stringify_vtt(cues, karaoke=True, metadata=metadata)
    if target is SubtitleFormat.TTML:
        return stringify_ttml(cues, karaoke=False)
    if target is SubtitleFormat.TTML_KARAOKE:
        return stringify_ttml(cues, karaoke=True)
    if target is SubtitleFormat.TXT:
        return stringify_txt(cues)
    if target is SubtitleFormat.JSON:
        return stringify_json(cues, metadata=metadata)
    raise ValueError("No serializer for format '{}'".format(target.value))


def export_cues(
    cues: Sequence[Cue],
    fmt: FormatTag,
    metadata: Optional[Metadata] = None,
) -> ExportOutput:
    """Serialize cues and bundle the text with its file suffix and MIME type."""
    target = resolve_format(fmt)
    info = FORMATS[target]
    return ExportOutput(
        suffix=info.suffix,
        content=stringify_content(cues, target, metadata),
        media_type=info.media_type,
    )


__all__ = [
    "FORMATS",
    "ExportOutput",
    "FormatInfo",
    "FormatTag",
    "export_cues",
    "parse_content",
    "resolve_format",
    "stringify_content",
]
