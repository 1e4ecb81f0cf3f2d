"""Format detection from filename and content.

WHY: Files arrive from drag-and-drop, uploads and the CLI with whatever
name the user gave them. The extension is the strongest hint, but pasted
text or misnamed files still need a sensible guess.

HOW: Extension lookup in EXTENSION_FORMATS first. When no extension
matches, sniff the content in a fixed order: JSON brackets, the WEBVTT
header, the TTML namespace URI, a leading LRC timestamp. Anything else is
treated as SRT.

RULES:
- Extension matching is a case-insensitive suffix test, so a bare
  ".srt" name still counts
- Sniffing looks at the content with surrounding whitespace stripped,
  except the TTML check which searches the raw content
- Pure function: same input, same answer
- Always returns a base format, never a karaoke/enhanced variant
"""

from __future__ import annotations

import re

from subtitle_converter.config import EXTENSION_FORMATS, TTML_NAMESPACE
from subtitle_converter.core.ir import SubtitleFormat

_LRC_LEAD_RE = re.compile(r"^\[\d{2}:\d{2}\.\d{2}\]")


def detect_format(filename: str, content: str) -> SubtitleFormat:
    """Classify a (filename, content) pair into a SubtitleFormat."""
    name = (filename or "").lower()
    for ext, tag in EXTENSION_FORMATS.items():
        if name.endswith(ext):
            return SubtitleFormat(tag)

    trimmed = (content or "").strip()
    if trimmed.startswith(("{", "[")) and not _LRC_LEAD_RE.match(trimmed):
        return SubtitleFormat.JSON
    if trimmed.startswith("WEBVTT"):
        return SubtitleFormat.VTT
    if TTML_NAMESPACE in (content or ""):
        return SubtitleFormat.TTML
    if _LRC_LEAD_RE.match(trimmed):
        return SubtitleFormat.LRC
    return SubtitleFormat.SRT
