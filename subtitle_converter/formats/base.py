"""Shared records and helpers for the format modules.

WHY: The CLI and HTTP API need to know, for any format tag, what to call
the output file and which MIME type to send — and every serializer needs
the same guard against negative times before it hands them to the codec.

HOW: FormatInfo describes one format tag (display name, file suffix,
media type). ExportOutput bundles serialized content with its suffix and
media type, like a single file ready to save or stream.
``non_negative()`` clamps times for the encoders and logs when it has to.

RULES:
- ``suffix`` starts with a dot or hyphen and is appended to the source stem
- Karaoke/enhanced variants get distinct suffixes so a batch export of
  several formats never collides on disk
- Serializers call ``non_negative()`` on every time they encode
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatInfo:
    """Static description of one format tag.

    Attributes:
        name: Human-readable format name, e.g. ``"WebVTT (karaoke)"``.
        suffix: File suffix appended to the source stem, e.g. ``".srt"``.
        media_type: MIME type for the serialized content.
    """

    name: str
    suffix: str
    media_type: str


@dataclass
class ExportOutput:
    """One serialized document ready to save or send.

    Attributes:
        suffix: File suffix appended to the source stem.
        content: The serialized text.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


def non_negative(ms: int, what: str = "time") -> int:
    """Clamp a time to 0 so the encoders never see a negative value."""
    if ms < 0:
        logger.warning("Clamping negative %s %d ms to 0", what, ms)
        return 0
    return ms
