"""WebVTT subtitles, plain and karaoke — parser and serializer.

WHY: WebVTT is what browsers play natively. Besides plain cues it allows
inline ``<HH:MM:SS.mmm>`` timestamp tags inside cue text, which karaoke
players use to light up words one at a time. Round-tripping those tags is
the reason this parser is more than a block splitter.

HOW: A single forward scan over lines drives a three-state machine:

  HEADER        the optional ``WEBVTT`` first line, skipped
  IDLE          between cues; cue identifiers and comments are ignored
  ACCUMULATING  a timing line was seen; text lines collect in a buffer

A ``-->`` line flushes any open cue and opens a new one. A blank line
flushes the open cue if it has text. Text lines have inline tags stripped
for display; if they carry timestamp tags, the line is cut at those tags
into segments and each segment's words get evenly spaced start times
between the segment's opening time and the next tag.

RULES:
- Cue settings after the end timestamp (``align:start`` …) are ignored
- Cues that never receive a text line are dropped
- Synthetic word spacing = (next tag − current time) / words in segment,
  or 0 when the segment has no following tag on that line
- Each text line restarts word timing at the cue start
- ``Note Title: X`` anywhere sets metadata.title (last one wins); inside
  a cue body the line is kept as text too
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, Optional, Sequence

from subtitle_converter.core.ir import Cue, Metadata, ParseResult, Word
from subtitle_converter.core.timecode import ms_to_vtt, time_to_ms
from subtitle_converter.formats.base import non_negative

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")
_TIMESTAMP_TAG_RE = re.compile(r"<(\d{2}:\d{2}(?::\d{2})?[.,]\d{3})>")
_TITLE_PREFIX = "Note Title:"


class _State(Enum):
    HEADER = "header"
    IDLE = "idle"
    ACCUMULATING = "accumulating"


def timed_words(line: str, cue_start: int, id_prefix: str, first_index: int = 0) -> List[Word]:
    """Split one cue text line on inline timestamp tags into timed words.

    Returns an empty list when the line has no timestamp tags.
    """
    if not _TIMESTAMP_TAG_RE.search(line):
        return []

    parts = _TIMESTAMP_TAG_RE.split(line)
    words: List[Word] = []
    current = cue_start

    # parts alternates text, tag time, text, tag time, ..., text
    for k in range(0, len(parts), 2):
        segment = _TAG_RE.sub("", parts[k]).strip()
        tag_time = parts[k + 1] if k + 1 < len(parts) else None

        if segment:
            tokens = segment.split()
            span = (time_to_ms(tag_time) - current) if tag_time else 0
            step = span / len(tokens)
            for w_idx, token in enumerate(tokens):
                words.append(Word(
                    id="{}-{}".format(id_prefix, first_index + len(words)),
                    text=token,
                    start=int(round(current + step * w_idx)),
                ))

        if tag_time:
            current = time_to_ms(tag_time)

    return words


class _VttScanner:
    """Forward scanner holding the open cue and its text/word buffers."""

    def __init__(self) -> None:
        self.state = _State.HEADER
        self.cues: List[Cue] = []
        self.title: Optional[str] = None
        self._cue_id = ""
        self._start = 0
        self._end = 0
        self._text: List[str] = []
        self._words: List[Word] = []

    def feed(self, index: int, raw_line: str) -> None:
        line = raw_line.strip()

        if self.state is _State.HEADER:
            self.state = _State.IDLE
            if line.startswith("WEBVTT"):
                return

        if line.startswith(_TITLE_PREFIX):
            self.title = line[len(_TITLE_PREFIX):].strip()
            # inside a cue body the line is also cue text
            if self.state is not _State.ACCUMULATING:
                return

        if "-->" in line:
            self._open(index, line)
        elif not line:
            if self.state is _State.ACCUMULATING and self._text:
                self.flush()
        elif self.state is _State.ACCUMULATING:
            self._append(index, line)
        else:
            logger.debug("Ignoring VTT line %d outside a cue", index)

    def _open(self, index: int, line: str) -> None:
        self.flush()
        left, right = line.split("-->", 1)
        self._cue_id = "vtt-{}".format(index)
        self._start = time_to_ms(_first_token(left))
        self._end = time_to_ms(_first_token(right))
        self.state = _State.ACCUMULATING

    def _append(self, index: int, line: str) -> None:
        self._text.append(_TAG_RE.sub("", line).strip())
        self._words.extend(timed_words(
            line,
            self._start,
            "vtt-w-{}".format(index),
            first_index=len(self._words),
        ))

    def flush(self) -> None:
        """Emit the open cue if it has text, then return to IDLE."""
        if self.state is _State.ACCUMULATING and self._text:
            self.cues.append(Cue(
                id=self._cue_id,
                start=self._start,
                end=self._end,
                text="\n".join(self._text),
                words=list(self._words) or None,
            ))
            self.state = _State.IDLE
        self._text = []
        self._words = []


def _first_token(side: str) -> str:
    parts = side.strip().split()
    return parts[0] if parts else ""


def parse_vtt(content: str) -> ParseResult:
    """Parse WebVTT text, including inline word timestamps."""
    scanner = _VttScanner()
    lines = content.strip().replace("\r\n", "\n").split("\n")
    for index, line in enumerate(lines):
        scanner.feed(index, line)
    scanner.flush()
    return ParseResult(cues=scanner.cues, metadata=Metadata(title=scanner.title))


def stringify_vtt(
    cues: Sequence[Cue],
    karaoke: bool = False,
    metadata: Optional[Metadata] = None,
) -> str:
    """Serialize cues as WebVTT; ``karaoke`` emits per-word timestamp tags."""
    header = "WEBVTT\n"
    if metadata is not None and metadata.title:
        header += "{} {}\n".format(_TITLE_PREFIX, metadata.title)
    header += "\n"

    blocks = []
    for cue in cues:
        text = cue.text
        if karaoke and cue.words:
            text = " ".join(
                "<{}>{}".format(
                    ms_to_vtt(non_negative(cue.start if w.start is None else w.start)),
                    w.text,
                )
                for w in cue.words
            )
        blocks.append("{} --> {}\n{}\n".format(
            ms_to_vtt(non_negative(cue.start)),
            ms_to_vtt(non_negative(cue.end)),
            text,
        ))
    return header + "\n".join(blocks)
