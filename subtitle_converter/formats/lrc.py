"""LRC and enhanced LRC lyrics — parser and serializer.

WHY: LRC is the lingua franca of lyric players: one ``[mm:ss.xx]`` tag per
line, optional ``[ti:]``/``[ar:]``/``[al:]``/``[by:]`` header tags, and in
the enhanced variant ``<mm:ss.xx>`` markers in front of individual words
for karaoke highlighting.

HOW: Parsing is line-oriented. Header tags are looked up once over the
whole document. Each line with a leading time tag becomes a cue; if the
rest of the line holds word markers, a small scanner walks them in order
and emits one Word per marker. LRC lines carry no end time, so ends are
inferred after the pass from the next line's start.

RULES:
- Header tags: first occurrence wins, value trimmed
- Display text = line with every <...> tag removed, trimmed
- A marker with no text after it closes the previous word (sets its end)
  instead of creating an empty word
- Cue end = next cue's start; the last cue gets LRC_LAST_CUE_HOLD_MS
- Cues are kept in file order, never sorted
- Timestamps are centisecond precision on output
"""

from __future__ import annotations

import dataclasses
import logging
import re
from typing import List, Optional, Sequence

from subtitle_converter.config import LRC_LAST_CUE_HOLD_MS
from subtitle_converter.core.ir import Cue, Metadata, ParseResult, Word
from subtitle_converter.core.timecode import ms_to_lrc, time_to_ms
from subtitle_converter.formats.base import non_negative

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"\[(\d{2}:\d{2}(?:\.\d{2,3})?)\](.*)")
_WORD_MARKER_RE = re.compile(r"<(\d{2}:\d{2}(?:\.\d{2,3})?)>([^<]*)")
_TAG_RE = re.compile(r"<[^>]+>")

# Metadata field → LRC header tag
_HEADER_TAGS = (
    ("title", "ti"),
    ("artist", "ar"),
    ("album", "al"),
    ("by", "by"),
)


def _parse_metadata(content: str) -> Metadata:
    values = {}
    for field_name, tag in _HEADER_TAGS:
        match = re.search(r"\[" + tag + r":(.*?)\]", content)
        if match:
            values[field_name] = match.group(1).strip()
    return Metadata(**values)


def _scan_words(rest: str, line_index: int) -> List[Word]:
    """Walk the word markers of one enhanced line, in order."""
    words: List[Word] = []
    for k, match in enumerate(_WORD_MARKER_RE.finditer(rest)):
        at = time_to_ms(match.group(1))
        text = match.group(2).strip()
        if not text:
            if words and words[-1].end is None:
                words[-1] = dataclasses.replace(words[-1], end=at)
            continue
        words.append(Word(
            id="lrc-w-{}-{}".format(line_index, k),
            text=text,
            start=at,
        ))
    return words


def parse_lrc(content: str) -> ParseResult:
    """Parse LRC or enhanced LRC text into cues and header metadata."""
    metadata = _parse_metadata(content)
    starts: List[tuple] = []

    for index, line in enumerate(re.split(r"\r?\n", content)):
        match = _LINE_RE.search(line)
        if not match:
            continue
        start = time_to_ms(match.group(1))
        rest = match.group(2)

        words: Optional[List[Word]] = None
        if "<" in rest and ">" in rest:
            text = _TAG_RE.sub("", rest).strip()
            words = _scan_words(rest, index) or None
        else:
            text = rest.strip()

        starts.append((index, start, text, words))

    cues: List[Cue] = []
    for pos, (index, start, text, words) in enumerate(starts):
        if pos + 1 < len(starts):
            end = starts[pos + 1][1]
        else:
            end = start + LRC_LAST_CUE_HOLD_MS
        cues.append(Cue(
            id="lrc-{}".format(index),
            start=start,
            end=end,
            text=text,
            words=words,
        ))

    logger.debug("Parsed %d LRC cues", len(cues))
    return ParseResult(cues=cues, metadata=metadata)


def _lrc_time(ms: int) -> str:
    return ms_to_lrc(non_negative(ms))


def stringify_lrc(
    cues: Sequence[Cue],
    enhanced: bool = False,
    metadata: Optional[Metadata] = None,
) -> str:
    """Serialize cues as LRC; ``enhanced`` adds per-word markers."""
    header = ""
    if metadata is not None:
        for field_name, tag in _HEADER_TAGS:
            value = getattr(metadata, field_name)
            if value:
                header += "[{}:{}]\n".format(tag, value)

    lines = []
    for cue in cues:
        line = "[{}]".format(_lrc_time(cue.start))
        if enhanced and cue.words:
            line += " ".join(
                "<{}>{}".format(
                    _lrc_time(cue.start if w.start is None else w.start),
                    w.text,
                )
                for w in cue.words
            )
        else:
            line += cue.text
        lines.append(line)

    return header + "\n".join(lines)
