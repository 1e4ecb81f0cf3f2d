"""SubRip (SRT) subtitles — parser and serializer.

WHY: SRT is the most widely accepted subtitle format: numbered blocks with
an ``HH:MM:SS,mmm --> HH:MM:SS,mmm`` line and one or more text lines. It has
no word timing and no document metadata.

HOW: The document is normalised to ``\\n`` line endings and split into
blocks on blank lines. Within a block, a leading all-digit line is the
index and is discarded; the next line must carry the ``-->`` separator;
everything after it is the text.

RULES:
- Blocks without a usable ``-->`` line are dropped, the rest still parse
- The index in the file is ignored; ids come from block position
- Text lines are joined with ``\\n``
- Output indices are 1-based and sequential
- Milliseconds use a comma separator on output
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from subtitle_converter.core.ir import Cue, Metadata, ParseResult
from subtitle_converter.core.timecode import ms_to_srt, time_to_ms
from subtitle_converter.formats.base import non_negative

logger = logging.getLogger(__name__)

_BLOCK_SPLIT_RE = re.compile(r"\n[ \t]*\n")
_INDEX_RE = re.compile(r"^\d+$")


def parse_srt(content: str) -> ParseResult:
    """Parse SRT text into cues. Malformed blocks are skipped."""
    normalized = content.replace("\r\n", "\n").strip()
    if not normalized:
        return ParseResult(cues=[], metadata=Metadata())

    cues: List[Cue] = []
    for index, block in enumerate(_BLOCK_SPLIT_RE.split(normalized)):
        lines = block.strip("\n").split("\n")
        if len(lines) < 2:
            logger.debug("Skipping SRT block %d: too short", index)
            continue

        timing_line = 1 if _INDEX_RE.match(lines[0].strip()) else 0
        if timing_line >= len(lines):
            continue

        times = lines[timing_line].split("-->")
        if len(times) != 2:
            logger.debug("Skipping SRT block %d: no timing line", index)
            continue

        cues.append(Cue(
            id="srt-{}".format(index),
            start=time_to_ms(times[0].strip()),
            end=time_to_ms(times[1].strip()),
            text="\n".join(lines[timing_line + 1:]),
        ))

    return ParseResult(cues=cues, metadata=Metadata())


def stringify_srt(cues: Sequence[Cue]) -> str:
    """Serialize cues as numbered SRT blocks separated by blank lines."""
    blocks = []
    for i, cue in enumerate(cues, 1):
        blocks.append("{}\n{} --> {}\n{}\n".format(
            i,
            ms_to_srt(non_negative(cue.start)),
            ms_to_srt(non_negative(cue.end)),
            cue.text,
        ))
    return "\n".join(blocks)
