"""Plain text lyrics — parser and serializer.

WHY: Lyrics are often pasted as bare text before anyone has timed them.
Importing gives each line a placeholder window so it can be timed in the
editor; exporting drops all timing but keeps verse structure readable.

HOW: On import every non-blank line becomes a cue with a uniform
TXT_LINE_DURATION_MS window. On export each cue is one line, and a blank
line is inserted wherever the silence between two cues is at least
STANZA_BREAK_THRESHOLD_MS — the usual gap between verses.

RULES:
- Lines are trimmed; blank lines are skipped on import
- Cue i spans [i * TXT_LINE_DURATION_MS, (i + 1) * TXT_LINE_DURATION_MS)
- No metadata in either direction
- Gap = next.start − current.end; blank line when gap >= threshold
- Output has no leading or trailing blank lines
"""

from __future__ import annotations

import re
from typing import Sequence

from subtitle_converter.config import STANZA_BREAK_THRESHOLD_MS, TXT_LINE_DURATION_MS
from subtitle_converter.core.ir import Cue, Metadata, ParseResult


def parse_txt(content: str) -> ParseResult:
    """One cue per non-blank line, on a synthetic uniform timeline."""
    lines = [line.strip() for line in re.split(r"\r?\n", content) if line.strip()]
    cues = [
        Cue(
            id="txt-{}".format(i),
            start=i * TXT_LINE_DURATION_MS,
            end=(i + 1) * TXT_LINE_DURATION_MS,
            text=line,
        )
        for i, line in enumerate(lines)
    ]
    return ParseResult(cues=cues, metadata=Metadata())


def stringify_txt(cues: Sequence[Cue]) -> str:
    """Write cue texts one per line, with blank lines at stanza breaks."""
    parts = []
    for i, cue in enumerate(cues):
        parts.append(cue.text + "\n")
        if i + 1 < len(cues):
            gap = cues[i + 1].start - cue.end
            if gap >= STANZA_BREAK_THRESHOLD_MS:
                parts.append("\n")
    return "".join(parts).strip()
