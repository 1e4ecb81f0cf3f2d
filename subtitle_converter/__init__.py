"""Subtitle Converter — time-synchronised caption and lyric format hub.

WHY: Captions and lyrics live in half a dozen interchange formats (SRT,
WebVTT, LRC / enhanced LRC, TTML, a JSON cue document, plain text), each
with its own timestamp grammar. Editors and players need to move a timeline
freely between them, including word-level karaoke timing, without losing
more precision than the target format forces them to.

HOW: Three layers — a shared time codec, a uniform cue IR, and one
parser/serializer pair per format behind a single dispatch. Each layer is
independently testable.

RULES:
- Every parser produces the same ParseResult IR
- Every serializer consumes the same Cue list
- Parsers are total: malformed fragments are skipped, never fatal
- Adding a format = one new module in formats/ plus one enum member
"""

from subtitle_converter.core.detect import detect_format
from subtitle_converter.core.ir import Cue, Metadata, ParseResult, SubtitleFormat, Word
from subtitle_converter.formats import export_cues, parse_content, stringify_content

__version__ = "0.1.0"

__all__ = [
    "Cue",
    "Metadata",
    "ParseResult",
    "SubtitleFormat",
    "Word",
    "detect_format",
    "export_cues",
    "parse_content",
    "stringify_content",
]
