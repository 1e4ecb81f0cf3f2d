"""TTML (Timed Text Markup Language) — parser and serializer.

WHY: TTML is the XML caption format used by broadcast tooling and by
streaming services for synced lyrics. Only the timing of ``<p>`` elements,
their plain text, ``<br/>`` line breaks, and — for karaoke documents —
timed ``<span>`` words are modelled; styling and layout are not.

HOW: The document is parsed with ElementTree. Every element whose local
name is ``p`` becomes a cue, whatever namespace it is in. Text comes from a
stack-based walk that concatenates text and tails, turns ``br`` into a
newline, and skips ``metadata``/``head``/``style`` subtrees; whitespace is
then collapsed to single spaces. Spans carrying a ``begin`` attribute
become Words, timed relative to their paragraph.

RULES:
- ``begin`` missing → 0
- ``dur`` present → end = start + dur; else ``end``; else start +
  TTML_DEFAULT_DURATION_MS
- Malformed XML → empty result, logged, never raised
- Output text is XML-escaped; newlines become ``<br/>``
- Karaoke spans carry offsets relative to the cue start, clamped at 0;
  a word without an end gets KARAOKE_WORD_DURATION_MS
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence, Union
from xml.sax.saxutils import escape

from subtitle_converter.config import (
    KARAOKE_WORD_DURATION_MS,
    TTML_DEFAULT_DURATION_MS,
    TTML_NAMESPACE,
)
from subtitle_converter.core.ir import Cue, Metadata, ParseResult, Word
from subtitle_converter.core.timecode import ms_to_vtt, time_to_ms
from subtitle_converter.formats.base import non_negative

logger = logging.getLogger(__name__)

_SKIPPED_ELEMENTS = frozenset({"metadata", "head", "style"})
_WHITESPACE_RE = re.compile(r"\s+")


def _local_name(element: ET.Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].lower()


def extract_text(element: ET.Element) -> str:
    """Concatenate the text under ``element``; ``br`` becomes a newline.

    Walks with an explicit stack so arbitrarily deep nesting never hits the
    recursion limit. The stack holds pending strings and elements in
    reverse document order.
    """
    parts: List[str] = []
    stack: List[Union[str, ET.Element]] = [element]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        parts.append(item.text or "")
        for child in reversed(list(item)):
            stack.append(child.tail or "")
            name = _local_name(child)
            if name == "br":
                stack.append("\n")
            elif name not in _SKIPPED_ELEMENTS:
                stack.append(child)
    return "".join(parts)


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _span_words(paragraph: ET.Element, cue_start: int, index: int) -> Optional[List[Word]]:
    words: List[Word] = []
    for span in paragraph.iter():
        if span is paragraph or _local_name(span) != "span" or span.get("begin") is None:
            continue
        text = _collapse(extract_text(span))
        if not text:
            continue
        end = span.get("end")
        words.append(Word(
            id="ttml-w-{}-{}".format(index, len(words)),
            text=text,
            start=cue_start + time_to_ms(span.get("begin")),
            end=None if end is None else cue_start + time_to_ms(end),
        ))
    return words or None


def parse_ttml(content: str) -> ParseResult:
    """Parse a TTML document; every ``<p>`` becomes one cue."""
    try:
        root = ET.fromstring(content.lstrip("\ufeff"))
    except ET.ParseError as exc:
        logger.warning("TTML parse error: %s", exc)
        return ParseResult(cues=[], metadata=Metadata())

    cues: List[Cue] = []
    paragraphs = [el for el in root.iter() if _local_name(el) == "p"]
    for i, p in enumerate(paragraphs):
        start = time_to_ms(p.get("begin") or "0")
        dur = p.get("dur")
        end_attr = p.get("end")
        if dur:
            end = start + time_to_ms(dur)
        elif end_attr:
            end = time_to_ms(end_attr)
        else:
            end = start + TTML_DEFAULT_DURATION_MS

        cues.append(Cue(
            id="ttml-{}".format(i),
            start=start,
            end=end,
            text=_collapse(extract_text(p)),
            words=_span_words(p, start, i),
        ))

    return ParseResult(cues=cues, metadata=Metadata())


def _karaoke_spans(cue: Cue) -> str:
    spans = []
    for w in cue.words or []:
        word_start = cue.start if w.start is None else w.start
        word_end = word_start + KARAOKE_WORD_DURATION_MS if w.end is None else w.end
        spans.append('        <span begin="{}" end="{}">{}</span>'.format(
            ms_to_vtt(max(0, word_start - cue.start)),
            ms_to_vtt(max(0, word_end - cue.start)),
            escape(w.text),
        ))
    return "\n" + "\n".join(spans) + "\n      "


def stringify_ttml(cues: Sequence[Cue], karaoke: bool = False) -> str:
    """Serialize cues as a TTML document; ``karaoke`` emits timed spans."""
    paragraphs = []
    for cue in cues:
        if karaoke and cue.words:
            body = _karaoke_spans(cue)
        else:
            body = escape(cue.text).replace("\n", "<br/>")
        paragraphs.append('      <p begin="{}" end="{}">{}</p>'.format(
            ms_to_vtt(non_negative(cue.start)),
            ms_to_vtt(non_negative(cue.end)),
            body,
        ))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<tt xmlns="{ns}" xml:lang="en">\n'
        "  <body>\n"
        "    <div>\n"
        "{body}\n"
        "    </div>\n"
        "  </body>\n"
        "</tt>"
    ).format(ns=TTML_NAMESPACE, body="\n".join(paragraphs))
