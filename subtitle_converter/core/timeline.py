"""Cue-list transforms used at the editor boundary.

WHY: The editing surface mutates the parsed timeline between import and
export — retiming cues, editing individual words, reordering, deleting,
and splicing in lines from the lyric generation service. Keeping those
transforms here, as pure functions over the IR, means the editor holds no
timing logic of its own and every edit is testable without a UI.

HOW: Each function takes cues (or one cue) and returns new records built
with dataclasses.replace. Nothing is mutated in place.

RULES:
- Input lists are never modified; a new list is returned
- String time values go through the shared time codec
- Words synthesised for untimed cues get DISPLAY_WORD_DURATION_MS each
- Generated cues are shifted to start after the last existing cue's end
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional, Protocol, Sequence, Union

from subtitle_converter.config import DISPLAY_WORD_DURATION_MS
from subtitle_converter.core.ir import Cue, Word
from subtitle_converter.core.timecode import time_to_ms

TimeValue = Union[int, str]


class LyricService(Protocol):
    """Boundary of the external lyric generation service.

    The service is opaque to this package: it takes a prompt (or existing
    cues plus an instruction) and a model name, and returns new cues.
    """

    def generate(self, prompt: str, model: str) -> List[Cue]:
        ...

    def refine(self, cues: Sequence[Cue], instruction: str, model: str) -> List[Cue]:
        ...


def _to_ms(value: TimeValue) -> int:
    if isinstance(value, str):
        return time_to_ms(value)
    return int(value)


def display_words(cue: Cue) -> List[Word]:
    """Return the cue's words, synthesising evenly timed ones if it has none."""
    if cue.words:
        return list(cue.words)
    tokens = cue.text.split()
    return [
        Word(
            id="gen-{}-{}".format(cue.id, i),
            text=token,
            start=cue.start + i * DISPLAY_WORD_DURATION_MS,
            end=cue.start + (i + 1) * DISPLAY_WORD_DURATION_MS,
        )
        for i, token in enumerate(tokens)
    ]


def update_word(
    cue: Cue,
    index: int,
    text: Optional[str] = None,
    start: Optional[TimeValue] = None,
    end: Optional[TimeValue] = None,
) -> Cue:
    """Replace one word of a cue and rebuild the cue text from its words.

    Raises:
        IndexError: If ``index`` does not address a word of the cue.
    """
    words = display_words(cue)
    if not 0 <= index < len(words):
        raise IndexError("Word index {} out of range for cue {}".format(index, cue.id))

    changes = {}
    if text is not None:
        changes["text"] = text
    if start is not None:
        changes["start"] = _to_ms(start)
    if end is not None:
        changes["end"] = _to_ms(end)
    words[index] = dataclasses.replace(words[index], **changes)

    return dataclasses.replace(
        cue,
        words=words,
        text=" ".join(w.text for w in words),
    )


def update_cue_time(cue: Cue, field: str, value: TimeValue) -> Cue:
    """Set a cue's ``start`` or ``end`` from milliseconds or a timestamp string."""
    if field not in ("start", "end"):
        raise ValueError("Unknown time field '{}'. Expected 'start' or 'end'.".format(field))
    return dataclasses.replace(cue, **{field: _to_ms(value)})


def move_cue(cues: Sequence[Cue], src: int, dst: int) -> List[Cue]:
    """Move the cue at ``src`` so it ends up at position ``dst``."""
    result = list(cues)
    if src == dst:
        return result
    moved = result.pop(src)
    result.insert(dst, moved)
    return result


def remove_cue(cues: Sequence[Cue], index: int) -> List[Cue]:
    """Drop the cue at ``index``."""
    if not 0 <= index < len(cues):
        raise IndexError("Cue index {} out of range".format(index))
    return [c for i, c in enumerate(cues) if i != index]


def active_cue_index(cues: Sequence[Cue], position_ms: int) -> int:
    """Index of the first cue playing at ``position_ms``, or -1."""
    for i, cue in enumerate(cues):
        if cue.start <= position_ms < cue.end:
            return i
    return -1


def append_generated_cues(existing: Sequence[Cue], generated: Sequence[Cue]) -> List[Cue]:
    """Append generated cues after the existing timeline.

    Generated cues carry times relative to their own first line. They are
    shifted by the last existing cue's end; word times move with them.
    With no existing cues the generated cues are returned unchanged.
    """
    if not existing:
        return list(generated)

    offset = existing[-1].end
    shifted = []
    for cue in generated:
        words = cue.words
        if words is not None:
            words = [
                dataclasses.replace(
                    w,
                    start=None if w.start is None else w.start + offset,
                    end=None if w.end is None else w.end + offset,
                )
                for w in words
            ]
        shifted.append(dataclasses.replace(
            cue,
            start=cue.start + offset,
            end=cue.end + offset,
            words=words,
        ))
    return list(existing) + shifted
