"""Time codec shared by every parser and serializer.

WHY: Each format spells a timestamp differently — SRT uses a comma before
milliseconds, WebVTT a dot, LRC drops to centiseconds and has no hours,
TTML allows offsets like ``1.5s``. Keeping every encoder and the single
permissive decoder here means a format module never does its own
arithmetic on time strings.

HOW: Encoders decompose an integer millisecond count with integer division
and modulo (hours = ms // 3_600_000, and so on). No datetime arithmetic is
involved, so values past 24 hours and exact hour boundaries encode
correctly. The decoder tries a fixed list of grammars in priority order and
falls back to 0.

RULES:
- Encoders round to the nearest whole millisecond (half up) first
- LRC rounds to whole centiseconds before decomposing, so 59_995 ms
  encodes as 01:00.00 rather than 00:59.100
- Encoders raise ValueError on negative input; callers clamp first
- time_to_ms never raises; unparseable text decodes to 0
- A bare number is read as seconds, including numeric strings that came
  from millisecond JSON values
"""

from __future__ import annotations

import math
import re
from enum import Enum


class TimePattern(str, Enum):
    """Textual timestamp patterns the encoders can produce."""

    SRT = "srt"          # HH:MM:SS,mmm
    VTT = "vtt"          # HH:MM:SS.mmm
    LRC = "lrc"          # MM:SS.cc
    DISPLAY = "display"  # MM:SS.mmm


_MS_SUFFIX_RE = re.compile(r"^(\d+(?:\.\d+)?)ms$")
_S_SUFFIX_RE = re.compile(r"^(\d+(?:\.\d+)?)s$")
_LRC_RE = re.compile(r"^(\d{1,3}):(\d{2})(?:\.(\d{1,3}))?$")
_FULL_RE = re.compile(r"^(?:(\d{1,2}):)?(\d{1,2}):(\d{1,2})[.,](\d{1,3})$")
_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _whole_ms(ms: float) -> int:
    if ms < 0:
        raise ValueError("Cannot encode negative time: {}".format(ms))
    return _round_half_up(ms)


def _split(ms: int) -> tuple[int, int, int, int]:
    """Decompose milliseconds into (hours, minutes, seconds, millis)."""
    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    seconds = (ms % 60_000) // 1000
    millis = ms % 1000
    return hours, minutes, seconds, millis


def ms_to_srt(ms: float) -> str:
    """Encode as ``HH:MM:SS,mmm`` (hours widen past 99)."""
    hours, minutes, seconds, millis = _split(_whole_ms(ms))
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, seconds, millis)


def ms_to_vtt(ms: float) -> str:
    """Encode as ``HH:MM:SS.mmm``."""
    hours, minutes, seconds, millis = _split(_whole_ms(ms))
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, seconds, millis)


def ms_to_lrc(ms: float) -> str:
    """Encode as ``MM:SS.cc``. Minutes keep counting past 59."""
    centis = _round_half_up(_whole_ms(ms) / 10)
    minutes = centis // 6000
    seconds = (centis % 6000) // 100
    return "{:02d}:{:02d}.{:02d}".format(minutes, seconds, centis % 100)


def ms_to_display(ms: float) -> str:
    """Encode as ``MM:SS.mmm`` for on-screen time fields."""
    total = _whole_ms(ms)
    minutes = total // 60_000
    seconds = (total % 60_000) // 1000
    return "{:02d}:{:02d}.{:03d}".format(minutes, seconds, total % 1000)


_ENCODERS = {
    TimePattern.SRT: ms_to_srt,
    TimePattern.VTT: ms_to_vtt,
    TimePattern.LRC: ms_to_lrc,
    TimePattern.DISPLAY: ms_to_display,
}


def encode(ms: float, pattern: TimePattern | str) -> str:
    """Encode ``ms`` in the given pattern.

    Raises:
        ValueError: If ``ms`` is negative or the pattern is unknown.
    """
    return _ENCODERS[TimePattern(pattern)](ms)


def _fraction_ms(digits: str | None) -> int:
    """Read 1-3 fraction digits as the leading digits of milliseconds."""
    if not digits:
        return 0
    return int(digits.ljust(3, "0"))


def time_to_ms(text: str | None) -> int:
    """Decode any supported timestamp spelling to milliseconds.

    Rules, first match wins, applied to the stripped input:
      1. ``<number>ms``  — milliseconds
      2. ``<number>s``   — seconds
      3. ``M:SS[.f]``    — LRC style (up to 3 minute digits), fraction as
         leading ms digits
      4. ``[H:]M:S.f`` / ``[H:]M:S,f`` — SRT/VTT style
      5. ``<number>``    — seconds
      6. anything else   — 0
    """
    if not text:
        return 0
    clean = text.strip()

    match = _MS_SUFFIX_RE.match(clean)
    if match:
        return _round_half_up(float(match.group(1)))

    match = _S_SUFFIX_RE.match(clean)
    if match:
        return _round_half_up(float(match.group(1)) * 1000)

    match = _LRC_RE.match(clean)
    if match:
        minutes, seconds, fraction = match.groups()
        return int(minutes) * 60_000 + int(seconds) * 1000 + _fraction_ms(fraction)

    match = _FULL_RE.match(clean)
    if match:
        hours, minutes, seconds, fraction = match.groups()
        return (
            int(hours or 0) * 3_600_000
            + int(minutes) * 60_000
            + int(seconds) * 1000
            + _fraction_ms(fraction)
        )

    if _NUMBER_RE.match(clean):
        return _round_half_up(float(clean) * 1000)

    return 0


decode = time_to_ms
