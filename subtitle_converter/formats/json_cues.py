"""JSON cue document — parser and serializer.

WHY: JSON is the lossless interchange format: it keeps ids, word lists,
and every metadata field, so the editor can save and reload a session
without any precision loss. Hand-written or third-party JSON is common
too, so the reader accepts loose shapes and string timestamps.

HOW: ``json.loads`` the document. A bare array is a list of cues; an
object contributes ``cues`` and optional ``metadata``. Numeric times are
used as-is, string times go through the time codec, recursively for
words. The document is also checked against the bundled JSON Schema
(cue_document.schema.json) with jsonschema, purely for diagnostics.

RULES:
- A top-level syntax error (or nesting too deep to decode) returns an
  empty result and logs a warning
- NaN and infinite times read as 0
- Schema deviations are logged, never rejected
- Non-object entries in the cue list are skipped
- Missing ids are generated: ``json-<i>`` and ``json-w-<i>-<j>``
- Bare numeric strings decode as seconds ("1500" → 1_500_000 ms)
- A word with no start/end keeps None for that bound
- Output is ``{"metadata": ..., "cues": [...]}`` indented by 2; the
  metadata key is omitted when no metadata is given
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, List, Optional, Sequence

import jsonschema

from subtitle_converter.core.ir import Cue, Metadata, ParseResult, Word
from subtitle_converter.core.timecode import time_to_ms

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "cue_document.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def get_schema() -> dict:
    """Load and cache the cue document JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _log_schema_deviations(document: Any) -> None:
    validator = jsonschema.Draft7Validator(get_schema())
    for error in validator.iter_errors(document):
        logger.warning(
            "JSON cue document deviates from schema at %s: %s",
            "/".join(str(p) for p in error.absolute_path) or "<root>",
            error.message,
        )


def _coerce_time(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            logger.debug("Non-finite JSON time %r read as 0", value)
            return 0
        return int(round(value))
    return time_to_ms(str(value) if value else "0")


def _coerce_words(raw_words: list, cue_index: int) -> List[Word]:
    words = []
    for j, raw in enumerate(raw_words):
        if not isinstance(raw, dict):
            continue
        start = raw.get("start")
        end = raw.get("end")
        words.append(Word(
            id=str(raw.get("id") or "json-w-{}-{}".format(cue_index, j)),
            text=str(raw.get("text") or ""),
            start=None if start is None else _coerce_time(start),
            end=None if end in (None, "") else _coerce_time(end),
        ))
    return words


def parse_json(content: str) -> ParseResult:
    """Parse a JSON cue document (bare array or ``{cues, metadata}``)."""
    try:
        document = json.loads(content)
    except (ValueError, TypeError, RecursionError) as exc:
        logger.warning("JSON parse error: %s", exc)
        return ParseResult(cues=[], metadata=Metadata())

    _log_schema_deviations(document)

    if isinstance(document, list):
        raw_cues = document
        metadata = Metadata()
    elif isinstance(document, dict):
        raw_cues = document.get("cues") or []
        metadata = Metadata.from_dict(document.get("metadata"))
    else:
        return ParseResult(cues=[], metadata=Metadata())

    if not isinstance(raw_cues, list):
        raw_cues = []

    cues: List[Cue] = []
    for i, raw in enumerate(raw_cues):
        if not isinstance(raw, dict):
            logger.debug("Skipping non-object JSON cue at index %d", i)
            continue
        raw_words = raw.get("words")
        cues.append(Cue(
            id=str(raw.get("id") or "json-{}".format(i)),
            start=_coerce_time(raw.get("start")),
            end=_coerce_time(raw.get("end")),
            text=str(raw.get("text") or ""),
            words=_coerce_words(raw_words, i) if isinstance(raw_words, list) else None,
        ))

    return ParseResult(cues=cues, metadata=metadata)


def stringify_json(cues: Sequence[Cue], metadata: Optional[Metadata] = None) -> str:
    """Serialize cues (and metadata when given) as an indented JSON document."""
    document: dict = {}
    if metadata is not None:
        document["metadata"] = metadata.to_dict()
    document["cues"] = [cue.to_dict() for cue in cues]
    return json.dumps(document, indent=2, ensure_ascii=False)
