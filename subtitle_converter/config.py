"""Configuration constants, extension mappings, and .env loading.

WHY: Centralizes all tunable values so they are easy to find, update, and
override. Timing placeholders, thresholds, the extension table, and server
defaults are plain data — not buried in parser logic — so both humans and
coding agents can modify them confidently.

HOW: python-dotenv loads the .env file on import. Format constants are
module-level ints, strings, and dicts. Runtime settings (server host/port,
upload limit, log level, default export format) can be overridden via
environment variables.

RULES:
- Format timing constants are NOT environment-overridable: parse and
  serialize output must be reproducible for identical input
- EXTENSION_FORMATS maps lowercase extensions (with dot) to format tags
- Runtime defaults are read once at import time
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Format timing constants (milliseconds)
# ---------------------------------------------------------------------------

LRC_LAST_CUE_HOLD_MS = 3000
"""Placeholder duration for the last LRC line, which has no following line."""

TTML_DEFAULT_DURATION_MS = 2000
"""Duration of a TTML <p> that carries neither ``end`` nor ``dur``."""

TXT_LINE_DURATION_MS = 2000
"""Synthetic window given to each plain-text line on import."""

STANZA_BREAK_THRESHOLD_MS = 2000
"""Silence between two cues at or above which TXT export inserts a blank line."""

KARAOKE_WORD_DURATION_MS = 300
"""Default span of a TTML karaoke word that has no explicit end."""

DISPLAY_WORD_DURATION_MS = 200
"""Per-word spacing used when synthesising words from untimed cue text."""

# ---------------------------------------------------------------------------
# Format identification
# ---------------------------------------------------------------------------

TTML_NAMESPACE = "http://www.w3.org/ns/ttml"

EXTENSION_FORMATS: dict[str, str] = {
    ".lrc": "lrc",
    ".srt": "srt",
    ".vtt": "vtt",
    ".xml": "ttml",
    ".ttml": "ttml",
    ".json": "json",
    ".txt": "txt",
}
"""Filename extensions (lowercase, with dot) → SubtitleFormat values."""

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_EXPORT_FORMAT = os.getenv("DEFAULT_EXPORT_FORMAT", "srt")
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
