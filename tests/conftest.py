"""Shared test fixtures for the subtitle_converter test suite.

WHY: Parser, serializer, round-trip, and API tests all need the same small
timeline — a word-timed line, a plain line, and document metadata — plus a
handful of hand-written documents in each format. Centralizing them here
keeps the expected values in one place.

HOW: Fixtures return freshly built IR records; the raw documents are
module-level constants so parametrized tests can reference them directly.

RULES:
- Word start times are multiples of 10 ms so they survive LRC's
  centisecond precision
- Cue texts are single-line unless a test is specifically about newlines
"""

from typing import List

import pytest

from subtitle_converter.core.ir import Cue, Metadata, Word


# ---------------------------------------------------------------------------
# Raw documents
# ---------------------------------------------------------------------------

SRT_DOC = "1\n00:00:01,000 --> 00:00:02,500\nHello\n\n2\n00:00:03,000 --> 00:00:04,000\nWorld\n"

LRC_DOC = (
    "[ti: My Song ]\n"
    "[ar:Artist]\n"
    "[al:Album]\n"
    "[by:Me]\n"
    "[00:01.00]First line\n"
    "[00:03.50]Second line\n"
    "[00:07.25]Third line\n"
)

ENHANCED_LRC_DOC = (
    "[00:10.00]<00:10.00>Hello <00:10.50>big <00:11.20>world <00:12.00>\n"
    "[00:13.00]Next"
)

VTT_DOC = (
    "WEBVTT\n"
    "Note Title: My Song\n"
    "\n"
    "00:00:01.000 --> 00:00:03.000 align:start position:10%\n"
    "<b>Hello</b> world\n"
    "second line\n"
    "\n"
    "00:00:04.000 --> 00:00:05.000\n"
    "Bye\n"
)

VTT_KARAOKE_DOC = (
    "WEBVTT\n"
    "\n"
    "00:00:10.000 --> 00:00:14.000\n"
    "<00:00:10.000>Hello <00:00:11.000>big world <00:00:13.000>again\n"
)

TTML_DOC = """<?xml version="1.0" encoding="UTF-8"?>
<tt xmlns="http://www.w3.org/ns/ttml">
  <head><metadata><title>ignored</title></metadata></head>
  <body><div>
    <p begin="00:00:01.000" end="00:00:03.000">Hello<br/>world</p>
    <p begin="4s" dur="1.5s">  Spaced
        out   <span>text</span></p>
    <p begin="00:00:07.000">No end</p>
    <p>No begin</p>
    <p begin="00:00:09.000" end="00:00:10.000"><metadata>skip me</metadata>Visible</p>
  </div></body>
</tt>"""

TTML_KARAOKE_DOC = (
    '<tt xmlns="http://www.w3.org/ns/ttml"><body><div>'
    '<p begin="00:00:10.000" end="00:00:12.000">'
    '<span begin="00:00:00.000" end="00:00:00.500">Hello</span> '
    '<span begin="00:00:00.500" end="00:00:01.000">world</span>'
    "</p></div></body></tt>"
)


# ---------------------------------------------------------------------------
# IR fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def karaoke_cue() -> Cue:
    """A cue with per-word timing; the last word has no end."""
    return Cue(
        id="c1",
        start=1000,
        end=3500,
        text="Hello big world",
        words=[
            Word(id="w1", text="Hello", start=1000, end=1400),
            Word(id="w2", text="big", start=1500, end=1900),
            Word(id="w3", text="world", start=2000),
        ],
    )


@pytest.fixture
def sample_cues(karaoke_cue) -> List[Cue]:
    """Three cues: one word-timed, two plain, with a stanza-sized gap."""
    return [
        karaoke_cue,
        Cue(id="c2", start=4000, end=6000, text="Second line"),
        Cue(id="c3", start=9000, end=11_000, text="Third line"),
    ]


@pytest.fixture
def sample_metadata() -> Metadata:
    return Metadata(title="Song", artist="Band", album="Record", by="Editor")
