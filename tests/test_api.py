"""Tests for the FastAPI converter API.

WHY: Validates that every endpoint behaves correctly — happy paths, error
cases, and the attachment headers clients rely on when saving files.

HOW: Each test function exercises one endpoint behavior through the
FastAPI TestClient and checks status code, body, and headers.

RULES:
- All tests use the FastAPI TestClient (synchronous)
- Each test is independent — the API holds no state between requests
- Tests cover: happy paths, 400 unknown format, 413 too large,
  422 validation / non-UTF-8 upload
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from subtitle_converter import __version__
from subtitle_converter.core.ir import SubtitleFormat
from subtitle_converter.server.app import app


@pytest.fixture
def client():
    return TestClient(app)


# ---------------------------------------------------------------------------
# GET /health and /formats
# ---------------------------------------------------------------------------


class TestHealthAndFormats:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}

    def test_formats_lists_every_tag(self, client):
        body = client.get("/formats").json()
        assert {f["key"] for f in body} == {f.value for f in SubtitleFormat}
        by_key = {f["key"]: f for f in body}
        assert by_key["vtt_karaoke"]["word_timing"] is True
        assert by_key["srt"]["word_timing"] is False
        assert by_key["srt"]["suffix"] == ".srt"


# ---------------------------------------------------------------------------
# POST /detect and /parse
# ---------------------------------------------------------------------------


class TestDetectAndParse:

    def test_detect_by_extension(self, client):
        response = client.post("/detect", json={"filename": "a.srt", "content": ""})
        assert response.json() == {"format": "srt"}

    def test_detect_by_content(self, client):
        response = client.post("/detect", json={"content": "WEBVTT\n\n"})
        assert response.json() == {"format": "vtt"}

    def test_parse_detects_format(self, client):
        content = "1\n00:00:01,000 --> 00:00:02,000\nHello\n"
        body = client.post("/parse", json={"content": content}).json()
        assert body["format"] == "srt"
        assert body["cues"] == [
            {"id": "srt-0", "start": 1000, "end": 2000, "text": "Hello", "words": None},
        ]
        assert body["metadata"] == {"title": None, "artist": None, "album": None, "by": None}

    def test_parse_lrc_metadata(self, client):
        body = client.post("/parse", json={
            "content": "[ti:Song]\n[00:01.00]Hi",
            "format": "lrc",
        }).json()
        assert body["metadata"]["title"] == "Song"
        assert body["cues"][0]["end"] == 4000

    def test_parse_malformed_json_is_empty(self, client):
        response = client.post("/parse", json={"content": "{not json", "format": "json"})
        assert response.status_code == 200
        assert response.json()["cues"] == []

    def test_parse_unknown_format_rejected(self, client):
        response = client.post("/parse", json={"content": "", "format": "docx"})
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# POST /export
# ---------------------------------------------------------------------------


class TestExport:

    def test_export_vtt_attachment(self, client):
        response = client.post("/export", json={
            "cues": [{"id": "a", "start": 1000, "end": 2000, "text": "Hi"}],
            "format": "vtt",
            "filename_stem": "song",
        })
        assert response.status_code == 200
        assert response.text.startswith("WEBVTT")
        assert response.headers["content-type"].startswith("text/vtt")
        assert response.headers["content-disposition"] == 'attachment; filename="song.vtt"'

    def test_export_with_metadata_and_words(self, client):
        response = client.post("/export", json={
            "cues": [{
                "id": "a", "start": 1000, "end": 2000, "text": "Hi there",
                "words": [
                    {"id": "w0", "text": "Hi", "start": 1000},
                    {"id": "w1", "text": "there", "start": 1500},
                ],
            }],
            "format": "lrc_enhanced",
            "metadata": {"title": "Song"},
        })
        assert response.text == "[ti:Song]\n[00:01.00]<00:01.00>Hi <00:01.50>there"
        assert 'filename="subtitles-enhanced.lrc"' in response.headers["content-disposition"]

    def test_export_strips_path_from_stem(self, client):
        response = client.post("/export", json={
            "cues": [], "format": "srt", "filename_stem": "../../etc/passwd",
        })
        assert 'filename="passwd.srt"' in response.headers["content-disposition"]


# ---------------------------------------------------------------------------
# POST /convert
# ---------------------------------------------------------------------------


class TestConvert:

    def test_lrc_to_srt(self, client):
        response = client.post(
            "/convert",
            files={"file": ("song.lrc", b"[00:01.00]Hello\n[00:02.00]World", "text/plain")},
            data={"target": "srt"},
        )
        assert response.status_code == 200
        assert "00:00:01,000 --> 00:00:02,000\nHello" in response.text
        assert 'filename="song.srt"' in response.headers["content-disposition"]

    def test_explicit_source(self, client):
        response = client.post(
            "/convert",
            files={"file": ("lyrics.dat", b"One\nTwo", "text/plain")},
            data={"target": "lrc", "source": "txt"},
        )
        assert response.text == "[00:00.00]One\n[00:02.00]Two"

    def test_utf8_bom_accepted(self, client):
        response = client.post(
            "/convert",
            files={"file": ("a.txt", b"\xef\xbb\xbfHi", "text/plain")},
            data={"target": "json"},
        )
        assert response.json()["cues"][0]["text"] == "Hi"

    def test_unknown_target(self, client):
        response = client.post(
            "/convert",
            files={"file": ("a.srt", b"", "text/plain")},
            data={"target": "docx"},
        )
        assert response.status_code == 400
        assert "Unknown format" in response.json()["detail"]

    def test_non_utf8_upload(self, client):
        response = client.post(
            "/convert",
            files={"file": ("a.srt", b"\xff\xfe\x00bad", "text/plain")},
            data={"target": "vtt"},
        )
        assert response.status_code == 422

    def test_upload_too_large(self, client, monkeypatch):
        monkeypatch.setattr("subtitle_converter.server.app.MAX_UPLOAD_BYTES", 10)
        response = client.post(
            "/convert",
            files={"file": ("a.txt", b"x" * 11, "text/plain")},
            data={"target": "srt"},
        )
        assert response.status_code == 413


# ---------------------------------------------------------------------------
# POST /timeline/append
# ---------------------------------------------------------------------------


class TestTimelineAppend:

    def test_generated_cues_shifted(self, client):
        response = client.post("/timeline/append", json={
            "existing": [{"id": "a", "start": 0, "end": 5000, "text": "A"}],
            "generated": [{"id": "g", "start": 0, "end": 1000, "text": "G"}],
        })
        cues = response.json()["cues"]
        assert [c["id"] for c in cues] == ["a", "g"]
        assert (cues[1]["start"], cues[1]["end"]) == (5000, 6000)
