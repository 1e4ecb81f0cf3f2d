"""Tests for the shared time codec.

WHY: Every parser and serializer goes through these functions, so a wrong
carry or rounding rule corrupts every format at once. Values past 24 hours
and exact hour boundaries are the classic failure points.

HOW: Encoders are checked against literal strings; the decoder against
each grammar in its priority list; round-trip properties over a spread of
millisecond values rather than an exhaustive grid.

RULES:
- Bare numbers decode as seconds, even when they look like milliseconds
- Negative input to an encoder raises ValueError
"""

import math

import pytest

from subtitle_converter.core.timecode import (
    TimePattern,
    decode,
    encode,
    ms_to_display,
    ms_to_lrc,
    ms_to_srt,
    ms_to_vtt,
    time_to_ms,
)

# Spread of values across the first day, plus boundaries.
SAMPLE_MS = [
    0, 1, 9, 10, 999, 1000, 59_999, 60_000, 83_456,
    3_599_999, 3_600_000, 3_661_001, 7_919_345, 43_200_500,
    86_399_999,
]


class TestEncoders:
    """Literal output of each encoder."""

    def test_srt(self):
        assert ms_to_srt(3_661_001) == "01:01:01,001"
        assert ms_to_srt(0) == "00:00:00,000"

    def test_vtt(self):
        assert ms_to_vtt(1500) == "00:00:01.500"
        assert ms_to_vtt(3_600_000) == "01:00:00.000"

    def test_hours_past_a_day(self):
        assert ms_to_vtt(90_000_000) == "25:00:00.000"
        assert ms_to_srt(360_000_000) == "100:00:00,000"

    def test_lrc(self):
        assert ms_to_lrc(83_450) == "01:23.45"
        assert ms_to_lrc(83_454) == "01:23.45"
        assert ms_to_lrc(125_005) == "02:05.01"

    def test_lrc_rounding_carries_into_minutes(self):
        assert ms_to_lrc(59_995) == "01:00.00"

    def test_lrc_minutes_keep_counting(self):
        assert ms_to_lrc(3_600_000) == "60:00.00"

    def test_display(self):
        assert ms_to_display(83_456) == "01:23.456"

    def test_fractional_input_rounds_half_up(self):
        assert ms_to_srt(1000.5) == "00:00:01,001"
        assert ms_to_srt(999.4) == "00:00:00,999"

    def test_encode_dispatch(self):
        assert encode(3_661_001, TimePattern.SRT) == "01:01:01,001"
        assert encode(1500, "vtt") == "00:00:01.500"
        assert encode(83_450, TimePattern.LRC) == "01:23.45"

    @pytest.mark.parametrize("encoder", [ms_to_srt, ms_to_vtt, ms_to_lrc, ms_to_display])
    def test_negative_raises(self, encoder):
        with pytest.raises(ValueError):
            encoder(-1)

    def test_encode_unknown_pattern_raises(self):
        with pytest.raises(ValueError):
            encode(0, "ass")


class TestDecoder:
    """Each grammar of time_to_ms, in priority order."""

    def test_lrc_style(self):
        assert decode("01:23.45") == 83_450
        assert time_to_ms("01:23.4") == 83_400
        assert time_to_ms("01:23.456") == 83_456
        assert time_to_ms("1:05") == 65_000

    def test_srt_and_vtt_style(self):
        assert time_to_ms("01:01:01,001") == 3_661_001
        assert time_to_ms("00:00:01.5") == 1500
        assert time_to_ms("1:02:03,4") == 3_723_400

    def test_suffixed_offsets(self):
        assert time_to_ms("10.5s") == 10_500
        assert time_to_ms("500ms") == 500
        assert time_to_ms("2.5ms") == 3

    def test_bare_number_is_seconds(self):
        assert time_to_ms("5") == 5000
        assert time_to_ms("1500") == 1_500_000

    def test_surrounding_whitespace(self):
        assert time_to_ms("  00:00:02,000  ") == 2000

    @pytest.mark.parametrize("text", ["garbage", "", None, "-5", "1:2:3:4"])
    def test_unparseable_is_zero(self, text):
        assert time_to_ms(text) == 0


class TestRoundTrip:
    """decode(encode(ms)) for every textual pattern."""

    @pytest.mark.parametrize("ms", SAMPLE_MS)
    def test_srt(self, ms):
        assert time_to_ms(ms_to_srt(ms)) == ms

    @pytest.mark.parametrize("ms", SAMPLE_MS)
    def test_vtt(self, ms):
        assert time_to_ms(ms_to_vtt(ms)) == ms

    @pytest.mark.parametrize("ms", [ms for ms in SAMPLE_MS if ms < 6_000_000])
    def test_display(self, ms):
        assert time_to_ms(ms_to_display(ms)) == ms

    def test_display_four_digit_minutes_not_decodable(self):
        # the display pattern is for on-screen fields under 100 minutes
        assert ms_to_display(86_399_999) == "1439:59.999"
        assert time_to_ms("1439:59.999") == 0

    @pytest.mark.parametrize("ms", [0, 5, 83_454, 125_005, 599_994, 3_599_995, 5_999_995])
    def test_lrc_rounds_to_ten_ms(self, ms):
        expected = int(math.floor(ms / 10 + 0.5)) * 10
        assert time_to_ms(ms_to_lrc(ms)) == expected
