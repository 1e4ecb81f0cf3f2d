"""Tests for the cue-list transforms used by the editor."""

import pytest

from subtitle_converter.core.ir import Cue, Word
from subtitle_converter.core.timeline import (
    active_cue_index,
    append_generated_cues,
    display_words,
    move_cue,
    remove_cue,
    update_cue_time,
    update_word,
)


@pytest.fixture
def abc():
    return [
        Cue(id="a", start=0, end=1000, text="A"),
        Cue(id="b", start=1000, end=2000, text="B"),
        Cue(id="c", start=2000, end=3000, text="C"),
    ]


class TestDisplayWords:

    def test_existing_words_returned(self, karaoke_cue):
        assert display_words(karaoke_cue) == karaoke_cue.words

    def test_synthesised_for_untimed_cue(self):
        words = display_words(Cue(id="c", start=1000, end=2000, text="a b  c"))
        assert [w.text for w in words] == ["a", "b", "c"]
        assert [w.start for w in words] == [1000, 1200, 1400]
        assert [w.end for w in words] == [1200, 1400, 1600]
        assert [w.id for w in words] == ["gen-c-0", "gen-c-1", "gen-c-2"]


class TestUpdateWord:

    def test_text_rebuilt(self, karaoke_cue):
        updated = update_word(karaoke_cue, 1, text="small")
        assert updated.text == "Hello small world"
        assert updated.words[1].text == "small"
        assert karaoke_cue.words[1].text == "big"

    def test_times_from_strings(self, karaoke_cue):
        updated = update_word(karaoke_cue, 0, start="00:00:01,750", end=1900)
        assert (updated.words[0].start, updated.words[0].end) == (1750, 1900)

    def test_untimed_cue_gets_words(self):
        updated = update_word(Cue(id="c", start=0, end=1000, text="one two"), 0, text="uno")
        assert updated.text == "uno two"
        assert len(updated.words) == 2

    def test_bad_index(self, karaoke_cue):
        with pytest.raises(IndexError):
            update_word(karaoke_cue, 3, text="x")


class TestUpdateCueTime:

    def test_string_value(self, abc):
        assert update_cue_time(abc[0], "start", "00:01.50").start == 1500

    def test_int_value(self, abc):
        assert update_cue_time(abc[0], "end", 4200).end == 4200

    def test_unknown_field(self, abc):
        with pytest.raises(ValueError):
            update_cue_time(abc[0], "middle", 0)


class TestReorder:

    def test_move(self, abc):
        moved = move_cue(abc, 0, 2)
        assert [c.id for c in moved] == ["b", "c", "a"]
        assert [c.id for c in abc] == ["a", "b", "c"]

    def test_remove(self, abc):
        assert [c.id for c in remove_cue(abc, 1)] == ["a", "c"]

    def test_remove_bad_index(self, abc):
        with pytest.raises(IndexError):
            remove_cue(abc, 5)


class TestActiveCue:

    def test_boundaries(self, abc):
        assert active_cue_index(abc, 0) == 0
        assert active_cue_index(abc, 1000) == 1
        assert active_cue_index(abc, 3000) == -1

    def test_empty(self):
        assert active_cue_index([], 0) == -1


class TestAppendGenerated:

    def test_shifted_after_last_cue(self, abc):
        generated = [Cue(id="g0", start=0, end=1000, text="new line", words=[
            Word(id="gw0", text="new", start=0, end=500),
            Word(id="gw1", text="line"),
        ])]
        merged = append_generated_cues(abc, generated)
        assert len(merged) == 4
        added = merged[-1]
        assert (added.start, added.end) == (3000, 4000)
        assert (added.words[0].start, added.words[0].end) == (3000, 3500)
        assert added.words[1].start is None

    def test_no_existing_cues(self):
        generated = [Cue(id="g0", start=0, end=1000, text="x")]
        assert append_generated_cues([], generated) == generated
