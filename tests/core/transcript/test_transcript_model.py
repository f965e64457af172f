from __future__ import annotations

import pytest

from vidscribe.core.timerange import TimeRange
from vidscribe.core.transcript.ingest import parse_segments
from vidscribe.core.transcript.model import TranscriptModel
from vidscribe.core.transcript.models import TranscriptSegment, Word, synthesize_words
from vidscribe.errors import NotFoundError, ValidationError


def _model(payload) -> TranscriptModel:
    m = TranscriptModel()
    m.replace_all(parse_segments(payload), language="en")
    return m


def _hello_world() -> TranscriptModel:
    return _model([
        {"id": "s1", "start": 0, "end": 2, "text": "hello world",
         "words": [{"text": "hello", "start": 0, "end": 1}, {"text": "world", "start": 1, "end": 2}]},
        {"id": "s2", "start": 3, "end": 4, "text": "bye",
         "words": [{"text": "bye", "start": 3, "end": 4}]},
    ])


def test_active_word_half_open() -> None:
    m = _hello_world()
    assert m.active_word_at(0.5).text == "hello"
    assert m.active_word_at(1.0).text == "world"
    assert m.active_word_at(1.5).text == "world"
    # gap between segments, before the start and past the end
    assert m.active_word_at(2.5) is None
    assert m.active_word_at(-1) is None
    assert m.active_word_at(4.0) is None
    assert m.active_word_at(5) is None


def test_active_word_never_outside_its_range() -> None:
    m = _hello_world()
    t = 0.0
    while t < 5.0:
        w = m.active_word_at(t)
        if w is not None:
            assert w.range.contains(t)
        t += 0.05


def test_locate_and_time_of_word() -> None:
    m = _hello_world()
    loc = m.locate(3.2)
    assert (loc.segment_id, loc.segment_index, loc.word_index) == ("s2", 1, 0)
    assert m.time_of_word("s1", 1) == 1.0
    with pytest.raises(NotFoundError):
        m.time_of_word("s1", 5)
    with pytest.raises(NotFoundError):
        m.time_of_word("nope", 0)


def test_segments_without_word_timing_get_synthesized_words() -> None:
    m = _model([{"id": "s1", "start": 0, "end": 3, "text": "one two three"}])
    w = m.active_word_at(1.5)
    assert w.text == "two"
    assert w.synthetic
    words = m.segments[0].timed_words()
    assert words[-1].end == 3
    assert [x.start for x in words] == pytest.approx([0.0, 1.0, 2.0])


def test_synthesize_words_empty_text() -> None:
    assert synthesize_words("   ", TimeRange(0, 1)) == ()


def test_overlapping_payload_rejected_and_model_unchanged() -> None:
    m = _hello_world()
    before_version = m.version
    before = m.segments
    bad = parse_segments([
        {"id": "a", "start": 0, "end": 2, "text": "x"},
        {"id": "b", "start": 1, "end": 3, "text": "y"},
    ])
    with pytest.raises(ValidationError):
        m.replace_all(bad)
    assert m.segments == before
    assert m.version == before_version
    assert m.active_word_at(0.5).text == "hello"


def test_overlapping_words_across_segments_rejected() -> None:
    segs = [
        TranscriptSegment(id="a", range=TimeRange(0, 2), text="a",
                          words=(Word("a", TimeRange(0, 2.5)),)),
        TranscriptSegment(id="b", range=TimeRange(2, 3), text="b",
                          words=(Word("b", TimeRange(2, 3)),)),
    ]
    with pytest.raises(ValidationError):
        TranscriptModel().replace_all(segs)


@pytest.mark.parametrize("word_range", [TimeRange(0, 5), TimeRange(4, 7), TimeRange(3.5, 4.5)])
def test_word_outside_its_segment_rejected(word_range: TimeRange) -> None:
    m = _hello_world()
    before = m.segments
    late = [TranscriptSegment(id="late", range=TimeRange(4, 6), text="late",
                              words=(Word("late", word_range),))]
    with pytest.raises(ValidationError) as ei:
        m.replace_all(late)
    assert ei.value.details == {"segment_index": 0, "word_index": 0}
    assert "outside its segment" in ei.value.message
    assert m.segments == before
    assert m.active_word_at(1.0).text == "world"


def test_word_touching_segment_bounds_accepted() -> None:
    m = TranscriptModel()
    m.replace_all([TranscriptSegment(id="s", range=TimeRange(4, 6), text="edge",
                                     words=(Word("edge", TimeRange(4, 6)),))])
    assert m.active_word_at(4.0).text == "edge"
    assert m.active_word_at(1.0) is None


def test_duplicate_segment_ids_rejected() -> None:
    with pytest.raises(ValidationError):
        _model([{"id": "x", "start": 0, "end": 1, "text": "a"}, {"id": "x", "start": 1, "end": 2, "text": "b"}])


def test_text_for_range() -> None:
    m = _hello_world()
    assert m.text_for(TimeRange(0, 4)) == "hello world bye"
    assert m.text_for(TimeRange(0.5, 1.0)) == "hello"
    assert m.text_for(TimeRange(1.5, 1.5)) == "world"
    assert m.full_text() == "hello world bye"


def test_delete_and_restore_words() -> None:
    m = _hello_world()
    v = m.version
    m.delete_words("s1", 0, 0)
    assert m.version == v + 1
    assert m.text_for(TimeRange(0, 2)) == "world"
    assert m.deleted_ranges() == [("s1", TimeRange(0, 1))]
    # deleted words keep their timing, so highlighting still resolves them
    assert m.active_word_at(0.5).deleted
    m.restore_words("s1", [0])
    assert m.deleted_ranges() == []
    with pytest.raises(NotFoundError):
        m.delete_words("s1", 1, 4)


def test_clear() -> None:
    m = _hello_world()
    m.clear()
    assert m.is_empty
    assert m.language is None
    assert m.active_word_at(0.5) is None
