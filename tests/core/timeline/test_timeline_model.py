from __future__ import annotations

import pytest

from vidscribe.core.timeline.model import MAX_ZOOM, MIN_ZOOM, TimelineModel
from vidscribe.core.timeline.models import Clip, Track, TrackKind
from vidscribe.core.timerange import TimeRange
from vidscribe.errors import NotFoundError, OverlapError, ValidationError


def _clip(cid: str, start: float, end: float) -> Clip:
    return Clip(id=cid, name=cid, range=TimeRange(start, end))


def _timeline() -> TimelineModel:
    tl = TimelineModel(base_pixels_per_second=50, media_duration=10)
    tl.add_track(Track(id="v", kind=TrackKind.VIDEO))
    tl.add_track(Track(id="a", kind="audio"))
    tl.add_track(Track(id="c", kind=TrackKind.CAPTION))
    return tl


def test_insert_overlap_rejected_touching_allowed() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("c1", 0, 3))
    with pytest.raises(OverlapError) as ei:
        tl.insert_clip("v", _clip("c2", 2, 5))
    assert ei.value.code == "clip_overlap"
    assert ei.value.status_code == 409
    tl.insert_clip("v", _clip("c3", 3, 5))
    assert [c.id for c in tl.track("v").clips] == ["c1", "c3"]


def test_cross_track_overlap_is_allowed() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("v1", 0, 4))
    tl.insert_clip("a", _clip("a1", 0, 4))
    tl.insert_clip("c", _clip("c1", 1, 2))
    hits = {(t.id, c.id) for t, c in tl.clips_at(1.5)}
    assert hits == {("v", "v1"), ("a", "a1"), ("c", "c1")}


def test_move_clip_validates_overlap() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("c1", 0, 3))
    tl.insert_clip("v", _clip("c2", 4, 6))
    with pytest.raises(OverlapError):
        tl.move_clip("c2", 2.0)
    moved = tl.move_clip("c2", 3.0)
    assert (moved.start, moved.end) == (3.0, 5.0)
    # moving onto its own old position is fine
    tl.move_clip("c1", 0.0)


def test_move_clip_with_snap() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("c1", 0, 1))
    moved = tl.move_clip("c1", 2.13, snap=True)
    assert moved.start == pytest.approx(2.25)


def test_duplicate_ids_rejected() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("x", 0, 1))
    with pytest.raises(ValidationError):
        tl.insert_clip("a", _clip("x", 5, 6))
    with pytest.raises(ValidationError):
        tl.add_track(Track(id="v", kind=TrackKind.VIDEO))
    with pytest.raises(NotFoundError):
        tl.insert_clip("missing", _clip("y", 0, 1))


def test_add_track_with_overlapping_clips_rejected() -> None:
    tl = TimelineModel()
    with pytest.raises(OverlapError):
        tl.add_track(Track(id="v", kind=TrackKind.VIDEO, clips=(_clip("a", 0, 2), _clip("b", 1, 3))))
    assert tl.tracks == ()


def test_position_time_round_trip() -> None:
    tl = _timeline()
    for zoom in (MIN_ZOOM, 1.0, 2.5, MAX_ZOOM):
        tl.set_zoom(zoom)
        for t in (0.0, 0.37, 4.2, 9.99):
            assert tl.position_to_time(tl.time_to_position(t)) == pytest.approx(t)
        for x in (0.0, 13.0, tl.width / 2):
            assert tl.time_to_position(tl.position_to_time(x)) == pytest.approx(x)


def test_position_to_time_clamps_to_duration() -> None:
    tl = _timeline()
    assert tl.position_to_time(-20) == 0.0
    assert tl.position_to_time(10_000) == tl.duration == 10


def test_duration_covers_clips_past_media_end() -> None:
    tl = _timeline()
    tl.insert_clip("a", _clip("late", 9, 12))
    assert tl.duration == 12


def test_zoom_is_clamped_and_stepped() -> None:
    tl = TimelineModel(base_pixels_per_second=50)
    assert tl.set_zoom(10) == MAX_ZOOM
    assert tl.set_zoom(0.01) == MIN_ZOOM
    assert tl.set_zoom(1.1) == 1.0
    assert tl.zoom_in() == 1.25
    assert tl.pixels_per_second == pytest.approx(62.5)
    tl.set_zoom(MIN_ZOOM)
    assert tl.zoom_out() == MIN_ZOOM


def test_snap_step_follows_zoom() -> None:
    tl = TimelineModel()
    tl.set_zoom(2)
    assert tl.snap(1.04) == pytest.approx(1.0)
    tl.set_zoom(1)
    assert tl.snap(1.13) == pytest.approx(1.25)
    tl.set_zoom(0.5)
    assert tl.snap(1.3) == pytest.approx(1.5)
    tl.snap_enabled = False
    assert tl.snap(1.3) == 1.3


def test_snapped_times_have_no_float_noise() -> None:
    tl = TimelineModel()
    tl.set_zoom(2)
    assert tl.snap(0.31) == 0.3
    assert repr(tl.snap(0.31)) == "0.3"
    assert repr(tl.snap(0.68)) == "0.7"
    tl.set_zoom(1)
    assert tl.snap(2.13) == 2.25
    tl.set_zoom(0.5)
    assert tl.snap(1.3) == 1.5


def test_split_clip_carries_source_offset() -> None:
    tl = _timeline()
    tl.insert_clip("v", Clip(id="c", name="c", range=TimeRange(2, 6), source_start=1.0))
    head, tail = tl.split_clip("c", 3.5)
    assert head.id == "c"
    assert (head.start, head.end) == (2, 3.5)
    assert (tail.start, tail.end) == (3.5, 6)
    assert tail.source_start == pytest.approx(2.5)
    with pytest.raises(ValidationError):
        tl.split_clip("c", 2)


def test_remove_clip_and_track() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("c", 0, 1))
    tl.remove_clip("c")
    assert tl.track("v").clips == ()
    tl.remove_track("c")
    assert [t.id for t in tl.tracks] == ["v", "a"]
    with pytest.raises(NotFoundError):
        tl.remove_clip("c")


def test_cut_range_collapses_video_and_audio_only() -> None:
    tl = _timeline()
    tl.insert_clip("v", _clip("before", 0, 2))
    tl.insert_clip("v", _clip("straddle", 3, 8))
    tl.insert_clip("a", _clip("inside", 4, 5))
    tl.insert_clip("a", _clip("after", 8, 9))
    tl.insert_clip("c", _clip("cap", 4, 5))

    tl.cut_range(TimeRange(4, 6))

    v = tl.track("v").clips
    assert [(c.start, c.end) for c in v][:2] == [(0, 2), (3, 4)]
    cont = v[2]
    assert (cont.start, cont.end) == (4, 6)
    assert cont.source_start == pytest.approx(3.0)
    a = tl.track("a").clips
    assert [(c.id, c.start, c.end) for c in a] == [("after", 6, 7)]
    assert [(c.start, c.end) for c in tl.track("c").clips] == [(4, 5)]
