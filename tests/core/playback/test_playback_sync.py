from __future__ import annotations

import pytest

from vidscribe.core.playback.player import CommandLogPlayer
from vidscribe.core.playback.sync import PlaybackSync, SeekOrigin
from vidscribe.core.timeline.model import TimelineModel
from vidscribe.core.timeline.models import Clip, Track, TrackKind
from vidscribe.core.timerange import TimeRange
from vidscribe.core.transcript.ingest import parse_segments
from vidscribe.core.transcript.model import TranscriptModel
from vidscribe.errors import ValidationError


def _sync():
    transcript = TranscriptModel()
    transcript.replace_all(parse_segments([
        {"id": "s1", "start": 0, "end": 2, "text": "hello world",
         "words": [{"text": "hello", "start": 0, "end": 1}, {"text": "world", "start": 1, "end": 2}]},
    ]))
    timeline = TimelineModel(base_pixels_per_second=100)
    timeline.add_track(Track(id="v", kind=TrackKind.VIDEO, clips=(Clip("clip", "clip", TimeRange(0, 10)),)))
    player = CommandLogPlayer()
    sync = PlaybackSync(transcript, timeline, player)
    sync.set_duration(10)
    return sync, player


def test_word_click_while_playing_seeks_and_pauses() -> None:
    sync, player = _sync()
    sync.play()
    assert sync.is_playing
    seq = player.last_seq

    sync.seek_to_word("s1", 1)

    assert sync.current_time == 1.0
    assert sync.seek_version == 1
    assert not sync.is_playing
    assert sync.state.last_seek_origin is SeekOrigin.USER
    assert [(c.name, c.value) for c in player.commands_since(seq)] == [("pause", None), ("seek", 1.0)]


def test_playback_tick_never_bumps_seek_version() -> None:
    sync, player = _sync()
    sync.play()
    seq = player.last_seq
    for t in (0.1, 0.5, 1.2):
        sync.on_playback_tick(t)
    assert sync.seek_version == 0
    assert sync.current_time == 1.2
    assert sync.is_playing
    assert sync.state.last_seek_origin is SeekOrigin.PLAYBACK
    assert sync.active_word().word.text == "world"
    # ticks are reports from the player, nothing is sent back
    assert player.commands_since(seq) == []


def test_current_time_clamped_to_duration() -> None:
    sync, _ = _sync()
    assert sync.seek(25) == 10
    assert sync.seek(-3) == 0
    assert sync.on_playback_tick(11) == 10


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_times_are_rejected(bad: float) -> None:
    sync, player = _sync()
    sync.seek(3)
    before = sync.state
    seq = player.last_seq
    for call in (sync.seek, sync.on_playback_tick, sync.seek_to_position, sync.set_duration, sync.set_volume):
        with pytest.raises(ValidationError):
            call(bad)
    assert sync.state == before
    assert sync.current_time == 3
    assert player.commands_since(seq) == []


def test_unload_source_resets_player_and_time() -> None:
    sync, player = _sync()
    sync.load_source("file:///tmp/a.mp4")
    sync.seek(4)
    assert sync.unload_source("file:///tmp/other.mp4") is False
    assert player.source_url == "file:///tmp/a.mp4"
    assert sync.unload_source("file:///tmp/a.mp4") is True
    assert player.source_url is None
    assert sync.source_url is None
    assert (sync.current_time, sync.state.duration) == (0.0, 0.0)
    assert player.commands_since(player.last_seq - 1)[0].name == "unload"


def test_duration_unknown_pins_time_to_zero() -> None:
    sync = PlaybackSync(TranscriptModel(), TimelineModel())
    assert sync.seek(5) == 0.0
    assert sync.state.duration == 0.0


def test_shrinking_duration_clamps_current_time() -> None:
    sync, _ = _sync()
    sync.seek(8)
    sync.set_duration(4)
    assert sync.current_time == 4


def test_highlight_and_timeline_seek() -> None:
    sync, _ = _sync()
    sync.seek_to_position(50)
    assert sync.current_time == pytest.approx(0.5)
    hl = sync.highlight()
    assert hl.word.word.text == "hello"
    assert hl.clips == (("v", "clip"),)
    assert hl.playhead_x == pytest.approx(50)


def test_volume_mute_and_toggle() -> None:
    sync, player = _sync()
    assert sync.set_volume(1.7) == 1.0
    assert sync.set_volume(-1) == 0.0
    sync.set_muted(True)
    sync.toggle()
    assert sync.is_playing
    sync.toggle()
    assert not sync.is_playing
    names = [c.name for c in player.commands_since(0)]
    assert names[-5:] == ["volume", "volume", "muted", "play", "pause"]
    assert sync.state.muted


def test_listeners_notified_and_failures_ignored() -> None:
    sync, _ = _sync()
    seen = []

    def boom(state, prev):
        raise RuntimeError("listener bug")

    sync.subscribe(boom)
    unsubscribe = sync.subscribe(lambda state, prev: seen.append((prev.current_time, state.current_time)))
    sync.seek(3)
    unsubscribe()
    sync.seek(4)
    assert seen == [(0.0, 3.0)]


def test_ended_stops_at_duration() -> None:
    sync, _ = _sync()
    sync.play()
    sync.on_playback_ended()
    assert not sync.is_playing
    assert sync.current_time == 10
