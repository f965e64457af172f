from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from vidscribe.core.playback.player import MediaPlayer
from vidscribe.core.timeline.model import TimelineModel
from vidscribe.core.transcript.model import TranscriptModel, WordLocation
from vidscribe.errors import ValidationError
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.playback")


class SeekOrigin(str, Enum):
    USER = "user"
    PLAYBACK = "playback"


@dataclass(frozen=True)
class PlayheadState:
    current_time: float = 0.0
    duration: float = 0.0
    is_playing: bool = False
    seek_version: int = 0
    last_seek_origin: SeekOrigin = SeekOrigin.PLAYBACK
    volume: float = 1.0
    muted: bool = False

    def to_dict(self) -> dict:
        return {
            "current_time": self.current_time,
            "duration": self.duration,
            "is_playing": self.is_playing,
            "seek_version": self.seek_version,
            "last_seek_origin": self.last_seek_origin.value,
            "volume": self.volume,
            "muted": self.muted,
        }


@dataclass(frozen=True)
class Highlight:
    """What the presentation layer should light up for the current time."""
    word: Optional[WordLocation]
    clips: Tuple[Tuple[str, str], ...]  # (track_id, clip_id)
    playhead_x: float


Listener = Callable[[PlayheadState, PlayheadState], None]


class PlaybackSync:
    """
    Single authority for "current time".

    - User seeks (word click, timeline click, explicit seek) bump seek_version,
      pause playback and tell the player to jump.
    - Natural playback ticks reported by the player only move current_time;
      seek_version is untouched so the player binding never echoes a seek back.
    current_time is always clamped to [0, duration]; non-finite input is rejected
    before any state changes.
    """

    def __init__(
        self,
        transcript: TranscriptModel,
        timeline: TimelineModel,
        player: Optional[MediaPlayer] = None,
    ) -> None:
        self._transcript = transcript
        self._timeline = timeline
        self._player = player
        self._state = PlayheadState()
        self._listeners: List[Listener] = []
        self._source_url: Optional[str] = None

    # -------------------------
    # Read
    # -------------------------

    @property
    def state(self) -> PlayheadState:
        return self._state

    @property
    def current_time(self) -> float:
        return self._state.current_time

    @property
    def seek_version(self) -> int:
        return self._state.seek_version

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def player(self) -> Optional[MediaPlayer]:
        return self._player

    def active_word(self) -> Optional[WordLocation]:
        return self._transcript.locate(self._state.current_time)

    def active_clips(self) -> Tuple[Tuple[str, str], ...]:
        return tuple((t.id, c.id) for t, c in self._timeline.clips_at(self._state.current_time))

    def playhead_position(self) -> float:
        return self._timeline.time_to_position(self._state.current_time)

    def highlight(self) -> Highlight:
        return Highlight(
            word=self.active_word(),
            clips=self.active_clips(),
            playhead_x=self.playhead_position(),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -------------------------
    # Player binding
    # -------------------------

    def attach_player(self, player: Optional[MediaPlayer]) -> None:
        self._player = player

    @property
    def source_url(self) -> Optional[str]:
        return self._source_url

    def load_source(self, url: str) -> None:
        self._source_url = url
        if self._player is not None:
            self._player.load(url)

    def unload_source(self, url: Optional[str] = None) -> bool:
        """
        Detach the player from its source, e.g. after a local preview was released.
        With `url`, only unloads if that is still the loaded source. Returns True if unloaded.
        """
        if url is not None and url != self._source_url:
            return False
        self._source_url = None
        if self._player is not None:
            self._player.unload()
        self._timeline.set_media_duration(0.0)
        self._set(duration=0.0, current_time=0.0, is_playing=False)
        return True

    def set_duration(self, duration: float) -> None:
        """Called once the player knows the media length."""
        d = max(0.0, _finite(duration, "duration"))
        self._timeline.set_media_duration(d)
        self._set(duration=d, current_time=self._clamp(self._state.current_time, d))

    # -------------------------
    # Intents
    # -------------------------

    def seek(self, t: float) -> float:
        """User-initiated seek: pauses playback, bumps seek_version, drives the player."""
        target = self._clamp(t)
        self._set(
            current_time=target,
            seek_version=self._state.seek_version + 1,
            is_playing=False,
            last_seek_origin=SeekOrigin.USER,
        )
        if self._player is not None:
            self._player.pause()
            self._player.seek(target)
        logger.debug("SEEK t=%.3f version=%d", target, self._state.seek_version)
        return target

    def seek_to_word(self, segment_id: str, word_index: int) -> float:
        return self.seek(self._transcript.time_of_word(segment_id, word_index))

    def seek_to_position(self, x: float) -> float:
        return self.seek(self._timeline.position_to_time(_finite(x, "position")))

    def on_playback_tick(self, t: float) -> float:
        """Natural advance reported by the player; never bumps seek_version."""
        target = self._clamp(t)
        self._set(current_time=target, last_seek_origin=SeekOrigin.PLAYBACK)
        return target

    def on_playback_ended(self) -> None:
        self._set(is_playing=False, current_time=self._state.duration)

    def play(self) -> None:
        self._set(is_playing=True)
        if self._player is not None:
            self._player.play()

    def pause(self) -> None:
        self._set(is_playing=False)
        if self._player is not None:
            self._player.pause()

    def toggle(self) -> None:
        if self._state.is_playing:
            self.pause()
        else:
            self.play()

    def set_volume(self, volume: float) -> float:
        v = min(1.0, max(0.0, _finite(volume, "volume")))
        self._set(volume=v)
        if self._player is not None:
            self._player.set_volume(v)
        return v

    def set_muted(self, muted: bool) -> None:
        self._set(muted=bool(muted))
        if self._player is not None:
            self._player.set_muted(bool(muted))

    # -------------------------
    # Internal helpers
    # -------------------------

    def _clamp(self, t: float, duration: Optional[float] = None) -> float:
        d = self._state.duration if duration is None else duration
        return min(max(_finite(t, "time"), 0.0), d)

    def _set(self, **changes) -> None:
        prev = self._state
        self._state = replace(prev, **changes)
        if self._state == prev:
            return
        for listener in list(self._listeners):
            try:
                listener(self._state, prev)
            except Exception:
                logger.exception("Playback listener failed (ignored).")


def _finite(value: float, what: str) -> float:
    v = float(value)
    if not math.isfinite(v):
        raise ValidationError(f"{what} must be a finite number: {value}", details={what: str(value)})
    return v


__all__ = ["PlaybackSync", "PlayheadState", "SeekOrigin", "Highlight"]
