from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from vidscribe.core.timerange import TimeRange


class TrackKind(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    CAPTION = "caption"


DEFAULT_TRACK_COLORS = {
    TrackKind.VIDEO: "#3b82f6",
    TrackKind.AUDIO: "#10b981",
    TrackKind.CAPTION: "#f59e0b",
}


@dataclass(frozen=True)
class Clip:
    """
    A placed, time-bounded unit on a track.

    Notes:
    - range is the placement on the timeline.
    - source_start is the offset into the source media where the clip begins
      (changes when a clip is split or its head is trimmed).
    """
    id: str
    name: str
    range: TimeRange
    media_id: Optional[str] = None
    source_start: float = 0.0

    @property
    def start(self) -> float:
        return self.range.start

    @property
    def end(self) -> float:
        return self.range.end

    @property
    def duration(self) -> float:
        return self.range.duration

    def with_range(self, rng: TimeRange, *, source_start: Optional[float] = None) -> "Clip":
        return replace(self, range=rng, source_start=self.source_start if source_start is None else source_start)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "media_id": self.media_id,
            "source_start": self.source_start,
        }


@dataclass(frozen=True)
class Track:
    id: str
    kind: TrackKind
    color: str = ""
    name: str = ""
    clips: Tuple[Clip, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", TrackKind(self.kind))
        object.__setattr__(self, "clips", tuple(self.clips))
        if not self.color:
            object.__setattr__(self, "color", DEFAULT_TRACK_COLORS[self.kind])

    def with_clips(self, clips) -> "Track":
        ordered = tuple(sorted(clips, key=lambda c: (c.start, c.end)))
        return replace(self, clips=ordered)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "color": self.color,
            "name": self.name,
            "clips": [c.to_dict() for c in self.clips],
        }


__all__ = ["TrackKind", "Track", "Clip", "DEFAULT_TRACK_COLORS"]
