from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Tuple

from vidscribe.core.timeline.models import Clip, Track, TrackKind
from vidscribe.core.timerange import TimeRange
from vidscribe.errors import NotFoundError, OverlapError, ValidationError
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.timeline")

MIN_ZOOM = 0.25
MAX_ZOOM = 4.0
ZOOM_STEP = 0.25
DEFAULT_PIXELS_PER_SECOND = 50.0

# Tracks whose clips are collapsed by cut_range (captions are left alone).
CUTTABLE_KINDS = (TrackKind.VIDEO, TrackKind.AUDIO)


def _check_no_overlap(track: Track, candidate: Clip, *, ignore_id: Optional[str] = None) -> None:
    for other in track.clips:
        if other.id == ignore_id:
            continue
        if other.range.overlaps(candidate.range):
            raise OverlapError(
                f"clip {candidate.id!r} [{candidate.start}, {candidate.end}) overlaps "
                f"{other.id!r} [{other.start}, {other.end}) on track {track.id!r}",
                details={"track_id": track.id, "clip_id": candidate.id, "conflict_id": other.id},
            )


def _new_clip_id(base: str) -> str:
    return f"{base}-{uuid.uuid4().hex[:8]}"


class TimelineModel:
    """
    Tracks and clips on a shared time axis, plus the time <-> pixel mapping.

    Invariants:
    - within one track clips never overlap (touching boundaries are fine)
    - across tracks anything goes (parallel tracks compose)
    - clip ids are unique timeline-wide
    """

    def __init__(
        self,
        *,
        base_pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND,
        zoom: float = 1.0,
        snap_enabled: bool = True,
        media_duration: float = 0.0,
    ) -> None:
        if base_pixels_per_second <= 0:
            raise ValidationError("base_pixels_per_second must be > 0")
        self._base_pps = float(base_pixels_per_second)
        self._zoom = 1.0
        self.set_zoom(zoom)
        self.snap_enabled = snap_enabled
        self._media_duration = max(0.0, float(media_duration))
        self._tracks: List[Track] = []
        self._version = 0

    # -------------------------
    # Geometry
    # -------------------------

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def pixels_per_second(self) -> float:
        return self._base_pps * self._zoom

    def set_zoom(self, zoom: float) -> float:
        z = min(MAX_ZOOM, max(MIN_ZOOM, float(zoom)))
        self._zoom = round(z / ZOOM_STEP) * ZOOM_STEP
        return self._zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self._zoom + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom(self._zoom - ZOOM_STEP)

    @property
    def snap_step(self) -> float:
        if self._zoom >= 2:
            return 0.1
        if self._zoom >= 1:
            return 0.25
        return 0.5

    def snap(self, t: float) -> float:
        if not self.snap_enabled:
            return t
        step = self.snap_step
        # Result carries the step's precision: 3 * 0.1 is 0.3, not 0.30000000000000004.
        places = len(f"{step:g}".partition(".")[2])
        return round(round(t / step) * step, places)

    @property
    def media_duration(self) -> float:
        return self._media_duration

    def set_media_duration(self, duration: float) -> None:
        self._media_duration = max(0.0, float(duration))

    @property
    def content_end(self) -> float:
        return max((c.end for t in self._tracks for c in t.clips), default=0.0)

    @property
    def duration(self) -> float:
        return max(self._media_duration, self.content_end)

    def time_to_position(self, t: float) -> float:
        return t * self.pixels_per_second

    def position_to_time(self, x: float) -> float:
        t = x / self.pixels_per_second
        return min(max(t, 0.0), self.duration)

    @property
    def width(self) -> float:
        return self.time_to_position(self.duration)

    # -------------------------
    # Tracks
    # -------------------------

    @property
    def tracks(self) -> Tuple[Track, ...]:
        return tuple(self._tracks)

    @property
    def version(self) -> int:
        return self._version

    def track(self, track_id: str) -> Track:
        return self._tracks[self._track_pos(track_id)]

    def add_track(self, track: Track) -> Track:
        if any(t.id == track.id for t in self._tracks):
            raise ValidationError(f"duplicate track id: {track.id!r}")
        known = self._all_clip_ids()
        staged = track.with_clips([])
        for clip in sorted(track.clips, key=lambda c: c.start):
            if clip.id in known:
                raise ValidationError(f"duplicate clip id: {clip.id!r}")
            _check_no_overlap(staged, clip)
            staged = staged.with_clips(list(staged.clips) + [clip])
            known.add(clip.id)
        self._tracks.append(staged)
        self._bump()
        return staged

    def remove_track(self, track_id: str) -> Track:
        pos = self._track_pos(track_id)
        removed = self._tracks.pop(pos)
        self._bump()
        return removed

    # -------------------------
    # Clips
    # -------------------------

    def find_clip(self, clip_id: str) -> Tuple[Track, Clip]:
        for t in self._tracks:
            for c in t.clips:
                if c.id == clip_id:
                    return t, c
        raise NotFoundError(f"clip not found: {clip_id}")

    def insert_clip(self, track_id: str, clip: Clip) -> Clip:
        pos = self._track_pos(track_id)
        if clip.id in self._all_clip_ids():
            raise ValidationError(f"duplicate clip id: {clip.id!r}")
        track = self._tracks[pos]
        _check_no_overlap(track, clip)
        self._tracks[pos] = track.with_clips(list(track.clips) + [clip])
        self._bump()
        logger.debug("CLIP_INSERTED track=%s clip=%s range=[%s, %s)", track_id, clip.id, clip.start, clip.end)
        return clip

    def move_clip(self, clip_id: str, new_start: float, *, snap: bool = False) -> Clip:
        track, clip = self.find_clip(clip_id)
        start = self.snap(new_start) if snap else new_start
        moved = clip.with_range(clip.range.moved_to(start))
        _check_no_overlap(track, moved, ignore_id=clip_id)
        self._replace_in_track(track.id, clip_id, [moved])
        return moved

    def remove_clip(self, clip_id: str) -> Clip:
        track, clip = self.find_clip(clip_id)
        self._replace_in_track(track.id, clip_id, [])
        return clip

    def split_clip(self, clip_id: str, at: float) -> Tuple[Clip, Clip]:
        """Split strictly inside the clip; the head keeps the original id."""
        track, clip = self.find_clip(clip_id)
        if not (clip.start < at < clip.end):
            raise ValidationError(
                f"split point {at} is not inside clip {clip_id!r} [{clip.start}, {clip.end})"
            )
        head = clip.with_range(TimeRange(clip.start, at))
        tail = Clip(
            id=_new_clip_id(clip.id),
            name=clip.name,
            range=TimeRange(at, clip.end),
            media_id=clip.media_id,
            source_start=clip.source_start + (at - clip.start),
        )
        self._replace_in_track(track.id, clip_id, [head, tail])
        return head, tail

    def clips_at(self, t: float) -> List[Tuple[Track, Clip]]:
        out: List[Tuple[Track, Clip]] = []
        for track in self._tracks:
            for c in track.clips:
                if c.range.contains(t):
                    out.append((track, c))
                    break
        return out

    def cut_range(self, cut: TimeRange) -> None:
        """
        Remove `cut` from every video/audio track and close the gap:
        clips after the cut shift left by its duration, clips straddling it are
        trimmed or split. Caption tracks are not touched.
        """
        if cut.duration <= 0:
            return
        cs, ce, dur = cut.start, cut.end, cut.duration
        new_tracks: List[Track] = []
        for track in self._tracks:
            if track.kind not in CUTTABLE_KINDS:
                new_tracks.append(track)
                continue
            clips: List[Clip] = []
            for c in track.clips:
                if c.end <= cs:
                    clips.append(c)
                elif c.start >= ce:
                    clips.append(c.with_range(c.range.shifted(-dur)))
                elif c.start >= cs and c.end <= ce:
                    continue
                elif c.start < cs and c.end > ce:
                    clips.append(c.with_range(TimeRange(c.start, cs)))
                    clips.append(Clip(
                        id=_new_clip_id(c.id),
                        name=f"{c.name} (cont.)",
                        range=TimeRange(cs, cs + (c.end - ce)),
                        media_id=c.media_id,
                        source_start=c.source_start + (ce - c.start),
                    ))
                elif c.start < cs:
                    clips.append(c.with_range(TimeRange(c.start, cs)))
                else:
                    clips.append(c.with_range(
                        TimeRange(cs, cs + (c.end - ce)),
                        source_start=c.source_start + (ce - c.start),
                    ))
            new_tracks.append(track.with_clips(clips))
        self._tracks = new_tracks
        self._bump()
        logger.info("TIMELINE_CUT range=[%s, %s)", cs, ce)

    # -------------------------
    # Internal helpers
    # -------------------------

    def _track_pos(self, track_id: str) -> int:
        for i, t in enumerate(self._tracks):
            if t.id == track_id:
                return i
        raise NotFoundError(f"track not found: {track_id}")

    def _all_clip_ids(self) -> set[str]:
        return {c.id for t in self._tracks for c in t.clips}

    def _replace_in_track(self, track_id: str, clip_id: str, replacement: List[Clip]) -> None:
        pos = self._track_pos(track_id)
        track = self._tracks[pos]
        clips = [c for c in track.clips if c.id != clip_id] + replacement
        self._tracks[pos] = track.with_clips(clips)
        self._bump()

    def _bump(self) -> None:
        self._version += 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "duration": self.duration,
            "zoom": self._zoom,
            "pixels_per_second": self.pixels_per_second,
            "snap_enabled": self.snap_enabled,
            "tracks": [t.to_dict() for t in self._tracks],
        }


__all__ = ["TimelineModel", "MIN_ZOOM", "MAX_ZOOM", "ZOOM_STEP", "DEFAULT_PIXELS_PER_SECOND"]
