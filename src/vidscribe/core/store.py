from __future__ import annotations

from typing import Dict, List, Optional

from vidscribe.core.jobs.models import MediaAsset, TranscriptionJob
from vidscribe.core.playback.player import MediaPlayer
from vidscribe.core.playback.sync import PlaybackSync
from vidscribe.core.timeline.model import DEFAULT_PIXELS_PER_SECOND, TimelineModel
from vidscribe.core.transcript.model import TranscriptModel
from vidscribe.errors import NotFoundError, ValidationError


class MediaLibrary:
    """Project media list. Add-only; assets are immutable once registered."""

    def __init__(self) -> None:
        self._assets: Dict[str, MediaAsset] = {}

    def add(self, asset: MediaAsset) -> MediaAsset:
        existing = self._assets.get(asset.id)
        if existing is not None and existing != asset:
            raise ValidationError(f"media asset already registered: {asset.id!r}")
        self._assets[asset.id] = asset
        return asset

    def get(self, media_id: str) -> MediaAsset:
        asset = self._assets.get(media_id)
        if asset is None:
            raise NotFoundError(f"media not found: {media_id}")
        return asset

    def find(self, media_id: str) -> Optional[MediaAsset]:
        return self._assets.get(media_id)

    def all(self) -> List[MediaAsset]:
        return list(self._assets.values())

    def __len__(self) -> int:
        return len(self._assets)


class JobRegistry:
    """
    Every transcription attempt, in creation order. Terminal jobs stay for display.
    Only the orchestrator calls put().
    """

    def __init__(self) -> None:
        self._jobs: Dict[str, TranscriptionJob] = {}

    def put(self, job: TranscriptionJob) -> TranscriptionJob:
        self._jobs[job.id] = job
        return job

    def get(self, job_id: str) -> TranscriptionJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise NotFoundError(f"job not found: {job_id}")
        return job

    def find(self, job_id: str) -> Optional[TranscriptionJob]:
        return self._jobs.get(job_id)

    def for_media(self, media_id: str) -> List[TranscriptionJob]:
        return [j for j in self._jobs.values() if j.media_id == media_id]

    def latest_for_media(self, media_id: str) -> Optional[TranscriptionJob]:
        jobs = self.for_media(media_id)
        return jobs[-1] if jobs else None

    def all(self) -> List[TranscriptionJob]:
        return list(self._jobs.values())


class EditorStore:
    """
    Explicitly owned editor state, injected into the orchestrator, the playback
    binding and the API bridge.

    Write owners:
    - media, jobs: JobOrchestrator
    - transcript: JobOrchestrator (replace on completion) and text edits
    - timeline: timeline editing intents
    - playback: PlaybackSync itself (current_time / seek_version)
    """

    def __init__(
        self,
        *,
        player: Optional[MediaPlayer] = None,
        pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND,
    ) -> None:
        self.media = MediaLibrary()
        self.jobs = JobRegistry()
        self.transcript = TranscriptModel()
        self.timeline = TimelineModel(base_pixels_per_second=pixels_per_second)
        self.playback = PlaybackSync(self.transcript, self.timeline, player)


__all__ = ["EditorStore", "MediaLibrary", "JobRegistry"]
