# tests/_helpers.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from vidscribe.client.base import TranscriptionBackend
from vidscribe.client.schemas import CreatedJob, SkillResult, TranscriptionStatus, UploadedMedia
from vidscribe.core.jobs.orchestrator import OrchestratorSettings
from vidscribe.core.playback.player import CommandLogPlayer
from vidscribe.core.store import EditorStore

HELLO_WORLD = {
    "start": 0,
    "end": 2,
    "text": "hello world",
    "words": [
        {"text": "hello", "start": 0, "end": 1},
        {"text": "world", "start": 1, "end": 2},
    ],
}


def fast_settings(**overrides: Any) -> OrchestratorSettings:
    base: Dict[str, Any] = dict(
        poll_interval_sec=0.01,
        transcription_timeout_sec=2.0,
        upload_ramp_interval_sec=0.005,
    )
    base.update(overrides)
    return OrchestratorSettings(**base)


def make_store() -> Tuple[EditorStore, CommandLogPlayer]:
    player = CommandLogPlayer()
    return EditorStore(player=player), player


def completed(*segments: Dict[str, Any], language: str = "en") -> Dict[str, Any]:
    return {"status": "completed", "language": language, "segments": list(segments)}


class FakeBackend(TranscriptionBackend):
    """
    In-memory backend.

    statuses: job_id -> scripted poll results (dicts or exceptions); the last
    entry repeats once the script is exhausted. Unknown jobs report processing.
    """

    def __init__(
        self,
        *,
        statuses: Optional[Dict[str, List[Any]]] = None,
        media_id: str = "m1",
        upload_error: Optional[Exception] = None,
        upload_delay: float = 0.0,
        create_error: Optional[Exception] = None,
        create_delay: float = 0.0,
        latency: float = 0.0,
    ) -> None:
        self.statuses: Dict[str, List[Any]] = {k: list(v) for k, v in (statuses or {}).items()}
        self.media_id = media_id
        self.upload_error = upload_error
        self.upload_delay = upload_delay
        self.create_error = create_error
        self.create_delay = create_delay
        self.latency = latency

        self.uploads: List[Path] = []
        self.created: List[Tuple[str, str, Optional[str]]] = []
        self.polls: List[str] = []
        self.skill_calls: List[Dict[str, Any]] = []
        self.closed = False

        self.on_upload: Optional[Callable[[], None]] = None
        self.on_poll: Optional[Callable[[str], None]] = None

    async def upload_media(self, path, *, on_progress=None) -> UploadedMedia:
        self.uploads.append(Path(path))
        if self.upload_delay:
            await asyncio.sleep(self.upload_delay)
        if on_progress is not None:
            on_progress(50.0)
        if self.on_upload is not None:
            self.on_upload()
        if self.upload_error is not None:
            raise self.upload_error
        return UploadedMedia(
            id=self.media_id,
            url=f"http://backend.test/uploads/{Path(path).name}",
            type="video/mp4",
            size=10,
        )

    async def create_transcription_job(self, media_id, media_url, *, language=None) -> CreatedJob:
        self.created.append((media_id, media_url, language))
        job_id = f"j{len(self.created)}"
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        if self.create_error is not None:
            raise self.create_error
        return CreatedJob(id=job_id)

    async def get_transcription_status(self, job_id) -> TranscriptionStatus:
        if self.latency:
            await asyncio.sleep(self.latency)
        self.polls.append(job_id)
        if self.on_poll is not None:
            self.on_poll(job_id)
        script = self.statuses.get(job_id)
        if not script:
            item: Any = {"status": "processing"}
        elif len(script) > 1:
            item = script.pop(0)
        else:
            item = script[0]
        if isinstance(item, Exception):
            raise item
        return TranscriptionStatus.model_validate(item)

    async def run_text_skill(self, skill, transcript, *, target_language=None, platform=None) -> SkillResult:
        self.skill_calls.append(
            {"skill": skill, "transcript": transcript, "target_language": target_language, "platform": platform}
        )
        return SkillResult(result=f"{skill}:{transcript}")

    async def aclose(self) -> None:
        self.closed = True
