from __future__ import annotations

import asyncio
import mimetypes
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from vidscribe.client.base import TranscriptionBackend
from vidscribe.client.schemas import TranscriptionStatus, UploadedMedia
from vidscribe.config import AppConfig
from vidscribe.core.jobs.models import (
    JobError,
    JobState,
    MediaAsset,
    MediaKind,
    PipelineSnapshot,
    PipelineStage,
    TranscriptionJob,
    utc_now,
)
from vidscribe.core.jobs.preview import PreviewRef, PreviewRegistry
from vidscribe.core.jobs.progress import ProgressCounter
from vidscribe.core.jobs.tasks import TaskHandle, TaskSet, spawn
from vidscribe.core.store import EditorStore
from vidscribe.core.transcript.ingest import parse_segments
from vidscribe.errors import (
    BackendRequestError,
    JobCreationFailure,
    NotFoundError,
    PollTransientFailure,
    TranscriptionFailure,
    TranscriptionTimeout,
    UploadFailure,
    ValidationError,
    VidscribeError,
)
from vidscribe.metrics import (
    inc_job_created,
    inc_job_finished,
    inc_poll,
    inc_poll_transient_failure,
    inc_upload,
)
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.jobs")

_STAGE_FOR_STATE = {
    JobState.COMPLETED: PipelineStage.COMPLETED,
    JobState.ERROR: PipelineStage.ERROR,
    JobState.TIMED_OUT: PipelineStage.TIMED_OUT,
}


@dataclass(frozen=True)
class OrchestratorSettings:
    poll_interval_sec: float = 1.5
    transcription_timeout_sec: float = 300.0

    upload_ramp_interval_sec: float = 0.2
    upload_ramp_step: int = 10
    upload_ramp_cap: int = 90

    synthetic_progress_step: int = 5
    synthetic_progress_cap: int = 95
    # Server-reported progress never shows 100 before the completed status arrives.
    reported_progress_cap: int = 99

    default_language: Optional[str] = None

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "OrchestratorSettings":
        return cls(
            poll_interval_sec=cfg.poll_interval_sec,
            transcription_timeout_sec=cfg.transcription_timeout_sec,
            upload_ramp_interval_sec=cfg.upload_ramp_interval_sec,
            upload_ramp_step=cfg.upload_ramp_step,
            upload_ramp_cap=cfg.upload_ramp_cap,
            synthetic_progress_step=cfg.synthetic_progress_step,
            synthetic_progress_cap=cfg.synthetic_progress_cap,
            default_language=cfg.default_language,
        )


@dataclass
class _Pipeline:
    pipeline_id: str
    source_path: Optional[Path] = None
    source_name: str = ""
    stage: PipelineStage = PipelineStage.IDLE
    upload: ProgressCounter = field(default_factory=ProgressCounter)
    preview: Optional[PreviewRef] = None
    media_id: Optional[str] = None
    media: Optional[MediaAsset] = None
    media_url: Optional[str] = None
    job_id: Optional[str] = None
    language: Optional[str] = None
    failure: Optional[JobError] = None
    last_poll_error: Optional[str] = None
    finished: asyncio.Event = field(default_factory=asyncio.Event)


@dataclass(frozen=True)
class _LivePoll:
    generation: int
    job_id: str
    handle: TaskHandle


def _media_kind(reported_type: Optional[str], name: str) -> MediaKind:
    t = (reported_type or mimetypes.guess_type(name)[0] or "").lower()
    if t == "audio" or t.startswith("audio/"):
        return MediaKind.AUDIO
    return MediaKind.VIDEO


class JobOrchestrator:
    """
    Drives upload -> extraction -> transcription for each media asset.

    Pipeline stages: idle -> uploading -> extracting -> transcribing
    -> completed | error | timed_out

    Concurrency rules (single event loop, no threads):
    - at most one live poll per media; starting another supersedes the old one
      (its handle is cancelled before the new job is even requested)
    - every poll result is checked against the live generation before it is
      applied, so nothing from a superseded job reaches the store
    - the transcription deadline is enforced with asyncio.wait_for, independent
      of poll cadence
    - close() cancels every task it owns and marks in-flight work cancelled;
      nothing outlives it

    Entry points must be called from within a running event loop.
    """

    def __init__(
        self,
        backend: TranscriptionBackend,
        store: EditorStore,
        settings: Optional[OrchestratorSettings] = None,
        *,
        previews: Optional[PreviewRegistry] = None,
    ) -> None:
        self._backend = backend
        self._store = store
        self._settings = settings or OrchestratorSettings()
        self._previews = previews or PreviewRegistry()

        self._pipelines: Dict[str, _Pipeline] = {}
        self._by_media: Dict[str, str] = {}
        self._live: Dict[str, _LivePoll] = {}
        self._tasks = TaskSet()
        self._generation = 0
        self._closed = False

    async def __aenter__(self) -> "JobOrchestrator":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # -------------------------
    # Read
    # -------------------------

    @property
    def store(self) -> EditorStore:
        return self._store

    @property
    def settings(self) -> OrchestratorSettings:
        return self._settings

    @property
    def previews(self) -> PreviewRegistry:
        return self._previews

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active_task_count(self) -> int:
        return len(self._tasks)

    def pipeline(self, pipeline_id: str) -> PipelineSnapshot:
        return self._snapshot(self._get(pipeline_id))

    def pipelines(self) -> List[PipelineSnapshot]:
        return [self._snapshot(p) for p in self._pipelines.values()]

    def pipeline_for_media(self, media_id: str) -> PipelineSnapshot:
        p = self._pipeline_of(media_id)
        if p is None:
            raise NotFoundError(f"no pipeline for media: {media_id}")
        return self._snapshot(p)

    def job(self, job_id: str) -> TranscriptionJob:
        return self._store.jobs.get(job_id)

    def live_job_id(self, media_id: str) -> Optional[str]:
        live = self._live.get(media_id)
        return live.job_id if live is not None else None

    def is_polling(self, media_id: str) -> bool:
        live = self._live.get(media_id)
        return live is not None and not live.handle.done

    # -------------------------
    # Entry points
    # -------------------------

    def submit_file(self, path: str | Path, *, language: Optional[str] = None) -> PipelineSnapshot:
        """Start the full pipeline for a local file; returns immediately."""
        self._ensure_open()
        src = Path(path)
        p = _Pipeline(
            pipeline_id=uuid.uuid4().hex[:12],
            source_path=src,
            source_name=src.name,
            language=language or self._settings.default_language,
        )
        self._pipelines[p.pipeline_id] = p
        self._launch_upload(p)
        return self._snapshot(p)

    async def run_file(self, path: str | Path, *, language: Optional[str] = None) -> PipelineSnapshot:
        snap = self.submit_file(path, language=language)
        return await self.wait(snap.pipeline_id)

    async def wait(self, pipeline_id: str, *, timeout: Optional[float] = None) -> PipelineSnapshot:
        """Wait until the pipeline reaches a terminal stage (or the orchestrator closes)."""
        p = self._get(pipeline_id)
        await asyncio.wait_for(p.finished.wait(), timeout=timeout)
        return self._snapshot(p)

    async def start_transcription(
        self, media: MediaAsset, *, language: Optional[str] = None
    ) -> TranscriptionJob:
        """
        Request a new transcription job for an already-uploaded asset and poll it.
        Any live job for the same asset is superseded before the request is sent.

        Raises JobCreationFailure if the backend rejects the request.
        """
        self._ensure_open()
        self._supersede(media.id)
        self._store.media.add(media)
        p = self._pipeline_of(media.id)
        if p is None:
            p = self._new_pipeline(source_name=media.original_name, media_id=media.id)
        p.media = media
        p.media_url = media.playable_url
        p.language = language or p.language or self._settings.default_language
        p.failure = None
        p.finished.clear()

        try:
            job = await self._create_job(p, media.id, media.playable_url)
        except JobCreationFailure as e:
            self._fail_pipeline(p, e)
            raise
        self._start_polling(p, job)
        return self._store.jobs.get(job.id)

    def resume(
        self,
        job_id: str,
        media_id: str,
        *,
        media_url: Optional[str] = None,
        language: Optional[str] = None,
    ) -> PipelineSnapshot:
        """
        Legacy entry: poll an already-created job id without creating a new one.
        Enters the transcribing stage directly.
        """
        self._ensure_open()
        existing = self._store.jobs.find(job_id)
        if existing is not None and existing.is_terminal:
            raise ValidationError(
                f"job {job_id} already finished with status {existing.status.value}",
                details={"job_id": job_id},
            )
        if existing is not None and existing.media_id != media_id:
            raise ValidationError(
                f"job {job_id} belongs to media {existing.media_id}, not {media_id}",
                details={"job_id": job_id},
            )

        p = self._pipeline_of(media_id)
        if p is None:
            p = self._new_pipeline(source_name=media_id, media_id=media_id)
        asset = self._store.media.find(media_id)
        if asset is not None:
            p.media = asset
        p.media_url = media_url or p.media_url or (asset.playable_url if asset is not None else None)
        p.language = language or p.language or self._settings.default_language
        if p.media_url:
            self._store.playback.load_source(p.media_url)

        job = existing or TranscriptionJob(id=job_id, media_id=media_id, language=p.language)
        self._store.jobs.put(job)
        logger.info("JOB_RESUMED job_id=%s media_id=%s", job_id, media_id)
        self._start_polling(p, job)
        return self._snapshot(p)

    def retry(self, pipeline_id: str) -> PipelineSnapshot:
        """
        Retry a failed pipeline. Without an uploaded asset the whole pipeline
        reruns; otherwise a new transcription job is requested. Job history is kept.
        """
        self._ensure_open()
        p = self._get(pipeline_id)
        if p.stage not in (PipelineStage.ERROR, PipelineStage.TIMED_OUT):
            raise ValidationError(
                f"pipeline {pipeline_id} is {p.stage.value}; only failed pipelines can be retried",
                details={"pipeline_id": pipeline_id},
            )

        if p.media_id is None:
            if p.source_path is None:
                raise ValidationError(f"pipeline {pipeline_id} has nothing to retry")
            logger.info("PIPELINE_RETRY pipeline=%s from=upload", pipeline_id)
            self._launch_upload(p)
            return self._snapshot(p)

        if not p.media_url:
            raise ValidationError(
                f"pipeline {pipeline_id} has no media url to transcribe",
                details={"pipeline_id": pipeline_id},
            )
        logger.info("PIPELINE_RETRY pipeline=%s from=transcription media_id=%s", pipeline_id, p.media_id)
        self._supersede(p.media_id)
        p.failure = None
        p.finished.clear()
        p.stage = PipelineStage.EXTRACTING
        self._tasks.track(
            spawn(self._request_and_poll(p, p.media_id, p.media_url), name=f"retry:{pipeline_id}")
        )
        return self._snapshot(p)

    def cancel(self, media_id: str) -> bool:
        """Stop polling the live job of a media asset. Returns False if nothing was live."""
        live = self._live.pop(media_id, None)
        if live is None:
            return False
        live.handle.cancel()
        err = JobError(code="cancelled", detail="polling cancelled")
        job = self._store.jobs.find(live.job_id)
        if job is not None and not job.is_terminal:
            self._update_job(job.id, status=JobState.ERROR, error=err, finished_at=utc_now())
        p = self._pipeline_of(media_id)
        if p is not None:
            p.stage = PipelineStage.ERROR
            p.failure = err
            p.finished.set()
        logger.info("POLL_CANCELLED job_id=%s media_id=%s", live.job_id, media_id)
        return True

    async def close(self) -> None:
        """
        Cancel every owned task and release leftover previews. Idempotent.
        Jobs and pipelines still in flight are recorded as cancelled.
        """
        if self._closed:
            return
        self._closed = True
        err = JobError(code="cancelled", detail="orchestrator closed")
        for live in self._live.values():
            job = self._store.jobs.find(live.job_id)
            if job is not None and not job.is_terminal:
                self._update_job(job.id, status=JobState.ERROR, error=err, finished_at=utc_now())
        self._live.clear()
        cancelled = await self._tasks.cancel_all()
        for ref in self._previews.live:
            self._previews.release(ref)
        for p in self._pipelines.values():
            p.preview = None
            if p.stage not in _STAGE_FOR_STATE.values() and p.stage is not PipelineStage.IDLE:
                p.stage = PipelineStage.ERROR
                p.failure = err
            p.finished.set()
        logger.info("ORCHESTRATOR_CLOSED cancelled_tasks=%d", cancelled)

    # -------------------------
    # Upload
    # -------------------------

    def _launch_upload(self, p: _Pipeline) -> None:
        assert p.source_path is not None
        p.stage = PipelineStage.UPLOADING
        p.upload = ProgressCounter()
        p.failure = None
        p.finished.clear()
        # The player gets something to show before the network round-trip.
        p.preview = self._previews.create(p.source_path)
        self._store.playback.load_source(p.preview.url)
        self._tasks.track(spawn(self._run_pipeline(p), name=f"pipeline:{p.pipeline_id}"))
        logger.info("PIPELINE_STARTED pipeline=%s source=%s", p.pipeline_id, p.source_path)

    async def _run_pipeline(self, p: _Pipeline) -> None:
        try:
            media = await self._upload(p)
        except VidscribeError as e:
            self._fail_pipeline(p, e)
            return
        await self._request_and_poll(p, media.id, media.playable_url)

    async def _upload(self, p: _Pipeline) -> MediaAsset:
        assert p.source_path is not None
        ramp = self._tasks.track(spawn(self._ramp_upload(p), name=f"ramp:{p.pipeline_id}"))
        try:
            try:
                uploaded = await self._backend.upload_media(
                    p.source_path, on_progress=lambda pct: self._on_upload_progress(p, pct)
                )
            except BackendRequestError as e:
                inc_upload("error")
                logger.warning("UPLOAD_FAILED pipeline=%s err=%s", p.pipeline_id, e.message)
                raise UploadFailure(
                    f"upload failed: {e.message}",
                    details={"pipeline_id": p.pipeline_id, **(e.details or {})},
                ) from e
            finally:
                ramp.cancel()

            inc_upload("ok")
            p.upload.complete()
            media = self._asset_from_upload(p, uploaded)
            self._store.media.add(media)
            p.media = media
            p.media_id = media.id
            p.media_url = media.playable_url
            self._by_media[media.id] = p.pipeline_id
            # Adopt the remote URL before the preview goes away.
            self._store.playback.load_source(media.playable_url)
            p.stage = PipelineStage.EXTRACTING
            logger.info("UPLOAD_DONE pipeline=%s media_id=%s url=%s", p.pipeline_id, media.id, media.remote_url)
            return media
        finally:
            if p.preview is not None:
                # On failure the player would otherwise keep pointing at the released preview.
                if p.media_id is None:
                    self._store.playback.unload_source(p.preview.url)
                self._previews.release(p.preview)
                p.preview = None

    def _asset_from_upload(self, p: _Pipeline, uploaded: UploadedMedia) -> MediaAsset:
        name = uploaded.original_name or p.source_name
        size = uploaded.size
        if not size and p.source_path is not None and p.source_path.exists():
            size = p.source_path.stat().st_size
        return MediaAsset(
            id=uploaded.id,
            original_name=name,
            kind=_media_kind(uploaded.type, name),
            size_bytes=size,
            source_url=p.preview.url if p.preview is not None else p.source_path.as_uri(),
            remote_url=uploaded.url,
        )

    async def _ramp_upload(self, p: _Pipeline) -> None:
        s = self._settings
        while p.stage is PipelineStage.UPLOADING:
            await asyncio.sleep(s.upload_ramp_interval_sec)
            p.upload.advance(s.upload_ramp_step, cap=s.upload_ramp_cap)

    def _on_upload_progress(self, p: _Pipeline, pct: float) -> None:
        if p.stage is PipelineStage.UPLOADING:
            p.upload.observe(pct, cap=self._settings.upload_ramp_cap)

    # -------------------------
    # Job creation + polling
    # -------------------------

    async def _request_and_poll(self, p: _Pipeline, media_id: str, media_url: str) -> None:
        # The old poll must stop before the creation round-trip, not after it.
        self._supersede(media_id)
        try:
            job = await self._create_job(p, media_id, media_url)
        except JobCreationFailure as e:
            self._fail_pipeline(p, e)
            return
        self._start_polling(p, job)

    async def _create_job(self, p: _Pipeline, media_id: str, media_url: str) -> TranscriptionJob:
        p.stage = PipelineStage.EXTRACTING
        try:
            created = await self._backend.create_transcription_job(media_id, media_url, language=p.language)
        except BackendRequestError as e:
            logger.warning("JOB_CREATION_FAILED media_id=%s err=%s", media_id, e.message)
            raise JobCreationFailure(
                f"transcription request rejected: {e.message}",
                details={"media_id": media_id, **(e.details or {})},
            ) from e
        inc_job_created()
        job = TranscriptionJob(id=created.id, media_id=media_id, language=p.language)
        self._store.jobs.put(job)
        return job

    def _start_polling(self, p: _Pipeline, job: TranscriptionJob) -> None:
        media_id = job.media_id
        self._supersede(media_id, by_job_id=job.id)

        self._generation += 1
        gen = self._generation
        p.stage = PipelineStage.TRANSCRIBING
        p.job_id = job.id
        p.failure = None
        p.last_poll_error = None
        p.finished.clear()
        self._by_media[media_id] = p.pipeline_id
        self._update_job(job.id, status=JobState.PROCESSING)

        handle = spawn(self._poll(p, media_id, job.id, gen), name=f"poll:{job.id}")
        self._live[media_id] = _LivePoll(generation=gen, job_id=job.id, handle=handle)
        self._tasks.track(handle)
        logger.info("POLL_STARTED job_id=%s media_id=%s generation=%d", job.id, media_id, gen)

    def _supersede(self, media_id: str, *, by_job_id: Optional[str] = None) -> None:
        """Stop the live poll of a media asset; by_job_id is None while the new job is still being created."""
        live = self._live.pop(media_id, None)
        if live is None:
            return
        live.handle.cancel()
        prev = self._store.jobs.find(live.job_id)
        if prev is not None and prev.id != by_job_id and not prev.is_terminal:
            detail = f"superseded by job {by_job_id}" if by_job_id else "superseded by a new transcription request"
            self._update_job(
                prev.id,
                status=JobState.ERROR,
                error=JobError(code="superseded", detail=detail),
                finished_at=utc_now(),
            )
        logger.info("POLL_SUPERSEDED job_id=%s by=%s media_id=%s", live.job_id, by_job_id or "-", media_id)

    def _is_live(self, media_id: str, gen: int) -> bool:
        live = self._live.get(media_id)
        return (not self._closed) and live is not None and live.generation == gen

    async def _poll(self, p: _Pipeline, media_id: str, job_id: str, gen: int) -> None:
        counter = ProgressCounter(value=self._store.jobs.get(job_id).progress)
        try:
            await asyncio.wait_for(
                self._poll_until_terminal(p, media_id, job_id, gen, counter),
                timeout=self._settings.transcription_timeout_sec,
            )
        except asyncio.TimeoutError:
            if self._is_live(media_id, gen):
                details: Dict[str, Any] = {"job_id": job_id}
                if p.last_poll_error:
                    details["last_poll_error"] = p.last_poll_error
                self._finish(p, job_id, JobState.TIMED_OUT, TranscriptionTimeout(details=details))
        except Exception as e:
            logger.exception("POLL_CRASHED job_id=%s", job_id)
            if self._is_live(media_id, gen):
                self._finish(
                    p, job_id, JobState.ERROR,
                    TranscriptionFailure(f"polling stopped: {e}", details={"job_id": job_id}),
                )
        finally:
            live = self._live.get(media_id)
            if live is not None and live.generation == gen:
                del self._live[media_id]

    async def _poll_until_terminal(
        self, p: _Pipeline, media_id: str, job_id: str, gen: int, counter: ProgressCounter
    ) -> None:
        while True:
            await asyncio.sleep(self._settings.poll_interval_sec)
            if not self._is_live(media_id, gen):
                return
            inc_poll()
            try:
                status = await self._backend.get_transcription_status(job_id)
            except BackendRequestError as e:
                failure = PollTransientFailure(e.message, details={"job_id": job_id})
                p.last_poll_error = failure.message
                inc_poll_transient_failure()
                logger.warning("POLL_TRANSIENT_FAILURE job_id=%s err=%s", job_id, failure.message)
                continue
            if not self._is_live(media_id, gen):
                logger.debug("POLL_RESULT_DISCARDED job_id=%s generation=%d", job_id, gen)
                return
            if self._apply_status(p, job_id, status, counter):
                return

    def _apply_status(
        self, p: _Pipeline, job_id: str, status: TranscriptionStatus, counter: ProgressCounter
    ) -> bool:
        """Apply one poll result. Returns True once the job is terminal."""
        if status.status == "completed":
            try:
                segments = parse_segments(status.segments)
                self._store.transcript.replace_all(segments, language=status.language)
            except ValidationError as e:
                logger.warning("TRANSCRIPT_REJECTED job_id=%s err=%s", job_id, e.message)
                self._finish(p, job_id, JobState.ERROR, e)
                return True
            counter.complete()
            self._finish(p, job_id, JobState.COMPLETED, None, language=status.language)
            return True

        if status.status == "error":
            self._finish(
                p, job_id, JobState.ERROR,
                TranscriptionFailure(status.error or "transcription failed", details={"job_id": job_id}),
            )
            return True

        s = self._settings
        if status.progress is not None:
            counter.observe(status.progress, cap=s.reported_progress_cap)
        else:
            counter.advance(s.synthetic_progress_step, cap=s.synthetic_progress_cap)
        updates: Dict[str, Any] = {"status": JobState.PROCESSING, "progress": counter.value}
        if status.language:
            updates["language"] = status.language
        self._update_job(job_id, **updates)
        logger.debug("POLL_PROGRESS job_id=%s status=%s progress=%d", job_id, status.status, counter.value)
        return False

    # -------------------------
    # Internal helpers
    # -------------------------

    def _finish(
        self,
        p: _Pipeline,
        job_id: str,
        state: JobState,
        error: Optional[VidscribeError],
        *,
        language: Optional[str] = None,
    ) -> None:
        updates: Dict[str, Any] = {"status": state, "finished_at": utc_now()}
        if state is JobState.COMPLETED:
            updates["progress"] = 100
        if language:
            updates["language"] = language
        job_error = JobError(code=error.code, detail=error.message) if error is not None else None
        updates["error"] = job_error
        self._update_job(job_id, **updates)

        p.stage = _STAGE_FOR_STATE[state]
        p.failure = job_error
        p.finished.set()
        inc_job_finished(state.value)
        if job_error is None:
            logger.info("JOB_FINISHED job_id=%s state=%s", job_id, state.value)
        else:
            logger.warning("JOB_FINISHED job_id=%s state=%s code=%s msg=%s",
                           job_id, state.value, job_error.code, job_error.detail)

    def _fail_pipeline(self, p: _Pipeline, error: VidscribeError) -> None:
        p.stage = PipelineStage.ERROR
        p.failure = JobError(code=error.code, detail=error.message)
        p.finished.set()
        logger.warning("PIPELINE_FAILED pipeline=%s code=%s msg=%s", p.pipeline_id, error.code, error.message)

    def _update_job(self, job_id: str, **updates: Any) -> TranscriptionJob:
        job = self._store.jobs.get(job_id).model_copy(update=updates)
        return self._store.jobs.put(job)

    def _new_pipeline(self, *, source_name: str, media_id: str) -> _Pipeline:
        p = _Pipeline(pipeline_id=uuid.uuid4().hex[:12], source_name=source_name, media_id=media_id)
        self._pipelines[p.pipeline_id] = p
        self._by_media[media_id] = p.pipeline_id
        return p

    def _pipeline_of(self, media_id: str) -> Optional[_Pipeline]:
        pid = self._by_media.get(media_id)
        return self._pipelines.get(pid) if pid is not None else None

    def _get(self, pipeline_id: str) -> _Pipeline:
        p = self._pipelines.get(pipeline_id)
        if p is None:
            raise NotFoundError(f"pipeline not found: {pipeline_id}")
        return p

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("orchestrator is closed")

    def _snapshot(self, p: _Pipeline) -> PipelineSnapshot:
        return PipelineSnapshot(
            pipeline_id=p.pipeline_id,
            source_name=p.source_name,
            stage=p.stage,
            upload_progress=p.upload.value,
            media_id=p.media_id,
            media=p.media,
            job=self._store.jobs.find(p.job_id) if p.job_id else None,
            error=p.failure,
        )


__all__ = ["JobOrchestrator", "OrchestratorSettings"]
