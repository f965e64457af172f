from __future__ import annotations

from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends

from vidscribe.api.schemas import ResumeRequest, UploadRequest
from vidscribe.api.session import EditorSession, get_session
from vidscribe.errors import ValidationError

# Handlers are async so every store/orchestrator access runs on the event loop thread.
router = APIRouter(prefix="/v1", tags=["media"])


@router.post("/media/upload")
async def upload_media(req: UploadRequest, session: EditorSession = Depends(get_session)) -> dict:
    """Start upload + transcription for a file on the bridge host; returns the pipeline snapshot."""
    src = Path(req.path).expanduser()
    if not src.is_file():
        raise ValidationError(f"not a file: {req.path}", details={"path": req.path})
    snap = session.orchestrator.submit_file(src, language=req.language)
    return snap.model_dump(mode="json")


@router.get("/media")
async def list_media(session: EditorSession = Depends(get_session)) -> List[dict]:
    return [m.model_dump(mode="json") for m in session.store.media.all()]


@router.post("/media/{media_id}/cancel")
async def cancel_transcription(media_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return {"media_id": media_id, "cancelled": session.orchestrator.cancel(media_id)}


@router.get("/pipelines")
async def list_pipelines(session: EditorSession = Depends(get_session)) -> List[dict]:
    return [p.model_dump(mode="json") for p in session.orchestrator.pipelines()]


@router.get("/pipelines/{pipeline_id}")
async def get_pipeline(pipeline_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return session.orchestrator.pipeline(pipeline_id).model_dump(mode="json")


@router.post("/pipelines/{pipeline_id}/retry")
async def retry_pipeline(pipeline_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return session.orchestrator.retry(pipeline_id).model_dump(mode="json")


@router.post("/transcriptions/resume")
async def resume_transcription(req: ResumeRequest, session: EditorSession = Depends(get_session)) -> dict:
    snap = session.orchestrator.resume(
        req.job_id, req.media_id, media_url=req.media_url, language=req.language
    )
    return snap.model_dump(mode="json")


@router.get("/jobs")
async def list_jobs(session: EditorSession = Depends(get_session)) -> List[dict]:
    return [j.model_dump(mode="json") for j in session.store.jobs.all()]


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return session.store.jobs.get(job_id).model_dump(mode="json")
