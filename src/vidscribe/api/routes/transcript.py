from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidscribe.api.schemas import WordsDeleteRequest, WordsRestoreRequest
from vidscribe.api.session import EditorSession, get_session
from vidscribe.core.timerange import TimeRange

router = APIRouter(prefix="/v1/transcript", tags=["transcript"])


def _location(loc) -> Optional[dict]:
    if loc is None:
        return None
    return {
        "segment_id": loc.segment_id,
        "segment_index": loc.segment_index,
        "word_index": loc.word_index,
        "word": loc.word.to_dict(),
    }


@router.get("")
async def get_transcript(session: EditorSession = Depends(get_session)) -> dict:
    return session.store.transcript.to_dict()


@router.get("/active")
async def active_word(
    t: Optional[float] = Query(default=None, description="time in seconds; defaults to the playhead"),
    session: EditorSession = Depends(get_session),
) -> dict:
    at = session.store.playback.current_time if t is None else t
    return {"t": at, "active": _location(session.store.transcript.locate(at))}


@router.get("/text")
async def text_for(
    start: float = Query(ge=0),
    end: float = Query(ge=0),
    session: EditorSession = Depends(get_session),
) -> dict:
    return {"start": start, "end": end, "text": session.store.transcript.text_for(TimeRange(start, end))}


@router.get("/deleted")
async def deleted_ranges(session: EditorSession = Depends(get_session)) -> list:
    return [{"segment_id": sid, **rng.to_dict()} for sid, rng in session.store.transcript.deleted_ranges()]


@router.post("/words/delete")
async def delete_words(req: WordsDeleteRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.transcript.delete_words(req.segment_id, req.first, req.last)
    return session.store.transcript.segment(req.segment_id).to_dict()


@router.post("/words/restore")
async def restore_words(req: WordsRestoreRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.transcript.restore_words(req.segment_id, req.indices)
    return session.store.transcript.segment(req.segment_id).to_dict()
