from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from vidscribe.api.schemas import (
    ClipCreateRequest,
    ClipMoveRequest,
    ClipSplitRequest,
    RangeRequest,
    TrackCreateRequest,
    ZoomRequest,
)
from vidscribe.api.session import EditorSession, get_session
from vidscribe.core.timeline.models import Clip, Track
from vidscribe.core.timerange import TimeRange

router = APIRouter(prefix="/v1/timeline", tags=["timeline"])


@router.get("")
async def get_timeline(session: EditorSession = Depends(get_session)) -> dict:
    return session.store.timeline.to_dict()


@router.post("/zoom")
async def set_zoom(req: ZoomRequest, session: EditorSession = Depends(get_session)) -> dict:
    tl = session.store.timeline
    tl.set_zoom(req.zoom)
    return {"zoom": tl.zoom, "pixels_per_second": tl.pixels_per_second, "width": tl.width}


@router.get("/position")
async def time_to_position(t: float = Query(), session: EditorSession = Depends(get_session)) -> dict:
    return {"t": t, "x": session.store.timeline.time_to_position(t)}


@router.get("/time")
async def position_to_time(x: float = Query(), session: EditorSession = Depends(get_session)) -> dict:
    return {"x": x, "t": session.store.timeline.position_to_time(x)}


@router.post("/tracks")
async def add_track(req: TrackCreateRequest, session: EditorSession = Depends(get_session)) -> dict:
    track = session.store.timeline.add_track(
        Track(id=req.id, kind=req.kind, name=req.name, color=req.color)
    )
    return track.to_dict()


@router.delete("/tracks/{track_id}")
async def remove_track(track_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return session.store.timeline.remove_track(track_id).to_dict()


@router.post("/tracks/{track_id}/clips")
async def insert_clip(
    track_id: str, req: ClipCreateRequest, session: EditorSession = Depends(get_session)
) -> dict:
    clip = Clip(
        id=req.id,
        name=req.name or req.id,
        range=TimeRange(req.start, req.end),
        media_id=req.media_id,
        source_start=req.source_start,
    )
    return session.store.timeline.insert_clip(track_id, clip).to_dict()


@router.post("/clips/{clip_id}/move")
async def move_clip(clip_id: str, req: ClipMoveRequest, session: EditorSession = Depends(get_session)) -> dict:
    return session.store.timeline.move_clip(clip_id, req.start, snap=req.snap).to_dict()


@router.post("/clips/{clip_id}/split")
async def split_clip(clip_id: str, req: ClipSplitRequest, session: EditorSession = Depends(get_session)) -> dict:
    head, tail = session.store.timeline.split_clip(clip_id, req.at)
    return {"head": head.to_dict(), "tail": tail.to_dict()}


@router.delete("/clips/{clip_id}")
async def remove_clip(clip_id: str, session: EditorSession = Depends(get_session)) -> dict:
    return session.store.timeline.remove_clip(clip_id).to_dict()


@router.post("/cut")
async def cut_range(req: RangeRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.timeline.cut_range(TimeRange(req.start, req.end))
    return session.store.timeline.to_dict()
