from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from vidscribe.api.schemas import (
    DurationRequest,
    MuteRequest,
    PositionSeekRequest,
    TimeRequest,
    VolumeRequest,
    WordSeekRequest,
)
from vidscribe.api.session import EditorSession, get_session
from vidscribe.core.playback.player import CommandLogPlayer

router = APIRouter(prefix="/v1/playback", tags=["playback"])


def _view(session: EditorSession) -> dict:
    sync = session.store.playback
    hl = sync.highlight()
    return {
        **sync.state.to_dict(),
        "playhead_x": hl.playhead_x,
        "active_word": None if hl.word is None else {
            "segment_id": hl.word.segment_id,
            "word_index": hl.word.word_index,
            "text": hl.word.word.text,
        },
        "active_clips": [{"track_id": t, "clip_id": c} for t, c in hl.clips],
    }


@router.get("")
async def get_playback(session: EditorSession = Depends(get_session)) -> dict:
    return _view(session)


# User intents
@router.post("/seek")
async def seek(req: TimeRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.seek(req.t)
    return _view(session)


@router.post("/seek-word")
async def seek_word(req: WordSeekRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.seek_to_word(req.segment_id, req.word_index)
    return _view(session)


@router.post("/seek-position")
async def seek_position(req: PositionSeekRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.seek_to_position(req.x)
    return _view(session)


@router.post("/play")
async def play(session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.play()
    return _view(session)


@router.post("/pause")
async def pause(session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.pause()
    return _view(session)


@router.post("/toggle")
async def toggle(session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.toggle()
    return _view(session)


@router.post("/volume")
async def volume(req: VolumeRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.set_volume(req.volume)
    return _view(session)


@router.post("/mute")
async def mute(req: MuteRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.set_muted(req.muted)
    return _view(session)


# Player reports
@router.post("/tick")
async def tick(req: TimeRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.on_playback_tick(req.t)
    return _view(session)


@router.post("/duration")
async def duration(req: DurationRequest, session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.set_duration(req.duration)
    return _view(session)


@router.post("/ended")
async def ended(session: EditorSession = Depends(get_session)) -> dict:
    session.store.playback.on_playback_ended()
    return _view(session)


@router.get("/commands")
async def player_commands(
    since: int = Query(default=0, ge=0),
    session: EditorSession = Depends(get_session),
) -> List[dict]:
    """Commands issued to the player after `since` (for a UI that drives the real media element)."""
    player = session.player
    if not isinstance(player, CommandLogPlayer):
        return []
    return [c.to_dict() for c in player.commands_since(since)]
