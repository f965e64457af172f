from __future__ import annotations

from fastapi import APIRouter, Depends

from vidscribe import __version__
from vidscribe.api.session import EditorSession, get_session

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(session: EditorSession = Depends(get_session)) -> dict:
    """Debug-friendly health: includes the config surface that is safe to expose."""
    return {
        "ok": True,
        "service": "vidscribe",
        "version": __version__,
        "backend_url": session.cfg.api_base_url,
        "active_tasks": session.orchestrator.active_task_count,
    }


@router.get("/healthz")
def healthz() -> dict:
    return {"ok": True}
