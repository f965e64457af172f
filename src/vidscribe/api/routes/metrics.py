from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from vidscribe.api.session import EditorSession, get_session
from vidscribe.metrics import metrics, set_orchestrator_gauges

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def prom_metrics(session: EditorSession = Depends(get_session)) -> Response:
    orch = session.orchestrator
    set_orchestrator_gauges(
        active_tasks=orch.active_task_count,
        live_previews=len(orch.previews.live),
        pipelines=len(orch.pipelines()),
    )
    return Response(
        content=metrics().to_prometheus_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
