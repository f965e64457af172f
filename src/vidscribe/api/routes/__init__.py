from __future__ import annotations

from fastapi import APIRouter

api_router = APIRouter()

from vidscribe.api.routes.health import router as health_router  # noqa: E402
from vidscribe.api.routes.metrics import router as metrics_router  # noqa: E402
from vidscribe.api.routes.media import router as media_router  # noqa: E402
from vidscribe.api.routes.playback import router as playback_router  # noqa: E402
from vidscribe.api.routes.skills import router as skills_router  # noqa: E402
from vidscribe.api.routes.timeline import router as timeline_router  # noqa: E402
from vidscribe.api.routes.transcript import router as transcript_router  # noqa: E402

api_router.include_router(health_router)
api_router.include_router(metrics_router)
api_router.include_router(media_router)
api_router.include_router(transcript_router)
api_router.include_router(playback_router)
api_router.include_router(timeline_router)
api_router.include_router(skills_router)
