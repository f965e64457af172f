from __future__ import annotations

from typing import Optional

from fastapi import Request

from vidscribe.client.base import TranscriptionBackend
from vidscribe.client.http import BackendClient
from vidscribe.config import AppConfig, load_config
from vidscribe.core.jobs.orchestrator import JobOrchestrator, OrchestratorSettings
from vidscribe.core.playback.player import CommandLogPlayer, MediaPlayer
from vidscribe.core.store import EditorStore
from vidscribe.skills.backend import BackendSkillRunner
from vidscribe.skills.base import TextSkillRunner


class EditorSession:
    """
    One editing session served by the bridge: store, orchestrator, player
    adapter and skill runner, all owned together and closed together.
    """

    def __init__(
        self,
        cfg: Optional[AppConfig] = None,
        *,
        backend: Optional[TranscriptionBackend] = None,
        player: Optional[MediaPlayer] = None,
        skills: Optional[TextSkillRunner] = None,
        settings: Optional[OrchestratorSettings] = None,
    ) -> None:
        self.cfg = cfg or load_config()
        self.player = player or CommandLogPlayer()
        self.store = EditorStore(player=self.player, pixels_per_second=self.cfg.pixels_per_second)
        self.backend = backend or BackendClient(self.cfg)
        self.orchestrator = JobOrchestrator(
            self.backend,
            self.store,
            settings or OrchestratorSettings.from_config(self.cfg),
        )
        self.skills = skills or BackendSkillRunner(self.backend)

    async def close(self) -> None:
        await self.orchestrator.close()
        await self.backend.aclose()


def get_session(request: Request) -> EditorSession:
    return request.app.state.session
