from __future__ import annotations

from vidscribe.client.base import TranscriptionBackend
from vidscribe.errors import BackendRequestError, SkillFailure
from vidscribe.metrics import inc_skill_run
from vidscribe.skills.base import SkillRequest, TextSkillRunner
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.skills")


class BackendSkillRunner(TextSkillRunner):
    """Delegates to the backend's /ai/skills/{skill} endpoint."""

    def __init__(self, backend: TranscriptionBackend) -> None:
        self._backend = backend

    async def run(self, request: SkillRequest) -> str:
        try:
            res = await self._backend.run_text_skill(
                request.skill.value,
                request.transcript,
                target_language=request.target_language,
                platform=request.platform,
            )
        except BackendRequestError as e:
            inc_skill_run(request.skill.value, "error")
            logger.warning("SKILL_FAILED skill=%s engine=backend err=%s", request.skill.value, e.message)
            raise SkillFailure(f"{request.skill.value} failed: {e.message}", details=e.details) from e
        inc_skill_run(request.skill.value, "ok")
        logger.info("SKILL_OK skill=%s engine=backend chars=%d", request.skill.value, len(res.text))
        return res.text
