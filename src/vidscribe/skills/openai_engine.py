from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from vidscribe.errors import SkillFailure
from vidscribe.metrics import inc_skill_run
from vidscribe.skills.base import SkillRequest, TextSkillRunner
from vidscribe.skills.prompts import render
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.skills")


def _safe(s: Optional[str]) -> str:
    return (s or "").strip()


class OpenAISkillRunner(TextSkillRunner):
    """
    Runs skills locally through the OpenAI Responses API.
    The API key comes from OPENAI_API_KEY unless a client is injected.
    """

    def __init__(self, model: str = "gpt-5-mini", *, client: Optional[Any] = None) -> None:
        self.model = model
        self._client = client if client is not None else AsyncOpenAI()

    async def run(self, request: SkillRequest) -> str:
        system, user = render(request)
        try:
            resp = await self._client.responses.create(
                model=self.model,
                input=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            )
        except OpenAIError as e:
            inc_skill_run(request.skill.value, "error")
            logger.warning("SKILL_FAILED skill=%s engine=openai err=%r", request.skill.value, e)
            raise SkillFailure(f"{request.skill.value} failed: {e}") from e

        out = _safe(getattr(resp, "output_text", None))
        if not out:
            inc_skill_run(request.skill.value, "error")
            raise SkillFailure(f"{request.skill.value} returned no text")
        inc_skill_run(request.skill.value, "ok")
        logger.info("SKILL_OK skill=%s engine=openai model=%s chars=%d", request.skill.value, self.model, len(out))
        return out
