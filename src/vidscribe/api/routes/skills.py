from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from vidscribe.api.schemas import SkillRunRequest, SkillRunResponse
from vidscribe.api.session import EditorSession, get_session
from vidscribe.core.timerange import TimeRange
from vidscribe.skills.base import SkillId, build_request, build_skill_input, parse_skill_id

router = APIRouter(prefix="/v1/skills", tags=["skills"])


@router.get("")
def list_skills() -> List[dict]:
    return [{"id": s.value, "requires_target_language": s.requires_target_language} for s in SkillId]


@router.post("/{skill}", response_model=SkillRunResponse)
async def run_skill(
    skill: str, req: SkillRunRequest, session: EditorSession = Depends(get_session)
) -> SkillRunResponse:
    sid = parse_skill_id(skill)
    if req.transcript is not None:
        text = req.transcript
    else:
        rng = None
        if req.start is not None or req.end is not None:
            start = req.start or 0.0
            end = req.end if req.end is not None else session.store.timeline.duration
            rng = TimeRange(start, max(start, end))
        text = build_skill_input(session.store.transcript, rng)
    request = build_request(sid, text, target_language=req.target_language, platform=req.platform)
    result = await session.skills.run(request)
    return SkillRunResponse(skill=sid.value, result=result)
