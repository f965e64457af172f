from vidscribe.skills.base import (
    SkillId,
    SkillRequest,
    TextSkillRunner,
    build_request,
    build_skill_input,
    parse_skill_id,
)

__all__ = [
    "SkillId",
    "SkillRequest",
    "TextSkillRunner",
    "build_request",
    "build_skill_input",
    "parse_skill_id",
]
