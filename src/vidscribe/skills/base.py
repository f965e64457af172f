from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from vidscribe.core.timerange import TimeRange
from vidscribe.core.transcript.model import TranscriptModel
from vidscribe.errors import ValidationError


class SkillId(str, Enum):
    REMOVE_FILLER_WORDS = "remove-filler-words"
    GENERATE_SUMMARY = "generate-summary"
    GENERATE_SHOW_NOTES = "generate-show-notes"
    GENERATE_SOCIAL_POSTS = "generate-social-posts"
    SUGGEST_CUTS = "suggest-cuts"
    TRANSLATE = "translate"
    GENERATE_CHAPTERS = "generate-chapters"
    IMPROVE_TRANSCRIPT = "improve-transcript"

    @property
    def requires_target_language(self) -> bool:
        return self is SkillId.TRANSLATE


SOCIAL_PLATFORMS = ("twitter", "linkedin", "instagram", "youtube")


@dataclass(frozen=True)
class SkillRequest:
    skill: SkillId
    transcript: str
    target_language: Optional[str] = None
    platform: Optional[str] = None


def parse_skill_id(name: str) -> SkillId:
    try:
        return SkillId(name)
    except ValueError as e:
        known = ", ".join(s.value for s in SkillId)
        raise ValidationError(f"unknown skill: {name!r} (known: {known})", details={"skill": name}) from e


def build_request(
    skill: SkillId | str,
    transcript: str,
    *,
    target_language: Optional[str] = None,
    platform: Optional[str] = None,
) -> SkillRequest:
    sid = skill if isinstance(skill, SkillId) else parse_skill_id(skill)
    text = (transcript or "").strip()
    if not text:
        raise ValidationError("transcript is required", details={"skill": sid.value})
    if sid.requires_target_language and not (target_language or "").strip():
        raise ValidationError("target language is required for translate", details={"skill": sid.value})
    if platform is not None and platform not in SOCIAL_PLATFORMS:
        raise ValidationError(f"unknown platform: {platform!r}", details={"skill": sid.value})
    return SkillRequest(skill=sid, transcript=text, target_language=target_language, platform=platform)


def build_skill_input(transcript: TranscriptModel, rng: Optional[TimeRange] = None) -> str:
    """Plain text fed to a skill: the whole transcript, or just the words within rng."""
    if rng is None:
        return transcript.full_text()
    return transcript.text_for(rng)


class TextSkillRunner(ABC):
    """Stateless text-in/text-out transform over a transcript."""

    @abstractmethod
    async def run(self, request: SkillRequest) -> str:
        ...
