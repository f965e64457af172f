from __future__ import annotations

from typing import Dict, Tuple

from vidscribe.skills.base import SkillId, SkillRequest

PLATFORM_GUIDES: Dict[str, str] = {
    "twitter": "Create 3 engaging tweet options (max 280 chars each) with relevant hashtags",
    "linkedin": "Create a professional LinkedIn post with key insights and a call to action",
    "instagram": "Create an Instagram caption with emojis and relevant hashtags",
    "youtube": "Create an engaging YouTube description with timestamps placeholder and tags",
}

_SYSTEM: Dict[SkillId, str] = {
    SkillId.REMOVE_FILLER_WORDS: (
        "You are a transcript editor. Remove filler words (um, uh, like, you know, so, actually, "
        "basically, literally, right, I mean, kind of, sort of) from the transcript while maintaining "
        "natural flow and meaning. Return ONLY the cleaned transcript, no explanations."
    ),
    SkillId.GENERATE_SUMMARY: (
        "You are a content summarizer. Create a concise, engaging summary of the video content based "
        "on the transcript. Include key points and main topics discussed."
    ),
    SkillId.GENERATE_SHOW_NOTES: (
        "You are a content creator assistant. Generate professional show notes from the transcript, "
        "including: title suggestions, key topics with timestamps placeholders, main takeaways, and "
        "relevant links/resources to explore."
    ),
    SkillId.SUGGEST_CUTS: (
        "You are a video editor assistant. Analyze the transcript and identify sections that could be "
        "cut: repetitive content, off-topic tangents, false starts, or unclear segments. Format as a "
        "list with the text to cut and reason why."
    ),
    SkillId.GENERATE_CHAPTERS: (
        "You are a video editor. Analyze the transcript and suggest chapter markers with titles. "
        "Format as: [Timestamp placeholder] - Chapter Title. Group related content into logical chapters."
    ),
    SkillId.IMPROVE_TRANSCRIPT: (
        "You are a professional editor. Improve the transcript for clarity and readability: fix grammar, "
        "improve sentence structure, and make it more professional while keeping the original meaning "
        "and voice. Return ONLY the improved transcript."
    ),
}

_USER: Dict[SkillId, str] = {
    SkillId.REMOVE_FILLER_WORDS: "Please remove filler words from this transcript:",
    SkillId.GENERATE_SUMMARY: "Please summarize this video transcript:",
    SkillId.GENERATE_SHOW_NOTES: "Please generate show notes for this video transcript:",
    SkillId.GENERATE_SOCIAL_POSTS: "Based on this video transcript, create social media content:",
    SkillId.SUGGEST_CUTS: "Please analyze this transcript and suggest what to cut:",
    SkillId.GENERATE_CHAPTERS: "Please generate chapter markers for this video transcript:",
    SkillId.IMPROVE_TRANSCRIPT: "Please improve this transcript for clarity:",
}


def render(request: SkillRequest) -> Tuple[str, str]:
    """(system, user) messages for one skill request."""
    sid = request.skill
    if sid is SkillId.TRANSLATE:
        lang = request.target_language
        system = (
            "You are a professional translator. Translate the content accurately while maintaining the "
            f"natural speaking style. Target language: {lang}. Return ONLY the translation."
        )
        user = f"Please translate this transcript to {lang}:"
    elif sid is SkillId.GENERATE_SOCIAL_POSTS:
        guide = PLATFORM_GUIDES.get(request.platform or "twitter", PLATFORM_GUIDES["twitter"])
        system = f"You are a social media expert. {guide}"
        user = _USER[sid]
    else:
        system = _SYSTEM[sid]
        user = _USER[sid]
    return system, f"{user}\n\n{request.transcript}"
