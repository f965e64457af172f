from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from vidscribe.core.timeline.models import TrackKind


class UploadRequest(BaseModel):
    path: str = Field(min_length=1)
    language: Optional[str] = None

    model_config = {"extra": "forbid"}


class ResumeRequest(BaseModel):
    job_id: str = Field(min_length=1)
    media_id: str = Field(min_length=1)
    media_url: Optional[str] = None
    language: Optional[str] = None

    model_config = {"extra": "forbid"}


class TimeRequest(BaseModel):
    t: float = Field(allow_inf_nan=False)


class WordSeekRequest(BaseModel):
    segment_id: str
    word_index: int = Field(ge=0)


class PositionSeekRequest(BaseModel):
    x: float = Field(allow_inf_nan=False)


class VolumeRequest(BaseModel):
    volume: float = Field(allow_inf_nan=False)


class MuteRequest(BaseModel):
    muted: bool


class DurationRequest(BaseModel):
    duration: float = Field(ge=0, allow_inf_nan=False)


class WordsDeleteRequest(BaseModel):
    segment_id: str
    first: int = Field(ge=0)
    last: int = Field(ge=0)


class WordsRestoreRequest(BaseModel):
    segment_id: str
    indices: List[int]


class ZoomRequest(BaseModel):
    zoom: float = Field(allow_inf_nan=False)


class TrackCreateRequest(BaseModel):
    id: str = Field(min_length=1)
    kind: TrackKind
    name: str = ""
    color: str = ""

    model_config = {"extra": "forbid"}


class ClipCreateRequest(BaseModel):
    id: str = Field(min_length=1)
    name: str = ""
    start: float
    end: float
    media_id: Optional[str] = None
    source_start: float = 0.0

    model_config = {"extra": "forbid"}


class ClipMoveRequest(BaseModel):
    start: float
    snap: bool = False


class ClipSplitRequest(BaseModel):
    at: float


class RangeRequest(BaseModel):
    start: float
    end: float


class SkillRunRequest(BaseModel):
    """
    Without `transcript`, the session transcript is used (optionally limited to
    [start, end)).
    """

    transcript: Optional[str] = None
    start: Optional[float] = None
    end: Optional[float] = None
    target_language: Optional[str] = None
    platform: Optional[str] = None

    model_config = {"extra": "forbid"}


class SkillRunResponse(BaseModel):
    skill: str
    result: str
