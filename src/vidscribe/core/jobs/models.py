from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MediaKind(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"


class JobState(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    TIMED_OUT = "timed_out"


TERMINAL_JOB_STATES = (JobState.COMPLETED, JobState.ERROR, JobState.TIMED_OUT)


class PipelineStage(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    COMPLETED = "completed"
    ERROR = "error"
    TIMED_OUT = "timed_out"


TERMINAL_STAGES = (PipelineStage.COMPLETED, PipelineStage.ERROR, PipelineStage.TIMED_OUT)


class MediaAsset(BaseModel):
    """
    Created on upload success; immutable thereafter.
    source_url is the local preview reference used while uploading,
    remote_url is the server-resolved location.
    """

    id: str = Field(min_length=1)
    original_name: str
    kind: MediaKind
    size_bytes: int = Field(ge=0)
    source_url: str
    remote_url: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def playable_url(self) -> str:
        return self.remote_url or self.source_url


class JobError(BaseModel):
    code: str  # e.g. transcription_failed / transcription_timeout / validation_error / superseded
    detail: str

    model_config = {"frozen": True}


class TranscriptionJob(BaseModel):
    """
    One transcription attempt for a media asset.
    Snapshots are frozen; only the orchestrator produces new versions.
    """

    id: str = Field(min_length=1)
    media_id: str = Field(min_length=1)
    status: JobState = JobState.PENDING
    progress: int = 0
    language: Optional[str] = None
    error: Optional[JobError] = None

    created_at: datetime = Field(default_factory=utc_now)
    finished_at: Optional[datetime] = None

    model_config = {"frozen": True}

    @field_validator("progress")
    @classmethod
    def _progress_range(cls, v: int) -> int:
        if v < 0 or v > 100:
            raise ValueError("progress must be within [0, 100]")
        return v

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_JOB_STATES


class PipelineSnapshot(BaseModel):
    """Read-only view of one media pipeline for progress UIs."""

    pipeline_id: str
    source_name: str = ""
    stage: PipelineStage = PipelineStage.IDLE
    upload_progress: int = 0
    media_id: Optional[str] = None
    media: Optional[MediaAsset] = None
    job: Optional[TranscriptionJob] = None
    error: Optional[JobError] = None

    model_config = {"frozen": True}

    @property
    def is_finished(self) -> bool:
        return self.stage in TERMINAL_STAGES


__all__ = [
    "utc_now",
    "MediaKind",
    "JobState",
    "TERMINAL_JOB_STATES",
    "PipelineStage",
    "TERMINAL_STAGES",
    "MediaAsset",
    "JobError",
    "TranscriptionJob",
    "PipelineSnapshot",
]
