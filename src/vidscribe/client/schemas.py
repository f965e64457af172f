from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class Envelope(BaseModel):
    """`{success, data, error}` wrapper the backend puts around most responses."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None

    model_config = {"extra": "ignore"}


class UploadedMedia(BaseModel):
    id: str
    url: str
    type: Optional[str] = None
    size: int = 0
    original_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("originalName", "original_name", "name")
    )

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return v if v is None else str(v)


class CreatedJob(BaseModel):
    id: str

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        return v if v is None else str(v)


class TranscriptionStatus(BaseModel):
    """
    Poll result. `status` is normalized to lower case; `failed` is accepted
    as a synonym of `error`. Segments stay raw here and are converted by
    core.transcript.ingest.
    """

    status: str
    progress: Optional[float] = None
    language: Optional[str] = None
    segments: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v: Any) -> Any:
        if not isinstance(v, str):
            return v
        s = v.strip().lower()
        return "error" if s == "failed" else s

    @field_validator("error", mode="before")
    @classmethod
    def _error_to_str(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return v.get("message") or str(v)
        return v


class SkillResult(BaseModel):
    result: Any

    model_config = {"extra": "ignore"}

    @property
    def text(self) -> str:
        if isinstance(self.result, str):
            return self.result
        return str(self.result)


__all__ = ["Envelope", "UploadedMedia", "CreatedJob", "TranscriptionStatus", "SkillResult"]
