from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Optional

from vidscribe.client.schemas import CreatedJob, SkillResult, TranscriptionStatus, UploadedMedia

ProgressCallback = Callable[[float], None]


class TranscriptionBackend(ABC):
    """
    Contract for the external media/transcription service.
    Implementations raise BackendRequestError for every transport, status
    or schema failure.
    """

    @abstractmethod
    async def upload_media(
        self, path: Path, *, on_progress: Optional[ProgressCallback] = None
    ) -> UploadedMedia:
        raise NotImplementedError

    @abstractmethod
    async def create_transcription_job(
        self, media_id: str, media_url: str, *, language: Optional[str] = None
    ) -> CreatedJob:
        raise NotImplementedError

    @abstractmethod
    async def get_transcription_status(self, job_id: str) -> TranscriptionStatus:
        raise NotImplementedError

    @abstractmethod
    async def run_text_skill(
        self,
        skill: str,
        transcript: str,
        *,
        target_language: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> SkillResult:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "TranscriptionBackend":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
