from __future__ import annotations

import mimetypes
import os
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, Type, TypeVar
from urllib.parse import urljoin

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vidscribe.client.base import ProgressCallback, TranscriptionBackend
from vidscribe.client.schemas import CreatedJob, Envelope, SkillResult, TranscriptionStatus, UploadedMedia
from vidscribe.config import AppConfig, load_config
from vidscribe.errors import BackendRequestError
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.client")

M = TypeVar("M", bound=BaseModel)


class ProgressReader:
    """
    File wrapper handed to httpx multipart encoding; reports the share of
    bytes consumed so far (0..100) on every read.
    """

    def __init__(self, fh: BinaryIO, total: int, on_progress: Optional[ProgressCallback]) -> None:
        self._fh = fh
        self._total = max(0, int(total))
        self._sent = 0
        self._on_progress = on_progress

    def read(self, size: int = -1) -> bytes:
        chunk = self._fh.read(size)
        if chunk:
            self._sent += len(chunk)
            if self._on_progress is not None and self._total:
                self._on_progress(min(100.0, self._sent * 100.0 / self._total))
        return chunk

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        pos = self._fh.seek(offset, whence)
        self._sent = pos if whence == os.SEEK_SET else self._sent
        return pos

    def tell(self) -> int:
        return self._fh.tell()

    def fileno(self) -> int:
        return self._fh.fileno()


def resolve_media_url(base_url: str, url: str) -> str:
    """`/uploads/x.mp4` -> `http://host:port/uploads/x.mp4`; absolute URLs pass through."""
    if not url:
        return url
    if url.startswith(("http://", "https://", "file://", "blob:")):
        return url
    return urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))


class BackendClient(TranscriptionBackend):
    """
    httpx-based client for the media/transcription backend.

    Endpoints (relative to cfg.api_base_url):
    - POST /media                     multipart `file`
    - POST /transcriptions            {mediaId, mediaUrl, language?}
    - GET  /transcriptions/{id}
    - POST /ai/skills/{skill}         {transcript, targetLanguage?, platform?}
    """

    def __init__(
        self,
        cfg: Optional[AppConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._cfg = cfg or load_config()
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self._cfg.auth_token:
            headers["Authorization"] = f"Bearer {self._cfg.auth_token}"
        self._http = httpx.AsyncClient(
            base_url=self._cfg.api_base_url.rstrip("/") + "/",
            headers=headers,
            timeout=httpx.Timeout(self._cfg.http_timeout_sec),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._cfg.backend_url

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------
    # Operations
    # -------------------------

    async def upload_media(
        self, path: Path, *, on_progress: Optional[ProgressCallback] = None
    ) -> UploadedMedia:
        p = Path(path)
        try:
            size = p.stat().st_size
        except OSError as e:
            raise BackendRequestError(f"cannot read upload source: {p}", details={"path": str(p)}) from e

        content_type = mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        with p.open("rb") as fh:
            reader = ProgressReader(fh, size, on_progress)
            data = await self._request(
                "POST",
                "media",
                files={"file": (p.name, reader, content_type)},
                timeout=self._cfg.upload_timeout_sec,
            )

        media = self._parse(UploadedMedia, data, what="upload response")
        if not media.original_name:
            media = media.model_copy(update={"original_name": p.name})
        if not media.type:
            media = media.model_copy(update={"type": content_type})
        media = media.model_copy(update={"url": resolve_media_url(self._cfg.backend_url, media.url)})
        logger.info("UPLOAD_OK media_id=%s size=%d url=%s", media.id, media.size, media.url)
        return media

    async def create_transcription_job(
        self, media_id: str, media_url: str, *, language: Optional[str] = None
    ) -> CreatedJob:
        body: Dict[str, Any] = {"mediaId": media_id, "mediaUrl": media_url}
        if language:
            body["language"] = language
        data = await self._request("POST", "transcriptions", json=body)
        job = self._parse(CreatedJob, data, what="transcription job")
        logger.info("JOB_CREATED job_id=%s media_id=%s", job.id, media_id)
        return job

    async def get_transcription_status(self, job_id: str) -> TranscriptionStatus:
        data = await self._request("GET", f"transcriptions/{job_id}")
        return self._parse(TranscriptionStatus, data, what="transcription status")

    async def run_text_skill(
        self,
        skill: str,
        transcript: str,
        *,
        target_language: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> SkillResult:
        body: Dict[str, Any] = {"transcript": transcript}
        if target_language:
            body["targetLanguage"] = target_language
        if platform:
            body["platform"] = platform
        data = await self._request("POST", f"ai/skills/{skill}", json=body)
        if not isinstance(data, dict) or "result" not in data:
            data = {"result": data}
        return self._parse(SkillResult, data, what="skill result")

    # -------------------------
    # Internal helpers
    # -------------------------

    async def _request(self, method: str, url: str, *, timeout: Optional[float] = None, **kwargs: Any) -> Any:
        extra: Dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = httpx.Timeout(timeout)
        try:
            resp = await self._http.request(method, url, **kwargs, **extra)
        except httpx.HTTPError as e:
            raise BackendRequestError(
                f"{method} {url} failed: {e.__class__.__name__}: {e}",
                details={"method": method, "url": url},
            ) from e

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.is_error:
            message = None
            if isinstance(payload, dict):
                message = payload.get("error") or payload.get("message")
            raise BackendRequestError(
                f"{method} {url} returned HTTP {resp.status_code}: {message or resp.reason_phrase}",
                http_status=resp.status_code,
                details={"method": method, "url": url},
            )
        if payload is None:
            raise BackendRequestError(
                f"{method} {url} returned a non-JSON body",
                http_status=resp.status_code,
                details={"method": method, "url": url},
            )
        return self._unwrap(payload, method=method, url=url)

    @staticmethod
    def _unwrap(payload: Any, *, method: str, url: str) -> Any:
        if not (isinstance(payload, dict) and "success" in payload):
            return payload
        env = Envelope.model_validate(payload)
        if not env.success:
            raise BackendRequestError(
                f"{method} {url} rejected: {env.error or 'unknown error'}",
                details={"method": method, "url": url},
            )
        return env.data

    @staticmethod
    def _parse(model: Type[M], data: Any, *, what: str) -> M:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise BackendRequestError(
                f"malformed {what}: {e.errors()[0].get('msg', e)}",
                details={"schema": model.__name__},
            ) from e


__all__ = ["BackendClient", "ProgressReader", "resolve_media_url"]
