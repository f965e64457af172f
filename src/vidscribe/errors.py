from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(eq=False)
class VidscribeError(Exception):
    """
    Typed error carrying a stable machine-readable code.

    Failures are scoped to one job/asset; none of these is fatal to the process.
    """

    code: str
    message: str
    status_code: int = 400
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


class UploadFailure(VidscribeError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="upload_failed", message=message, status_code=502, details=details)


class JobCreationFailure(VidscribeError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="job_creation_failed", message=message, status_code=502, details=details)


class TranscriptionFailure(VidscribeError):
    """Server reported `error` for the job; terminal."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="transcription_failed", message=message, status_code=502, details=details)


class PollTransientFailure(VidscribeError):
    """One failed status poll. Logged and retried on the next tick, never surfaced."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="poll_transient_failure", message=message, status_code=503, details=details)


class TranscriptionTimeout(VidscribeError):
    def __init__(self, message: str = "transcription took too long", *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="transcription_timeout", message=message, status_code=504, details=details)


class ValidationError(VidscribeError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=422, details=details)


class OverlapError(ValidationError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details=details)
        self.code = "clip_overlap"
        self.status_code = 409


class NotFoundError(VidscribeError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class BackendRequestError(VidscribeError):
    """Network failure, non-2xx response or unparseable payload from the backend."""

    def __init__(
        self,
        message: str,
        *,
        http_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = dict(details or {})
        if http_status is not None:
            d["http_status"] = http_status
        super().__init__(code="backend_request_failed", message=message, status_code=502, details=d)
        self.http_status = http_status


class SkillFailure(VidscribeError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="skill_failed", message=message, status_code=502, details=details)
