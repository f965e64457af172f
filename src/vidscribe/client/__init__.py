from vidscribe.client.base import ProgressCallback, TranscriptionBackend
from vidscribe.client.http import BackendClient, resolve_media_url
from vidscribe.client.schemas import CreatedJob, SkillResult, TranscriptionStatus, UploadedMedia

__all__ = [
    "TranscriptionBackend",
    "ProgressCallback",
    "BackendClient",
    "resolve_media_url",
    "UploadedMedia",
    "CreatedJob",
    "TranscriptionStatus",
    "SkillResult",
]
