# Orchestrator lives in vidscribe.core.jobs.orchestrator (it depends on core.store,
# which imports the models below).
from vidscribe.core.jobs.models import (
    JobError,
    JobState,
    MediaAsset,
    MediaKind,
    PipelineSnapshot,
    PipelineStage,
    TranscriptionJob,
)

__all__ = [
    "JobError",
    "JobState",
    "MediaAsset",
    "MediaKind",
    "PipelineSnapshot",
    "PipelineStage",
    "TranscriptionJob",
]
