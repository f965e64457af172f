from vidscribe.core.transcript.model import TranscriptModel, WordLocation, validate_segments
from vidscribe.core.transcript.models import TranscriptSegment, Word, synthesize_words
from vidscribe.core.transcript.ingest import parse_segments

__all__ = [
    "TranscriptModel",
    "WordLocation",
    "validate_segments",
    "TranscriptSegment",
    "Word",
    "synthesize_words",
    "parse_segments",
]
