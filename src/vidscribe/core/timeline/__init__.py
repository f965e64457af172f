from vidscribe.core.timeline.model import TimelineModel
from vidscribe.core.timeline.models import Clip, Track, TrackKind

__all__ = ["TimelineModel", "Clip", "Track", "TrackKind"]
