from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from vidscribe.errors import ValidationError


@dataclass(frozen=True)
class TimeRange:
    """
    Immutable half-open interval [start, end) in seconds.

    Invariant: start >= 0 and end >= start (finite values only).
    A zero-length range contains no instant.
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise ValidationError(f"time range bounds must be finite: [{self.start}, {self.end})")
        if self.start < 0:
            raise ValidationError(f"time range start must be non-negative: {self.start}")
        if self.end < self.start:
            raise ValidationError(f"time range end must be >= start: [{self.start}, {self.end})")

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, t: float) -> bool:
        return self.start <= t < self.end

    def overlaps(self, other: "TimeRange") -> bool:
        # Touching at a boundary (a.end == b.start) is not an overlap.
        return self.start < other.end and other.start < self.end

    def intersection(self, other: "TimeRange") -> Optional["TimeRange"]:
        if not self.overlaps(other):
            return None
        return TimeRange(max(self.start, other.start), min(self.end, other.end))

    def shifted(self, delta: float) -> "TimeRange":
        return TimeRange(self.start + delta, self.end + delta)

    def moved_to(self, new_start: float) -> "TimeRange":
        return TimeRange(new_start, new_start + self.duration)

    def with_bounds(self, start: Optional[float] = None, end: Optional[float] = None) -> "TimeRange":
        return TimeRange(
            start=self.start if start is None else start,
            end=self.end if end is None else end,
        )

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}
