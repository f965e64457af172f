from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from vidscribe.core.timerange import TimeRange


@dataclass(frozen=True)
class Word:
    """
    Minimal timestamped transcript unit (click-to-seek, highlighting).

    Notes:
    - `deleted` marks a word cut by text-driven editing; the word keeps its timing.
    - `synthetic` is True for pseudo-words derived from segment text.
    """
    text: str
    range: TimeRange
    confidence: Optional[float] = None
    deleted: bool = False
    synthetic: bool = False

    @property
    def start(self) -> float:
        return self.range.start

    @property
    def end(self) -> float:
        return self.range.end

    def with_deleted(self, deleted: bool) -> "Word":
        return replace(self, deleted=deleted)

    def to_dict(self) -> dict:
        d = {"text": self.text, "start": self.start, "end": self.end, "deleted": self.deleted}
        if self.confidence is not None:
            d["confidence"] = self.confidence
        if self.synthetic:
            d["synthetic"] = True
        return d


@dataclass(frozen=True)
class TranscriptSegment:
    id: str
    range: TimeRange
    text: str
    words: Tuple[Word, ...] = field(default_factory=tuple)

    @property
    def start(self) -> float:
        return self.range.start

    @property
    def end(self) -> float:
        return self.range.end

    @property
    def has_word_timing(self) -> bool:
        return len(self.words) > 0

    def timed_words(self) -> Tuple[Word, ...]:
        """Real words if present, otherwise pseudo-words spread evenly over the segment."""
        if self.words:
            return self.words
        return synthesize_words(self.text, self.range)

    def with_words(self, words: List[Word]) -> "TranscriptSegment":
        return replace(self, words=tuple(words))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "text": self.text,
            "words": [w.to_dict() for w in self.timed_words()],
        }


def synthesize_words(text: str, rng: TimeRange) -> Tuple[Word, ...]:
    """
    Split text on whitespace and divide the range evenly by word count.
    The last word ends exactly at rng.end (no float drift past the segment).
    """
    tokens = [t for t in (text or "").split() if t]
    if not tokens:
        return ()
    step = rng.duration / len(tokens)
    out: List[Word] = []
    for i, tok in enumerate(tokens):
        start = min(rng.start + i * step, rng.end)
        end = rng.end if i == len(tokens) - 1 else min(rng.start + (i + 1) * step, rng.end)
        out.append(Word(text=tok, range=TimeRange(start, end), synthetic=True))
    return tuple(out)


__all__ = ["Word", "TranscriptSegment", "synthesize_words"]
