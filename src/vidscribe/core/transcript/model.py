from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from vidscribe.core.timerange import TimeRange
from vidscribe.core.transcript.models import TranscriptSegment, Word
from vidscribe.errors import NotFoundError, ValidationError
from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.transcript")


@dataclass(frozen=True)
class WordLocation:
    segment_index: int
    word_index: int
    segment_id: str
    word: Word


def validate_segments(segments: Sequence[TranscriptSegment]) -> None:
    """
    Ordering/non-overlap invariants:
    - segments ordered by start, siblings do not overlap (end_i <= start_{i+1})
    - words within a segment ordered, non-overlapping and inside [seg.start, seg.end]
    - words across the whole transcript are globally ordered (needed for lookup)
    - segment ids unique
    """
    seen_ids: set[str] = set()
    prev_seg: Optional[TranscriptSegment] = None
    prev_word_end = 0.0
    prev_word_where = ""

    for i, seg in enumerate(segments):
        if seg.id in seen_ids:
            raise ValidationError(f"duplicate segment id: {seg.id!r}", details={"segment_index": i})
        seen_ids.add(seg.id)

        if prev_seg is not None:
            if seg.start < prev_seg.start:
                raise ValidationError(
                    f"segments out of order at index={i}: {seg.start} < {prev_seg.start}",
                    details={"segment_index": i},
                )
            if prev_seg.end > seg.start:
                raise ValidationError(
                    f"segments overlap at index={i}: [{prev_seg.start}, {prev_seg.end}) vs [{seg.start}, {seg.end})",
                    details={"segment_index": i},
                )
        prev_seg = seg

        for j, w in enumerate(seg.timed_words()):
            if w.start < seg.start or w.end > seg.end:
                raise ValidationError(
                    f"word outside its segment at segment={i} word={j}: "
                    f"[{w.start}, {w.end}) not within [{seg.start}, {seg.end}]",
                    details={"segment_index": i, "word_index": j},
                )
            if w.start < prev_word_end:
                raise ValidationError(
                    f"word overlaps or is out of order at segment={i} word={j} "
                    f"(starts {w.start}, previous {prev_word_where} ends {prev_word_end})",
                    details={"segment_index": i, "word_index": j},
                )
            prev_word_end = w.end
            prev_word_where = f"segment={i} word={j}"


class TranscriptModel:
    """
    Owns transcript segments/words and answers time queries.

    Segments are replaced wholesale (never merged incrementally). Lookups run on a
    flattened, sorted index of timed words (real or synthesized), so active_word_at
    is a bisect over word starts.
    """

    def __init__(self) -> None:
        self._segments: Tuple[TranscriptSegment, ...] = ()
        self._language: Optional[str] = None
        self._version = 0
        self._index: List[WordLocation] = []
        self._starts: List[float] = []

    # -------------------------
    # Read
    # -------------------------

    @property
    def segments(self) -> Tuple[TranscriptSegment, ...]:
        return self._segments

    @property
    def language(self) -> Optional[str]:
        return self._language

    @property
    def version(self) -> int:
        return self._version

    @property
    def is_empty(self) -> bool:
        return not self._segments

    def segment(self, segment_id: str) -> TranscriptSegment:
        for seg in self._segments:
            if seg.id == segment_id:
                return seg
        raise NotFoundError(f"segment not found: {segment_id}")

    def locate(self, t: float) -> Optional[WordLocation]:
        """Half-open lookup: the word with start <= t < end, or None."""
        if not self._starts:
            return None
        i = bisect.bisect_right(self._starts, t) - 1
        if i < 0:
            return None
        loc = self._index[i]
        if loc.word.range.contains(t):
            return loc
        return None

    def active_word_at(self, t: float) -> Optional[Word]:
        loc = self.locate(t)
        return loc.word if loc is not None else None

    def time_of_word(self, segment_id: str, word_index: int) -> float:
        seg = self.segment(segment_id)
        words = seg.timed_words()
        if word_index < 0 or word_index >= len(words):
            raise NotFoundError(f"word index out of range: segment={segment_id} index={word_index}")
        return words[word_index].start

    def text_for(self, rng: TimeRange) -> str:
        """
        Text of all (non-deleted) words overlapping rng, in order.
        A zero-length range selects the word containing that instant.
        """
        parts: List[str] = []
        for loc in self._index:
            w = loc.word
            if w.deleted or not w.text:
                continue
            if rng.duration == 0:
                hit = w.range.contains(rng.start)
            else:
                hit = w.range.overlaps(rng)
            if hit:
                parts.append(w.text)
        return " ".join(parts)

    def full_text(self) -> str:
        return " ".join(seg.text for seg in self._segments if seg.text)

    def deleted_ranges(self) -> List[Tuple[str, TimeRange]]:
        """Contiguous runs of deleted words per segment, as (segment_id, range)."""
        out: List[Tuple[str, TimeRange]] = []
        for seg in self._segments:
            run_start: Optional[float] = None
            prev_end = 0.0
            for w in seg.words:
                if w.deleted and run_start is None:
                    run_start = w.start
                if not w.deleted and run_start is not None:
                    out.append((seg.id, TimeRange(run_start, prev_end)))
                    run_start = None
                prev_end = w.end
            if run_start is not None:
                out.append((seg.id, TimeRange(run_start, prev_end)))
        return out

    # -------------------------
    # Write
    # -------------------------

    def replace_all(self, segments: Iterable[TranscriptSegment], *, language: Optional[str] = None) -> None:
        """
        Wholesale replacement. Validates first; on ValidationError the previous
        model is left untouched.
        """
        new_segments = tuple(segments)
        validate_segments(new_segments)
        self._commit(new_segments)
        if language is not None:
            self._language = language
        logger.info("TRANSCRIPT_REPLACED segments=%d words=%d version=%d",
                    len(self._segments), len(self._index), self._version)

    def clear(self) -> None:
        self._commit(())
        self._language = None

    def delete_words(self, segment_id: str, first: int, last: int) -> None:
        """Mark words first..last (inclusive) as deleted; timing is kept."""
        self._set_deleted(segment_id, range(first, last + 1), True)

    def restore_words(self, segment_id: str, indices: Iterable[int]) -> None:
        self._set_deleted(segment_id, indices, False)

    def _set_deleted(self, segment_id: str, indices: Iterable[int], deleted: bool) -> None:
        seg_pos = self._segment_position(segment_id)
        seg = self._segments[seg_pos]
        words = list(seg.timed_words())
        wanted = set(indices)
        bad = [i for i in wanted if i < 0 or i >= len(words)]
        if bad:
            raise NotFoundError(f"word index out of range: segment={segment_id} indices={sorted(bad)}")
        for i in wanted:
            words[i] = words[i].with_deleted(deleted)
        updated = list(self._segments)
        updated[seg_pos] = seg.with_words(words)
        self._commit(tuple(updated))

    def _segment_position(self, segment_id: str) -> int:
        for i, seg in enumerate(self._segments):
            if seg.id == segment_id:
                return i
        raise NotFoundError(f"segment not found: {segment_id}")

    def _commit(self, segments: Tuple[TranscriptSegment, ...]) -> None:
        index: List[WordLocation] = []
        for si, seg in enumerate(segments):
            for wi, w in enumerate(seg.timed_words()):
                index.append(WordLocation(segment_index=si, word_index=wi, segment_id=seg.id, word=w))
        self._segments = segments
        self._index = index
        self._starts = [loc.word.start for loc in index]
        self._version += 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "language": self._language,
            "version": self._version,
            "segments": [s.to_dict() for s in self._segments],
        }


__all__ = ["TranscriptModel", "WordLocation", "validate_segments"]
