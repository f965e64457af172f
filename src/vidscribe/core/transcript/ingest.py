from __future__ import annotations

from typing import Any, Iterable, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from vidscribe.core.timerange import TimeRange
from vidscribe.core.transcript.models import TranscriptSegment, Word
from vidscribe.errors import ValidationError

# Backend records arrive with either naming scheme:
#   segment: start|startTime, end|endTime
#   word:    text|word, start|startTime, end|endTime
# Everything is converted to the canonical TimeRange-bearing schema here, once.

DEFAULT_WORD_DURATION = 0.5


class RawWord(BaseModel):
    text: str = Field(default="", validation_alias=AliasChoices("text", "word"))
    start: float = Field(validation_alias=AliasChoices("start", "startTime"))
    end: Optional[float] = Field(default=None, validation_alias=AliasChoices("end", "endTime"))
    confidence: Optional[float] = None
    deleted: bool = False

    model_config = {"extra": "ignore"}

    @field_validator("text", mode="before")
    @classmethod
    def _text_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class RawSegment(BaseModel):
    id: Optional[str] = None
    start: float = Field(default=0.0, validation_alias=AliasChoices("start", "startTime"))
    end: Optional[float] = Field(default=None, validation_alias=AliasChoices("end", "endTime"))
    text: str = ""
    words: List[RawWord] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        if v is None:
            return None
        return str(v)

    @field_validator("text", mode="before")
    @classmethod
    def _seg_text_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("words", mode="before")
    @classmethod
    def _words_none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v


def _word_from_raw(raw: RawWord, segment_end: Optional[float] = None) -> Word:
    end = raw.end
    if end is None:
        end = raw.start + DEFAULT_WORD_DURATION
        # A guessed end never runs past an explicit segment end.
        if segment_end is not None and segment_end >= raw.start:
            end = min(end, segment_end)
    return Word(
        text=raw.text.strip(),
        range=TimeRange(raw.start, end),
        confidence=raw.confidence,
        deleted=raw.deleted,
    )


def _segment_from_raw(raw: RawSegment, index: int) -> TranscriptSegment:
    words = [_word_from_raw(w, raw.end) for w in raw.words]
    if raw.end is not None:
        end = raw.end
    elif words:
        end = max(w.end for w in words)
    else:
        end = raw.start
    text = raw.text.strip() or " ".join(w.text for w in words if w.text)
    return TranscriptSegment(
        id=raw.id or f"seg-{index}",
        range=TimeRange(raw.start, end),
        text=text,
        words=tuple(words),
    )


def parse_segments(payload: Optional[Iterable[Any]]) -> List[TranscriptSegment]:
    """
    Convert backend segment records into canonical TranscriptSegments.

    Raises ValidationError on records that cannot form valid TimeRanges.
    A word without a start time is malformed; a word without an end gets
    DEFAULT_WORD_DURATION, capped at the segment end.
    Ordering, overlap and word containment are NOT checked here;
    TranscriptModel.replace_all owns that.
    """
    if payload is None:
        return []

    out: List[TranscriptSegment] = []
    for i, item in enumerate(payload):
        try:
            raw = item if isinstance(item, RawSegment) else RawSegment.model_validate(item)
        except PydanticValidationError as e:
            raise ValidationError(f"malformed segment at index={i}: {e.errors()[0].get('msg', e)}",
                                  details={"index": i}) from e
        try:
            out.append(_segment_from_raw(raw, i))
        except ValidationError as e:
            raise ValidationError(f"invalid timing in segment at index={i}: {e.message}",
                                  details={"index": i}) from e
    return out


__all__ = ["RawWord", "RawSegment", "parse_segments", "DEFAULT_WORD_DURATION"]
