from __future__ import annotations

import math

import pytest

from vidscribe.core.timerange import TimeRange
from vidscribe.errors import ValidationError


def test_half_open_contains() -> None:
    r = TimeRange(1.0, 2.0)
    assert r.contains(1.0)
    assert r.contains(1.999)
    assert not r.contains(2.0)
    assert not r.contains(0.5)


def test_zero_length_contains_nothing() -> None:
    r = TimeRange(3.0, 3.0)
    assert r.duration == 0
    assert not r.contains(3.0)


@pytest.mark.parametrize("start,end", [(-0.1, 1.0), (2.0, 1.0), (0.0, math.inf), (math.nan, 1.0)])
def test_invalid_bounds_rejected(start: float, end: float) -> None:
    with pytest.raises(ValidationError):
        TimeRange(start, end)


def test_touching_ranges_do_not_overlap() -> None:
    a = TimeRange(0.0, 3.0)
    assert not a.overlaps(TimeRange(3.0, 5.0))
    assert a.overlaps(TimeRange(2.0, 5.0))
    assert a.intersection(TimeRange(3.0, 5.0)) is None
    assert a.intersection(TimeRange(2.0, 5.0)) == TimeRange(2.0, 3.0)


def test_shift_and_move_keep_duration() -> None:
    r = TimeRange(1.0, 2.5)
    assert r.shifted(1.0) == TimeRange(2.0, 3.5)
    assert r.moved_to(4.0) == TimeRange(4.0, 5.5)
    with pytest.raises(ValidationError):
        r.shifted(-2.0)
