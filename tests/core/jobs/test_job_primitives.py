from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from vidscribe.core.jobs.models import JobState, TranscriptionJob
from vidscribe.core.jobs.preview import PreviewRegistry
from vidscribe.core.jobs.progress import ProgressCounter
from vidscribe.core.jobs.tasks import TaskSet, spawn


def test_progress_counter_caps_and_monotonic() -> None:
    c = ProgressCounter()
    for _ in range(30):
        c.advance(5, cap=95)
    assert c.value == 95
    c.observe(50, cap=99)
    assert c.value == 95
    c.observe(120, cap=99)
    assert c.value == 99
    assert c.complete() == 100


def test_advance_never_lowers_a_higher_value() -> None:
    c = ProgressCounter(value=97)
    assert c.advance(5, cap=95) == 97


def test_preview_registry_release_is_idempotent(tmp_path: Path) -> None:
    reg = PreviewRegistry()
    ref = reg.create(tmp_path / "clip.mp4")
    assert ref.url.startswith("file://")
    assert ref.url.endswith("/clip.mp4")
    assert reg.live == [ref]
    assert reg.release(ref) is True
    assert reg.release(ref) is False
    assert reg.live == []


def test_job_progress_bounds() -> None:
    with pytest.raises(PydanticValidationError):
        TranscriptionJob(id="j", media_id="m", progress=101)
    job = TranscriptionJob(id="j", media_id="m")
    assert job.status is JobState.PENDING
    assert not job.is_terminal
    assert job.model_copy(update={"status": JobState.TIMED_OUT}).is_terminal


def test_task_handle_cancel_is_idempotent() -> None:
    ran = []

    async def forever():
        while True:
            await asyncio.sleep(0.01)
            ran.append(1)

    async def main():
        tasks = TaskSet()
        h = tasks.track(spawn(forever(), name="forever"))
        await asyncio.sleep(0.03)
        first = h.cancel()
        second = h.cancel()
        await h.wait()
        count = len(ran)
        await asyncio.sleep(0.03)
        return first, second, h.cancelled, h.done, count, len(tasks)

    first, second, cancelled, done, count, remaining = asyncio.run(main())
    assert first is True
    assert second is False
    assert cancelled and done
    assert len(ran) == count
    assert remaining == 0
