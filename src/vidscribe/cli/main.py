from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from vidscribe.client.http import BackendClient
from vidscribe.config import load_config
from vidscribe.core.jobs.models import PipelineSnapshot
from vidscribe.core.jobs.orchestrator import JobOrchestrator, OrchestratorSettings
from vidscribe.core.store import EditorStore
from vidscribe.core.transcript.ingest import parse_segments
from vidscribe.core.transcript.model import TranscriptModel
from vidscribe.errors import ValidationError, VidscribeError
from vidscribe.skills.backend import BackendSkillRunner
from vidscribe.skills.base import TextSkillRunner, build_request, parse_skill_id
from vidscribe.utils.logger import configure_logging, level_from_name

app = typer.Typer(help="Upload media, follow transcription jobs and run transcript skills")


def _setup_logging(verbose: bool) -> None:
    cfg = load_config()
    configure_logging(
        logger_name="vidscribe",
        console_level=level_from_name("DEBUG" if verbose else cfg.log_level),
        log_path=(cfg.log_path or None),
    )


def _progress_line(snap: PipelineSnapshot) -> str:
    if snap.job is not None and snap.stage.value == "transcribing":
        return f"{snap.stage.value} {snap.job.progress}%"
    if snap.stage.value == "uploading":
        return f"uploading {snap.upload_progress}%"
    return snap.stage.value


def _print_transcript(model: TranscriptModel, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(model.to_dict(), ensure_ascii=False, indent=2))
        return
    for seg in model.segments:
        for w in seg.timed_words():
            typer.echo(f"[{w.start:8.2f} - {w.end:8.2f}] {w.text}")


async def _follow(orch: JobOrchestrator, pipeline_id: str, every: float = 0.5) -> PipelineSnapshot:
    last = ""
    while True:
        snap = orch.pipeline(pipeline_id)
        line = _progress_line(snap)
        if line != last:
            typer.echo(line, err=True)
            last = line
        if snap.is_finished:
            return snap
        try:
            return await orch.wait(pipeline_id, timeout=every)
        except asyncio.TimeoutError:
            continue


async def _run_transcribe(path: Path, language: Optional[str]) -> tuple[PipelineSnapshot, TranscriptModel]:
    cfg = load_config()
    store = EditorStore(pixels_per_second=cfg.pixels_per_second)
    async with BackendClient(cfg) as backend:
        async with JobOrchestrator(backend, store, OrchestratorSettings.from_config(cfg)) as orch:
            snap = orch.submit_file(path, language=language)
            snap = await _follow(orch, snap.pipeline_id)
    return snap, store.transcript


async def _run_resume(job_id: str, media_id: str, media_url: Optional[str]) -> tuple[PipelineSnapshot, TranscriptModel]:
    cfg = load_config()
    store = EditorStore(pixels_per_second=cfg.pixels_per_second)
    async with BackendClient(cfg) as backend:
        async with JobOrchestrator(backend, store, OrchestratorSettings.from_config(cfg)) as orch:
            snap = orch.resume(job_id, media_id, media_url=media_url)
            snap = await _follow(orch, snap.pipeline_id)
    return snap, store.transcript


def _finish(snap: PipelineSnapshot, transcript: TranscriptModel, as_json: bool) -> None:
    if snap.stage.value != "completed":
        err = snap.error
        typer.echo(f"{snap.stage.value}: {err.detail if err else 'unknown failure'}", err=True)
        raise typer.Exit(code=1)
    _print_transcript(transcript, as_json)


@app.command()
def transcribe(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help="Media file to upload"),
    lang: Optional[str] = typer.Option(None, help="Source language hint (e.g. en/ja); backend decides if omitted"),
    as_json: bool = typer.Option(False, "--json", help="Print the transcript as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Upload a file, wait for its transcript and print timestamped words."""
    _setup_logging(verbose)
    try:
        snap, transcript = asyncio.run(_run_transcribe(input, lang))
    except VidscribeError as e:
        typer.echo(f"{e.code}: {e.message}", err=True)
        raise typer.Exit(code=1)
    _finish(snap, transcript, as_json)


@app.command()
def resume(
    job_id: str = typer.Argument(..., help="Existing transcription job id"),
    media_id: str = typer.Option(..., "--media-id", help="Media id the job belongs to"),
    media_url: Optional[str] = typer.Option(None, "--media-url"),
    as_json: bool = typer.Option(False, "--json", help="Print the transcript as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Poll an already-created job until it finishes."""
    _setup_logging(verbose)
    try:
        snap, transcript = asyncio.run(_run_resume(job_id, media_id, media_url))
    except VidscribeError as e:
        typer.echo(f"{e.code}: {e.message}", err=True)
        raise typer.Exit(code=1)
    _finish(snap, transcript, as_json)


async def _transcript_of_job(backend: BackendClient, job_id: str) -> str:
    status = await backend.get_transcription_status(job_id)
    if status.status != "completed":
        raise ValidationError(f"job {job_id} is {status.status}, not completed")
    model = TranscriptModel()
    model.replace_all(parse_segments(status.segments), language=status.language)
    return model.full_text()


async def _run_skill(
    name: str,
    file: Optional[Path],
    job: Optional[str],
    target_language: Optional[str],
    platform: Optional[str],
    engine: str,
) -> str:
    cfg = load_config()
    sid = parse_skill_id(name)
    async with BackendClient(cfg) as backend:
        if file is not None:
            text = file.read_text(encoding="utf-8")
        else:
            text = await _transcript_of_job(backend, job or "")
        runner: TextSkillRunner
        if engine == "openai":
            from vidscribe.skills.openai_engine import OpenAISkillRunner

            runner = OpenAISkillRunner(model=cfg.openai_model)
        else:
            runner = BackendSkillRunner(backend)
        request = build_request(sid, text, target_language=target_language, platform=platform)
        return await runner.run(request)


@app.command()
def skill(
    name: str = typer.Argument(..., help="Skill id, e.g. remove-filler-words / generate-summary / translate"),
    file: Optional[Path] = typer.Option(None, "--file", exists=True, dir_okay=False, help="Plain-text transcript"),
    job: Optional[str] = typer.Option(None, "--job", help="Use the transcript of a completed job"),
    to: Optional[str] = typer.Option(None, "--to", help="Target language (translate)"),
    platform: Optional[str] = typer.Option(None, help="twitter/linkedin/instagram/youtube (social posts)"),
    engine: str = typer.Option("backend", help="Engine: backend/openai"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Run a text skill over a transcript."""
    if (file is None) == (job is None):
        raise typer.BadParameter("pass exactly one of --file or --job")
    if engine not in ("backend", "openai"):
        raise typer.BadParameter("engine must be one of: backend, openai")
    _setup_logging(verbose)
    try:
        out = asyncio.run(_run_skill(name, file, job, to, platform, engine))
    except VidscribeError as e:
        typer.echo(f"{e.code}: {e.message}", err=True)
        raise typer.Exit(code=1)
    typer.echo(out)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (default VIDSCRIBE_API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default VIDSCRIBE_API_PORT)"),
):
    """Run the HTTP bridge."""
    from vidscribe.api.main import run

    run(host=host, port=port)


if __name__ == "__main__":
    app()
