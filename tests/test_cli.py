from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

from typer.testing import CliRunner

from tests._helpers import HELLO_WORLD, FakeBackend, completed, fast_settings
from vidscribe.cli.main import app

runner = CliRunner()


def test_skill_requires_exactly_one_source(tmp_path: Path):
    result = runner.invoke(app, ["skill", "generate-summary"])
    assert result.exit_code == 2

    f = tmp_path / "t.txt"
    f.write_text("hello", encoding="utf-8")
    result = runner.invoke(app, ["skill", "generate-summary", "--file", str(f), "--job", "j1"])
    assert result.exit_code == 2


def test_skill_from_file(monkeypatch, tmp_path: Path):
    backend = FakeBackend()
    monkeypatch.setattr("vidscribe.cli.main.BackendClient", lambda cfg: backend)

    f = tmp_path / "t.txt"
    f.write_text("um so hello world", encoding="utf-8")
    result = runner.invoke(app, ["skill", "remove-filler-words", "--file", str(f)])

    assert result.exit_code == 0, result.output
    assert "remove-filler-words:um so hello world" in result.stdout
    assert backend.closed


def test_skill_unknown_name_fails(monkeypatch, tmp_path: Path):
    monkeypatch.setattr("vidscribe.cli.main.BackendClient", lambda cfg: FakeBackend())
    f = tmp_path / "t.txt"
    f.write_text("hello", encoding="utf-8")

    result = runner.invoke(app, ["skill", "write-a-novel", "--file", str(f)])
    assert result.exit_code == 1


def test_transcribe_prints_words(monkeypatch, tmp_path: Path):
    backend = FakeBackend(statuses={"j1": [completed(HELLO_WORLD)]})
    monkeypatch.setattr("vidscribe.cli.main.BackendClient", lambda cfg: backend)
    monkeypatch.setattr(
        "vidscribe.cli.main.OrchestratorSettings",
        SimpleNamespace(from_config=lambda cfg: fast_settings()),
    )
    src = tmp_path / "a.mp4"
    src.write_bytes(b"\x00" * 16)

    result = runner.invoke(app, ["transcribe", str(src)])

    assert result.exit_code == 0, result.output
    lines = [ln for ln in result.stdout.splitlines() if ln.startswith("[ ")]
    assert lines == [
        "[    0.00 -     1.00] hello",
        "[    1.00 -     2.00] world",
    ]


def test_transcribe_reports_failure(monkeypatch, tmp_path: Path):
    backend = FakeBackend(statuses={"j1": [{"status": "failed", "error": "bad codec"}]})
    monkeypatch.setattr("vidscribe.cli.main.BackendClient", lambda cfg: backend)
    monkeypatch.setattr(
        "vidscribe.cli.main.OrchestratorSettings",
        SimpleNamespace(from_config=lambda cfg: fast_settings()),
    )
    src = tmp_path / "a.mp4"
    src.write_bytes(b"\x00" * 16)

    result = runner.invoke(app, ["transcribe", str(src)])
    assert result.exit_code == 1
