from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_opt(name: str) -> Optional[str]:
    v = (os.getenv(name) or "").strip()
    return v or None


@dataclass(frozen=True)
class AppConfig:
    """
    Runtime config (env-driven, VIDSCRIBE_* variables).

    Timing knobs mirror the editor's original cadence:
      - poll every 1.5s, hard deadline 5 minutes
      - upload ramp +10% every 200ms, capped at 90% until the server acks
      - synthetic transcription progress +5% per tick, capped at 95%
    """

    # Backend (transcoding/transcription service)
    backend_url: str = os.getenv("VIDSCRIBE_BACKEND_URL", "http://localhost:3001")
    api_prefix: str = os.getenv("VIDSCRIBE_API_PREFIX", "/api")
    auth_token: Optional[str] = _env_opt("VIDSCRIBE_AUTH_TOKEN")
    http_timeout_sec: float = _env_float("VIDSCRIBE_HTTP_TIMEOUT_SEC", 30.0)
    upload_timeout_sec: float = _env_float("VIDSCRIBE_UPLOAD_TIMEOUT_SEC", 300.0)

    # Orchestration
    poll_interval_sec: float = _env_float("VIDSCRIBE_POLL_INTERVAL_SEC", 1.5)
    transcription_timeout_sec: float = _env_float("VIDSCRIBE_TRANSCRIPTION_TIMEOUT_SEC", 300.0)
    upload_ramp_interval_sec: float = _env_float("VIDSCRIBE_UPLOAD_RAMP_INTERVAL_SEC", 0.2)
    upload_ramp_step: int = _env_int("VIDSCRIBE_UPLOAD_RAMP_STEP", 10)
    upload_ramp_cap: int = _env_int("VIDSCRIBE_UPLOAD_RAMP_CAP", 90)
    synthetic_progress_step: int = _env_int("VIDSCRIBE_SYNTHETIC_PROGRESS_STEP", 5)
    synthetic_progress_cap: int = _env_int("VIDSCRIBE_SYNTHETIC_PROGRESS_CAP", 95)
    default_language: Optional[str] = _env_opt("VIDSCRIBE_DEFAULT_LANGUAGE")

    # Timeline
    pixels_per_second: float = _env_float("VIDSCRIBE_PIXELS_PER_SECOND", 50.0)

    # Local text-skill engine
    openai_model: str = os.getenv("VIDSCRIBE_OPENAI_MODEL", "gpt-5-mini")

    # Logging
    log_level: str = os.getenv("VIDSCRIBE_LOG_LEVEL", "INFO")
    log_path: str = os.getenv("VIDSCRIBE_LOG_PATH", "")

    # Bridge API
    api_host: str = os.getenv("VIDSCRIBE_API_HOST", "127.0.0.1")
    api_port: int = _env_int("VIDSCRIBE_API_PORT", 8000)

    @property
    def api_base_url(self) -> str:
        base = self.backend_url.rstrip("/")
        prefix = self.api_prefix.strip("/")
        return f"{base}/{prefix}" if prefix else base


def load_config() -> AppConfig:
    return AppConfig()
