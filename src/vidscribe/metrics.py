from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Tuple

Labels = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class Series:
    name: str
    labels: Labels = ()

    @classmethod
    def of(cls, name: str, labels: Dict[str, str] | None = None) -> "Series":
        return cls(name=name, labels=tuple(sorted((labels or {}).items())))

    def render(self) -> str:
        if not self.labels:
            return self.name
        inner = ",".join(f'{k}="{v}"' for k, v in self.labels)
        return f"{self.name}{{{inner}}}"


class Metrics:
    """
    Process-local registry of counters and gauges, exposed in the Prometheus
    text format (with # TYPE lines, no HELP).

    Sync route handlers run on the threadpool, hence the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: Counter[Series] = Counter()
        self._gauges: Dict[Series, float] = {}

    def inc(self, name: str, *, labels: Dict[str, str] | None = None, value: int = 1) -> None:
        if value < 0:
            raise ValueError("counters only go up")
        with self._lock:
            self._counters[Series.of(name, labels)] += int(value)

    def set_gauge(self, name: str, value: float, *, labels: Dict[str, str] | None = None) -> None:
        with self._lock:
            self._gauges[Series.of(name, labels)] = float(value)

    def get(self, name: str, *, labels: Dict[str, str] | None = None) -> float:
        s = Series.of(name, labels)
        with self._lock:
            if s in self._gauges:
                return self._gauges[s]
            return self._counters.get(s, 0)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()

    def to_prometheus_text(self) -> str:
        with self._lock:
            families: Dict[str, Tuple[str, List[Tuple[Series, float]]]] = {}
            for s, v in self._counters.items():
                families.setdefault(s.name, ("counter", []))[1].append((s, v))
            for s, v in self._gauges.items():
                families.setdefault(s.name, ("gauge", []))[1].append((s, v))

        lines: List[str] = []
        for name in sorted(families):
            kind, series = families[name]
            lines.append(f"# TYPE {name} {kind}")
            for s, v in sorted(series, key=lambda item: item[0].labels):
                value = int(v) if float(v).is_integer() else v
                lines.append(f"{s.render()} {value}")
        return "\n".join(lines) + ("\n" if lines else "")


_registry = Metrics()


def metrics() -> Metrics:
    return _registry


def inc_http_request(method: str, path: str, status: int) -> None:
    metrics().inc(
        "vidscribe_http_requests_total",
        labels={"method": method, "path": path, "status": str(status)},
    )


def inc_upload(outcome: str) -> None:
    metrics().inc("vidscribe_uploads_total", labels={"outcome": outcome})


def inc_job_created() -> None:
    metrics().inc("vidscribe_jobs_created_total")


def inc_poll() -> None:
    metrics().inc("vidscribe_polls_total")


def inc_poll_transient_failure() -> None:
    metrics().inc("vidscribe_poll_transient_failures_total")


def inc_job_finished(state: str) -> None:
    metrics().inc("vidscribe_jobs_finished_total", labels={"state": state})


def inc_skill_run(skill: str, outcome: str) -> None:
    metrics().inc("vidscribe_skill_runs_total", labels={"skill": skill, "outcome": outcome})


def set_orchestrator_gauges(*, active_tasks: int, live_previews: int, pipelines: int) -> None:
    m = metrics()
    m.set_gauge("vidscribe_active_tasks", active_tasks)
    m.set_gauge("vidscribe_live_previews", live_previews)
    m.set_gauge("vidscribe_pipelines", pipelines)
