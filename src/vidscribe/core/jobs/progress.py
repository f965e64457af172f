from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProgressCounter:
    """
    Monotonically non-decreasing percentage in [0, 100].

    advance(): synthetic step, bounded by `cap` (never claims completion early)
    observe(): adopt a reported value, bounded by `cap`
    complete(): jump to 100 (only on an acknowledged terminal success)
    """

    value: int = 0

    def advance(self, step: int, *, cap: int) -> int:
        self.value = max(self.value, min(self.value + step, cap))
        return self.value

    def observe(self, reported: float, *, cap: int) -> int:
        self.value = max(self.value, min(int(round(reported)), cap))
        return self.value

    def complete(self) -> int:
        self.value = 100
        return self.value
