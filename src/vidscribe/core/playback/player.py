from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional


class MediaPlayer(ABC):
    """
    Contract for the actual media element (browser video, desktop player, ...).
    Calls flow one way: core -> player. The player reports its position back
    through PlaybackSync.on_playback_tick / set_duration.
    """

    @abstractmethod
    def load(self, url: str) -> None:
        ...

    @abstractmethod
    def unload(self) -> None:
        """Drop the current source; the player shows nothing until the next load."""
        ...

    @abstractmethod
    def seek(self, t: float) -> None:
        ...

    @abstractmethod
    def play(self) -> None:
        ...

    @abstractmethod
    def pause(self) -> None:
        ...

    @abstractmethod
    def set_volume(self, volume: float) -> None:
        ...

    @abstractmethod
    def set_muted(self, muted: bool) -> None:
        ...


@dataclass(frozen=True)
class PlayerCommand:
    seq: int
    name: str
    value: Any = None

    def to_dict(self) -> dict:
        return {"seq": self.seq, "name": self.name, "value": self.value}


class CommandLogPlayer(MediaPlayer):
    """
    Player adapter that records commands for a remote UI to drain.
    Keeps the last `maxlen` commands; seq increases monotonically.
    """

    def __init__(self, maxlen: int = 256) -> None:
        self.source_url: Optional[str] = None
        self._seq = 0
        self._log: Deque[PlayerCommand] = deque(maxlen=maxlen)

    def _push(self, name: str, value: Any = None) -> None:
        self._seq += 1
        self._log.append(PlayerCommand(seq=self._seq, name=name, value=value))

    def load(self, url: str) -> None:
        self.source_url = url
        self._push("load", url)

    def unload(self) -> None:
        self.source_url = None
        self._push("unload")

    def seek(self, t: float) -> None:
        self._push("seek", t)

    def play(self) -> None:
        self._push("play")

    def pause(self) -> None:
        self._push("pause")

    def set_volume(self, volume: float) -> None:
        self._push("volume", volume)

    def set_muted(self, muted: bool) -> None:
        self._push("muted", muted)

    @property
    def last_seq(self) -> int:
        return self._seq

    def commands_since(self, seq: int = 0) -> List[PlayerCommand]:
        return [c for c in self._log if c.seq > seq]


__all__ = ["MediaPlayer", "PlayerCommand", "CommandLogPlayer"]
