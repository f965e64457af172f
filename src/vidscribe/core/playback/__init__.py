from vidscribe.core.playback.player import CommandLogPlayer, MediaPlayer, PlayerCommand
from vidscribe.core.playback.sync import Highlight, PlaybackSync, PlayheadState, SeekOrigin

__all__ = [
    "CommandLogPlayer",
    "MediaPlayer",
    "PlayerCommand",
    "Highlight",
    "PlaybackSync",
    "PlayheadState",
    "SeekOrigin",
]
