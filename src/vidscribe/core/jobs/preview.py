from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from vidscribe.utils.logger import get_logger

logger = get_logger("vidscribe.preview")


@dataclass(frozen=True)
class PreviewRef:
    token: str
    url: str
    path: Path


class PreviewRegistry:
    """
    Ephemeral local-preview references handed to the player before the upload
    round-trip finishes. Every created reference must be released exactly once;
    `live` reports what is still held.
    """

    def __init__(self) -> None:
        self._live: Dict[str, PreviewRef] = {}

    def create(self, path: str | Path) -> PreviewRef:
        p = Path(path).expanduser().resolve(strict=False)
        ref = PreviewRef(token=uuid.uuid4().hex, url=p.as_uri(), path=p)
        self._live[ref.token] = ref
        logger.debug("PREVIEW_CREATED token=%s url=%s", ref.token, ref.url)
        return ref

    def release(self, ref: PreviewRef) -> bool:
        # Idempotent
        released = self._live.pop(ref.token, None) is not None
        if released:
            logger.debug("PREVIEW_RELEASED token=%s", ref.token)
        return released

    @property
    def live(self) -> List[PreviewRef]:
        return list(self._live.values())
