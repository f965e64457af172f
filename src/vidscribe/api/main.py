from __future__ import annotations

from vidscribe.api.app import app  # noqa: F401
from vidscribe.config import load_config


def run(host: str | None = None, port: int | None = None) -> None:
    """
    Programmatic runner:
    python -m vidscribe.api.main
    """
    import uvicorn  # local import to keep import graph light

    cfg = load_config()
    uvicorn.run(
        "vidscribe.api.main:app",
        host=host or cfg.api_host,
        port=port or cfg.api_port,
        reload=False,
    )


if __name__ == "__main__":
    run()
