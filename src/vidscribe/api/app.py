from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from vidscribe import __version__
from vidscribe.api.middlewares.access_log import AccessLogMiddleware
from vidscribe.api.middlewares.error_handler import install_error_handlers
from vidscribe.api.middlewares.request_context import RequestContextMiddleware
from vidscribe.api.routes import api_router
from vidscribe.api.session import EditorSession
from vidscribe.config import load_config
from vidscribe.utils.logger import configure_logging, get_logger, level_from_name

logger = get_logger("vidscribe")


def create_app(session: Optional[EditorSession] = None) -> FastAPI:
    """
    Presentation bridge over one EditorSession.
    Without an injected session, one is built from the environment at startup.
    """
    cfg = load_config()

    app = FastAPI(
        title="vidscribe",
        version=__version__,
    )
    app.state.session = session

    # Added last = outermost: request id is set before the access log runs.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestContextMiddleware, header_name="X-Request-Id")

    install_error_handlers(app)

    app.include_router(api_router)

    @app.on_event("startup")
    async def _startup() -> None:
        configure_logging(
            logger_name="vidscribe",
            console_level=level_from_name(cfg.log_level),
            log_path=(cfg.log_path or None),
        )
        if app.state.session is None:
            app.state.session = EditorSession(cfg)
        logger.info("API_STARTUP backend=%s", app.state.session.cfg.api_base_url)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        if app.state.session is not None:
            await app.state.session.close()
        logger.info("API_SHUTDOWN")

    return app


app = create_app()
