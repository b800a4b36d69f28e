"""Echo fixture: any method, any path -> 200 text/plain greeting naming the bound host:port."""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from probe_fixtures.config.settings import get_echo_config

logger = logging.getLogger(__name__)


def create_echo_app(host: str, port: int, greeting: str) -> FastAPI:
    """Build the echo app. No routing, no state.

    The greeting is returned from middleware, ahead of the router, so no method ever gets a 405.
    """
    app = FastAPI(title="Echo fixture", docs_url=None, redoc_url=None, openapi_url=None)
    body = greeting.format(host=host, port=port)

    @app.middleware("http")
    async def echo(request: Request, call_next) -> PlainTextResponse:
        return PlainTextResponse(body)

    return app


def run_echo_server(config: Optional[dict] = None, echo_cfg: Optional[Dict[str, Any]] = None) -> None:
    """Start the echo server (host and port from config; PORT env wins). echo_cfg overrides the echo section."""
    import uvicorn

    cfg = echo_cfg or get_echo_config(config)
    app = create_echo_app(cfg["host"], cfg["port"], cfg["greeting"])
    logger.info("Echo server on %s:%s", cfg["host"], cfg["port"])
    uvicorn.run(app, host=cfg["host"], port=cfg["port"], log_level="info")
