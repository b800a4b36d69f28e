"""Diagnostic fixture: GET routes that each trigger one OS-level behaviour and return the result as the body.

Shell routes interpolate caller input unsanitised; these servers exist to be probed, not hardened.
Handlers are sync so FastAPI runs them in its threadpool; /delay blocks only its own request.
"""

import logging
import signal
import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from probe_fixtures.config.settings import get_diagnostic_config
from probe_fixtures.core.bindings import BINDING_ROOT_ENV, binding_root, read_service_bindings
from probe_fixtures.core.context import ServerContext
from probe_fixtures.core.logging_utils import SPEW_LOGGER, log_request, new_request_id

logger = logging.getLogger(__name__)
spew_logger = logging.getLogger(SPEW_LOGGER)

SPEW_LINE = "1" * 1024


def parse_signal(name: str) -> signal.Signals:
    """TERM, SIGTERM, term or 15 -> signal.SIGTERM. Unknown names raise ValueError."""
    if name.isdigit():
        return signal.Signals(int(name))
    key = name.upper()
    if not key.startswith("SIG"):
        key = "SIG" + key
    try:
        return signal.Signals[key]
    except KeyError:
        raise ValueError(f"unknown signal: {name}") from None


def create_app(context: ServerContext) -> FastAPI:
    """Build the diagnostic app around one ServerContext."""
    app = FastAPI(title="Diagnostic fixture", description="Diagnostic routes for platform smoke tests")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = new_request_id()
        start = time.monotonic()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        finally:
            log_request(request.method, request.url.path, status_code, (time.monotonic() - start) * 1000, request_id)

    @app.get("/", response_class=PlainTextResponse)
    def get_root() -> str:
        return f"Hi, I'm Dorifi! Instance {context.instance_id}"

    @app.get("/id", response_class=PlainTextResponse)
    def get_id() -> str:
        return context.instance_id

    @app.get("/health")
    def get_health() -> PlainTextResponse:
        """500 for the first health_failures calls, then 200. Models readiness-probe flakiness."""
        healthy, count = context.record_health_check()
        if not healthy:
            return PlainTextResponse(f"Current count: {count}", status_code=500)
        return PlainTextResponse("I'm alive")

    @app.get("/ping/{address}", response_class=PlainTextResponse)
    def get_ping(address: str) -> str:
        return context.runner.run(f"ping -c 4 {address}")

    @app.get("/lsb_release", response_class=PlainTextResponse)
    def get_lsb_release() -> str:
        return context.runner.run("lsb_release --all")

    @app.get("/find/{filename}", response_class=PlainTextResponse)
    def get_find(filename: str) -> str:
        return context.runner.run(f"find / -name {filename}")

    @app.get("/dpkg/{package}", response_class=PlainTextResponse)
    def get_dpkg(package: str) -> str:
        return context.runner.run(f"dpkg -l {package}")

    @app.get("/myip", response_class=PlainTextResponse)
    def get_myip() -> str:
        return context.runner.run("ip route get 1 | awk '{for (i = 1; i < NF; i++) if ($i == \"src\") {print $(i + 1); exit}}'")

    @app.get("/echo/{destination}/{output}", response_class=PlainTextResponse)
    def get_echo(destination: str, output: str) -> str:
        """Echo output to this process's stdout, or stderr when destination is "stderr"."""
        redirect = " 1>&2" if destination == "stderr" else ""
        context.runner.spawn(f"echo '{output}'{redirect}")
        return f"Printed '{output}' to {destination}!"

    @app.get("/sigterm", response_class=PlainTextResponse)
    def get_signals() -> str:
        names = sorted(s.name for s in signal.Signals)
        return "Available sigterms: " + ", ".join(names)

    @app.get("/sigterm/{signal_name}", response_class=PlainTextResponse)
    def get_send_signal(signal_name: str) -> str:
        """Send signal_name to this process. Unknown names raise (default 500)."""
        sig = parse_signal(signal_name)
        logger.warning("Sending %s to own process", sig.name)
        context.send_signal(sig)
        return f"Killed process with signal {sig.name}"

    @app.get("/delay/{seconds}", response_class=PlainTextResponse)
    def get_delay(seconds: float) -> str:
        time.sleep(seconds)
        return f"YAWN! Slept so well for {seconds:g} seconds"

    @app.get("/logspew/{kbytes}", response_class=PlainTextResponse)
    def get_logspew(kbytes: int) -> str:
        for _ in range(kbytes):
            spew_logger.info(SPEW_LINE)
        return f"Just wrote {kbytes} kbytes to the log"

    @app.get("/largetext/{kbytes}", response_class=PlainTextResponse)
    def get_largetext(kbytes: int) -> str:
        """min(kbytes, largetext_max_kbytes) KiB of text."""
        return "1" * context.largetext_bytes(kbytes)

    @app.get("/env", response_class=PlainTextResponse)
    def get_env() -> str:
        return "".join(f"{k}={v}\n" for k, v in sorted(context.environ.items()))

    @app.get("/env.json")
    def get_env_json() -> JSONResponse:
        return JSONResponse(content=dict(context.environ))

    @app.get("/env/{name}", response_class=PlainTextResponse)
    def get_env_var(name: str) -> str:
        return context.environ.get(name, "")

    @app.get("/servicebindingroot", response_class=PlainTextResponse)
    def get_service_binding_root() -> str:
        return binding_root(context.environ) or f"${BINDING_ROOT_ENV} is empty"

    @app.get("/servicebindings")
    def get_service_bindings() -> JSONResponse:
        """Bindings mounted under $SERVICE_BINDING_ROOT as {binding: {key: value}}."""
        return JSONResponse(content=read_service_bindings(binding_root(context.environ)))

    @app.get("/uptime")
    def get_uptime() -> Dict[str, Any]:
        return {
            "uptime_seconds": context.uptime_seconds(),
            "started_at": context.started_at.isoformat(),
        }

    return app


def run_server(config: Optional[dict] = None) -> None:
    """Start the diagnostic server (single uvicorn worker; PORT env wins over config)."""
    import uvicorn

    diag_cfg = get_diagnostic_config(config)
    context = ServerContext.from_config(diag_cfg)
    app = create_app(context)
    logger.info(
        "Diagnostic server on %s:%s (instance_id=%s, health_failures=%s)",
        diag_cfg["host"],
        diag_cfg["port"],
        context.instance_id,
        context.health_failures,
    )
    uvicorn.run(app, host=diag_cfg["host"], port=diag_cfg["port"], log_level="info")
