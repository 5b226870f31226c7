import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request

from link_monitor.api_schemas import ConfigResponse, HealthResponse
from link_monitor.config import Settings, settings
from link_monitor.coordinator import Coordinator
from link_monitor.registry import (
    effective_defaults,
    load_registry_if_present,
    resolve_targets,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
SHUTDOWN_JOIN_TIMEOUT_S = 5.0


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)


def build_coordinator(cfg: Settings = settings) -> Coordinator:
    reg = load_registry_if_present(cfg)
    d = effective_defaults(cfg, reg.defaults)
    return Coordinator(
        resolve_targets(cfg, reg),
        delay_s=d.delay_s,
        timeout_s=d.timeout_s,
        connect_timeout_s=d.connect_timeout_s,
        max_in_flight=cfg.MAX_IN_FLIGHT,
    )


@asynccontextmanager
async def lifespan(application: FastAPI):
    configure_logging()
    # A fresh coordinator per startup: a stopped one cannot be restarted.
    coordinator = build_coordinator()
    application.state.coordinator = coordinator
    t = threading.Thread(
        target=coordinator.run_forever,
        name="coordinator",
        daemon=True,
    )
    t.start()
    yield
    coordinator.stop()
    t.join(timeout=SHUTDOWN_JOIN_TIMEOUT_S)
    if t.is_alive():
        logger.warning("Coordinator thread still running after %ss", SHUTDOWN_JOIN_TIMEOUT_S)


app = FastAPI(
    title="Link Monitor",
    version="1.0.0",
    description=(
        "Concurrent liveness checker that re-checks every configured URL "
        "after a fixed delay and prints one line per completed check."
    ),
    lifespan=lifespan,
)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["system"],
    summary="Health Check",
    description="Liveness endpoint used by probes and orchestration.",
)
def health():
    return {"status": "ok"}


@app.get(
    "/config",
    response_model=ConfigResponse,
    tags=["system"],
    summary="Current Effective Config",
    description="Targets and timing the checker was started with.",
)
def config(request: Request):
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        raise HTTPException(status_code=503, detail="Checker is not running")
    return {
        "targets": list(coordinator.targets),
        "delay_s": coordinator.delay_s,
        "timeout_s": coordinator.timeout_s,
        "connect_timeout_s": coordinator.connect_timeout_s,
        "max_in_flight": coordinator.max_in_flight,
    }


def run() -> None:
    """Run the checker on the main thread until interrupted."""
    configure_logging()
    c = build_coordinator()
    try:
        c.run_forever()
    except KeyboardInterrupt:
        c.stop()


if __name__ == "__main__":
    run()
