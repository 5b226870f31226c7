from __future__ import annotations

import time
import requests

from link_monitor.checks.results import CheckResult


def _timeout(
    timeout_s: float | None, connect_timeout_s: float | None
) -> float | tuple[float | None, float | None] | None:
    if timeout_s is None and connect_timeout_s is None:
        return None
    connect_timeout = timeout_s if connect_timeout_s is None else connect_timeout_s
    return (connect_timeout, timeout_s)


def run_http(
    url: str,
    timeout_s: float | None = None,
    connect_timeout_s: float | None = None,
) -> CheckResult:
    # Any completed response counts as reachable, 4xx/5xx included.
    start = time.perf_counter()
    try:
        r = requests.get(url, timeout=_timeout(timeout_s, connect_timeout_s))
        latency_ms = int((time.perf_counter() - start) * 1000)
        return CheckResult(ok=True, latency_ms=latency_ms, status_code=r.status_code)
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        return CheckResult(ok=False, latency_ms=latency_ms, error=str(e))
