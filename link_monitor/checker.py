from __future__ import annotations

import logging
from typing import Callable

from link_monitor.channel import ResultChannel
from link_monitor.checks.http_check import run_http
from link_monitor.checks.results import CheckResult
from link_monitor.formatting import format_outcome, print_line

logger = logging.getLogger(__name__)

Probe = Callable[..., CheckResult]
Reporter = Callable[[str], None]


def _probe_ok(
    target: str,
    probe: Probe,
    timeout_s: float | None,
    connect_timeout_s: float | None,
) -> bool:
    try:
        res = probe(target, timeout_s=timeout_s, connect_timeout_s=connect_timeout_s)
    except Exception:
        logger.exception("Probe of %s raised", target)
        return False

    if res.ok:
        logger.debug("Probe of %s returned HTTP %s in %sms", target, res.status_code, res.latency_ms)
    else:
        logger.debug("Probe of %s failed after %sms: %s", target, res.latency_ms, res.error)
    return res.ok


def check_link(
    target: str,
    channel: ResultChannel,
    probe: Probe = run_http,
    report: Reporter = print_line,
    timeout_s: float | None = None,
    connect_timeout_s: float | None = None,
) -> None:
    """
    Probe one Target once, report the outcome line, then hand the Target
    back on the channel. The hand-off happens exactly once on every path,
    so a Target never drops out of rotation.
    """
    try:
        ok = _probe_ok(target, probe, timeout_s, connect_timeout_s)
        report(format_outcome(target, ok))
    except Exception:
        logger.exception("Reporting outcome for %s failed", target)
    finally:
        channel.send(target)
