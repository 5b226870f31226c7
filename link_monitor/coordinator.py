from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from link_monitor.channel import ResultChannel
from link_monitor.checker import Probe, Reporter, check_link
from link_monitor.checks.http_check import run_http
from link_monitor.checks.results import CheckResult
from link_monitor.formatting import print_line

logger = logging.getLogger(__name__)


class Coordinator:
    """
    Keeps every Target perpetually checked.

    One thread per Target is launched at start. Each finished check hands
    its Target back on the result channel; the receive loop then launches a
    fresh thread that waits ``delay_s`` and checks that Target again. A
    Target is only relaunched after its previous result was received, so it
    never has two probes (or a probe and a delay) pending at once.
    """

    def __init__(
        self,
        targets: Iterable[str],
        delay_s: float = 5.0,
        *,
        probe: Probe = run_http,
        report: Reporter = print_line,
        timeout_s: float | None = None,
        connect_timeout_s: float | None = None,
        max_in_flight: int = 0,
        channel: ResultChannel | None = None,
    ) -> None:
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        if max_in_flight < 0:
            raise ValueError(f"max_in_flight must be >= 0, got {max_in_flight}")

        self.targets: tuple[str, ...] = tuple(targets)
        self.delay_s = delay_s
        self.timeout_s = timeout_s
        self.connect_timeout_s = connect_timeout_s
        self.max_in_flight = max_in_flight
        self.channel = channel if channel is not None else ResultChannel()

        self._probe = probe
        self._report = report
        self._stop = threading.Event()
        self._started = False
        # 0 keeps probes unbounded.
        self._slots = (
            threading.BoundedSemaphore(max_in_flight) if max_in_flight > 0 else None
        )

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def _spawn(self, fn: Callable[[str], None], target: str) -> threading.Thread:
        t = threading.Thread(target=fn, args=(target,), name=f"check {target}", daemon=True)
        t.start()
        return t

    def _bounded_probe(self, url: str, **kwargs) -> CheckResult:
        if self._slots is None:
            return self._probe(url, **kwargs)
        with self._slots:
            return self._probe(url, **kwargs)

    def _check(self, target: str) -> None:
        check_link(
            target,
            self.channel,
            probe=self._bounded_probe,
            report=self._report,
            timeout_s=self.timeout_s,
            connect_timeout_s=self.connect_timeout_s,
        )

    def _recheck(self, target: str) -> None:
        # wait() returns early and True once stop() is called.
        if self._stop.wait(self.delay_s):
            return
        self._check(target)

    def start(self) -> None:
        if self._started:
            raise RuntimeError("coordinator already started")
        self._started = True

        logger.info(
            "Checking %d target(s), re-check delay %ss", len(self.targets), self.delay_s
        )
        for target in self.targets:
            self._spawn(self._check, target)

    def run_forever(self) -> None:
        if not self._started:
            self.start()

        for target in self.channel:
            if self.stopped:
                break
            self._spawn(self._recheck, target)

        logger.info("Result channel closed, coordinator exiting")

    def stop(self) -> None:
        if self._stop.is_set():
            return
        logger.info("Stopping coordinator")
        self._stop.set()
        self.channel.close()
