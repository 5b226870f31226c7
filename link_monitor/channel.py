from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import Iterator


class ChannelClosed(Exception):
    pass


@dataclass
class _Handoff:
    target: str
    taken: threading.Event = field(default_factory=threading.Event)
    delivered: bool = False


_CLOSED = object()


class ResultChannel:
    """
    Hand-off of Targets from any number of sender threads to one receiver.

    send() returns only once the receiver has taken the Target, or once the
    channel is closed. Senders never wait on each other: every waiting
    sender has its own slot, so there is no capacity limit.
    """

    def __init__(self) -> None:
        self._items: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def send(self, target: str) -> bool:
        """Returns True if the receiver took the Target, False if closed first."""
        handoff = _Handoff(target=target)
        with self._lock:
            if self._closed:
                return False
            self._items.put(handoff)
        handoff.taken.wait()
        return handoff.delivered

    def receive(self) -> str:
        item = self._items.get()
        if item is _CLOSED:
            # Leave the marker in place so later receives fail the same way.
            self._items.put(_CLOSED)
            raise ChannelClosed("result channel is closed")
        item.delivered = True
        item.taken.set()
        return item.target

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            while True:
                try:
                    pending = self._items.get_nowait()
                except queue.Empty:
                    break
                pending.taken.set()
            self._items.put(_CLOSED)

    def __iter__(self) -> Iterator[str]:
        while True:
            try:
                yield self.receive()
            except ChannelClosed:
                return
