"""
Broadcast of entry-list snapshots.

Usage:
    notifier = ChangeNotifier()
    with notifier.subscribe() as sub:
        ...
        entries = sub.get(timeout=1.0)   # blocks until the next snapshot
        latest = sub.latest()            # newest pending snapshot or None

Publishing never waits on a subscriber: each subscription buffers up to
``maxsize`` snapshots and drops the oldest one when a new snapshot arrives
on a full buffer.
"""
from __future__ import annotations

import itertools
import logging
import queue
import threading
from typing import Iterator, List, Optional, Sequence

from .models import Entry

logger = logging.getLogger(__name__)

DEFAULT_BUFFER = 16

Snapshot = List[Entry]


class Subscription:
    """One subscriber's buffered view of the published snapshots."""

    _ids = itertools.count(1)

    def __init__(self, notifier: "ChangeNotifier", maxsize: int):
        self.id = next(self._ids)
        self._notifier = notifier
        self._queue: "queue.Queue[Snapshot]" = queue.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _offer(self, snapshot: Snapshot) -> None:
        while True:
            try:
                self._queue.put_nowait(snapshot)
                return
            except queue.Full:
                try:
                    self._queue.get_nowait()
                except queue.Empty:
                    continue
                self.dropped += 1
                logger.warning("subscriber %d is lagging, dropped oldest snapshot (%d so far)", self.id, self.dropped)

    def get(self, timeout: Optional[float] = None) -> Snapshot:
        """Next pending snapshot. Raises ``queue.Empty`` when none arrives within ``timeout``."""
        return self._queue.get(timeout=timeout)

    def latest(self) -> Optional[Snapshot]:
        """Drain the buffer without blocking and return the newest snapshot, if any."""
        last = None
        while True:
            try:
                last = self._queue.get_nowait()
            except queue.Empty:
                return last

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._notifier.unsubscribe(self)

    def __iter__(self) -> Iterator[Snapshot]:
        # Ends once the subscription is closed and the buffer is drained.
        while not (self._closed and self._queue.empty()):
            try:
                yield self._queue.get(timeout=0.1)
            except queue.Empty:
                continue

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class ChangeNotifier:
    def __init__(self, buffer_size: int = DEFAULT_BUFFER):
        self.buffer_size = buffer_size
        self._subs: list[Subscription] = []
        self._lock = threading.Lock()
        self.published = 0

    def subscribe(self, maxsize: Optional[int] = None) -> Subscription:
        sub = Subscription(self, maxsize or self.buffer_size)
        with self._lock:
            self._subs.append(sub)
        logger.debug("subscriber %d joined", sub.id)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subs:
                self._subs.remove(sub)
        logger.debug("subscriber %d left", sub.id)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subs)

    def publish(self, entries: Sequence[Entry]) -> None:
        """Fan the full snapshot out to every current subscriber."""
        with self._lock:
            subs = list(self._subs)
            self.published += 1
        for sub in subs:
            # each subscriber gets its own list so consumers cannot mutate each other's view
            sub._offer(list(entries))
