"""Run a computation on a background thread, fed through bounded queues."""

from __future__ import annotations

import queue
import threading
import time
from typing import Any, Callable, Generic, TypeVar

from .debug import send_worker_perf
from .timing import AverageTimeCounter

I = TypeVar("I")
O = TypeVar("O")

_POLL_SECONDS = 0.05


class QueueFull(Exception):
    """Raised by ``Worker.enqueue`` when the input queue is full; holds the item."""

    def __init__(self, item: Any) -> None:
        super().__init__("worker queue is full")
        self.item = item


class Worker(Generic[I, O]):
    """Processes inputs in order on a separate thread.

    ``compute`` turns one input into one output; ``channel_size`` bounds both
    the input and the output queues. ``name`` is used for performance reports.
    """

    def __init__(self, compute: Callable[[I], O], channel_size: int, name: str) -> None:
        if channel_size < 1:
            raise ValueError("channel_size must be at least 1")
        self.name = name
        self._compute = compute
        self._inputs: queue.Queue[I] = queue.Queue(maxsize=channel_size)
        self._outputs: queue.Queue[O] = queue.Queue(maxsize=channel_size)
        self._closed = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"worker-{name}", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        timing = AverageTimeCounter()
        try:
            while not self._closed.is_set():
                try:
                    item = self._inputs.get(timeout=_POLL_SECONDS)
                except queue.Empty:
                    continue
                start = time.perf_counter()
                output = self._compute(item)
                timing.add_time(time.perf_counter() - start)
                send_worker_perf(
                    "Workers",
                    self.name,
                    self.name,
                    float(timing.average_time_micros()),
                    timing.average_iter_per_sec(),
                    0,
                )
                while not self._closed.is_set():
                    try:
                        self._outputs.put(output, timeout=_POLL_SECONDS)
                        break
                    except queue.Full:
                        continue
        finally:
            self._closed.set()

    def enqueue(self, item: I) -> None:
        """Queue ``item`` without blocking; raise QueueFull if there is no room."""
        if self._closed.is_set():
            raise RuntimeError(f"worker {self.name!r} is closed")
        try:
            self._inputs.put_nowait(item)
        except queue.Full:
            raise QueueFull(item) from None

    def get_result(self) -> O | None:
        """Return the next output without blocking, or None if none is ready."""
        try:
            return self._outputs.get_nowait()
        except queue.Empty:
            return None

    def close(self) -> None:
        """Stop the worker thread once its current computation ends."""
        self._closed.set()

    def __enter__(self) -> Worker[I, O]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()