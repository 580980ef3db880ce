"""Debug information that any thread can post to the current collector."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class WorkerPerf:
    """Performance figures of a background worker."""

    name: str
    micros_per_iter: float
    iter_per_sec: float
    efficiency: float
    pending: int


@dataclass(frozen=True)
class PerfBreakdown:
    """Share of time spent in each named part of an operation."""

    name: str
    breakdown: list[tuple[str, float]]


DebugPart = Union[str, WorkerPerf, PerfBreakdown]


@dataclass(frozen=True)
class _DebugUnit:
    section: str
    id: str
    part: DebugPart


@dataclass
class DebugSection:
    """One section of debug info: its creation order, display flag and parts by id."""

    order: int
    shown: bool = False
    parts: dict[str, DebugPart] = field(default_factory=dict)


class _CurrentSink:
    """Holds the queue of the current collector, if any."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queue: queue.SimpleQueue[_DebugUnit] | None = None

    def replace(self, new_queue: queue.SimpleQueue[_DebugUnit]) -> None:
        with self._lock:
            self._queue = new_queue

    def send(self, unit: _DebugUnit) -> None:
        with self._lock:
            target = self._queue
        if target is not None:
            target.put(unit)


_sink = _CurrentSink()


class DebugInfo:
    """Collects debug info sent from any thread. Only the newest one receives."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[_DebugUnit] = queue.SimpleQueue()
        self._sections: dict[str, DebugSection] = {}
        _sink.replace(self._queue)

    @classmethod
    def new_current(cls) -> DebugInfo:
        """Create a collector and make it the current one."""
        return cls()

    def get_debug_info(self) -> dict[str, DebugSection]:
        """Take in pending messages and return the sections sorted by name."""
        touched: set[str] = set()
        while True:
            try:
                unit = self._queue.get_nowait()
            except queue.Empty:
                break
            section = self._sections.get(unit.section)
            if section is None:
                section = DebugSection(order=len(self._sections))
                self._sections[unit.section] = section
            section.parts[unit.id] = unit.part
            touched.add(unit.section)
        for name in touched:
            section = self._sections[name]
            section.parts = dict(sorted(section.parts.items()))
        return dict(sorted(self._sections.items()))


def send_debug_info(section: object, id: object, message: object) -> None:
    """Send a text message to the current collector, if there is one."""
    _sink.send(_DebugUnit(str(section), str(id), str(message)))


def send_worker_perf(
    section: object,
    id: object,
    name: object,
    micros_per_iter: float,
    iter_per_sec: float,
    pending: int,
) -> None:
    """Send worker performance figures to the current collector, if there is one."""
    perf = WorkerPerf(
        name=str(name),
        micros_per_iter=micros_per_iter,
        iter_per_sec=iter_per_sec,
        efficiency=micros_per_iter / 1_000_000.0 * iter_per_sec,
        pending=pending,
    )
    _sink.send(_DebugUnit(str(section), str(id), perf))


def send_perf_breakdown(
    section: object, id: object, name: object, breakdown: list[tuple[str, float]]
) -> None:
    """Send a performance breakdown to the current collector, if there is one."""
    part = PerfBreakdown(str(name), list(breakdown))
    _sink.send(_DebugUnit(str(section), str(id), part))