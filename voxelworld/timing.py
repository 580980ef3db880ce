"""Rolling averages of operation durations over the last ten seconds."""

from __future__ import annotations

import math
import time
from collections import deque
from datetime import timedelta
from typing import Callable, Union

WINDOW_SECONDS = 10.0
_MICROSECOND = timedelta(microseconds=1)

Duration = Union[float, timedelta]
Clock = Callable[[], float]


def _micros(duration: Duration) -> int:
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    return duration // _MICROSECOND


class AverageTimeCounter:
    """Average duration and rate of an operation over a ten second window."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._times: deque[tuple[float, int]] = deque()
        self._total_micros = 0

    def _remove_old(self) -> None:
        now = self._clock()
        while self._times and now - self._times[0][0] >= WINDOW_SECONDS:
            _, micros = self._times.popleft()
            self._total_micros -= micros

    def add_time(self, duration: Duration) -> None:
        """Record one operation that took ``duration`` (seconds or timedelta)."""
        micros = _micros(duration)
        self._total_micros += micros
        self._times.append((self._clock(), micros))
        self._remove_old()

    def average_time_micros(self) -> int:
        self._remove_old()
        if not self._times:
            return 0
        return self._total_micros // len(self._times)

    def average_iter_per_sec(self) -> float:
        self._remove_old()
        return len(self._times) / WINDOW_SECONDS


class BreakdownCounter:
    """Measures which parts of a repeated operation take the time."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._times: deque[tuple[float, list[int]]] = deque()
        self._total_micros: list[int] = []
        self._part_names: list[str] = []
        self._last_time = clock()

    def _remove_old(self) -> None:
        now = self._clock()
        while self._times and now - self._times[0][0] >= WINDOW_SECONDS:
            _, durations = self._times.popleft()
            for index, micros in enumerate(durations):
                self._total_micros[index] -= micros

    def start_frame(self) -> None:
        """Start a new frame."""
        self._remove_old()
        self._part_names.clear()
        self._last_time = self._clock()

    def record_part(self, part_name: object) -> None:
        """Record the time since the previous part under ``part_name``."""
        index = len(self._part_names)
        self._part_names.append(str(part_name))
        self._remove_old()

        now = self._clock()
        micros = _micros(now - self._last_time)
        self._last_time = now

        if index == 0:
            self._times.append((now, []))
        if not self._times:
            raise RuntimeError("record_part called without a current frame")
        self._times[-1][1].append(micros)

        if index < len(self._total_micros):
            self._total_micros[index] += micros
        else:
            self._total_micros.append(micros)

    def extract_part_averages(self) -> list[tuple[str, float]]:
        """Return each recorded part with its share of the total time."""
        total = float(sum(self._total_micros))
        names, self._part_names = self._part_names, []
        return [
            (name, micros / total if total else math.nan)
            for name, micros in zip(names, self._total_micros)
        ]