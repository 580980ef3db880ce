"""Merging of several ordered sequences into one."""

from __future__ import annotations

from typing import Iterable, TypeVar

T = TypeVar("T")

_EXHAUSTED = object()


def merge_arrays(inputs: Iterable[Iterable[T]]) -> list[T]:
    """Merge sequences sorted in descending order into one descending list.

    At every step the greatest of the current heads is taken; on ties the
    earliest sequence wins.
    """
    sources = [iter(sequence) for sequence in inputs]
    heads = [next(source, _EXHAUSTED) for source in sources]
    merged: list[T] = []
    while True:
        best = None
        for index, head in enumerate(heads):
            if head is _EXHAUSTED:
                continue
            if best is None or heads[best] < head:
                best = index
        if best is None:
            return merged
        merged.append(heads[best])
        heads[best] = next(sources[best], _EXHAUSTED)