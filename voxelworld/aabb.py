"""Vectors, axis-aligned bounding boxes and their collisions with the world."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from itertools import product
from typing import Iterator, Protocol

from .world import BlockPos

SEARCH_PRECISION = 0.001
"""Precision of the binary search for the furthest free position."""
GROUND_PROBE = 0.0021
"""How far below a box the ground is looked for."""


class BlockContainer(Protocol):
    """Anything that can tell whether a block of the world is solid."""

    def is_block_full(self, pos: BlockPos) -> bool:
        """Return True if the block at ``pos`` is solid."""


@dataclass(frozen=True)
class Vec3:
    """An immutable three-dimensional vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> Vec3:
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vec3:
        return Vec3(self.x / divisor, self.y / divisor, self.z / divisor)

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec3:
        """The unit vector of the same direction; the zero vector has none."""
        length = self.norm()
        if length == 0.0:
            raise ValueError("cannot normalize the zero vector")
        return self / length

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z


_AXES = ("x", "y", "z")


@dataclass
class AABB:
    """An axis-aligned box with its lowest corner at ``pos``."""

    pos: Vec3
    size_x: float
    size_y: float
    size_z: float

    @classmethod
    def cube(cls, pos: Vec3, size: float) -> AABB:
        return cls(pos, size, size, size)

    def _size(self, axis: str) -> float:
        return getattr(self, f"size_{axis}")

    def intersects(self, other: AABB) -> bool:
        """True if the interiors of the two boxes overlap."""
        return all(
            getattr(other.pos, axis) < getattr(self.pos, axis) + self._size(axis)
            and getattr(other.pos, axis) + other._size(axis) > getattr(self.pos, axis)
            for axis in _AXES
        )

    def contains_point(self, point: tuple[float, float, float]) -> bool:
        """True if ``point`` lies in the box, boundary included."""
        return all(
            getattr(self.pos, axis) <= coord <= getattr(self.pos, axis) + self._size(axis)
            for axis, coord in zip(_AXES, point)
        )

    def _covered_blocks(self) -> Iterator[BlockPos]:
        ranges = (
            range(
                math.floor(getattr(self.pos, axis)),
                math.ceil(getattr(self.pos, axis) + self._size(axis)),
            )
            for axis in _AXES
        )
        for i, j, k in product(*ranges):
            yield BlockPos(i, j, k)

    def intersect_world(self, world: BlockContainer) -> bool:
        """True if the box overlaps any full block."""
        return any(world.is_block_full(pos) for pos in self._covered_blocks())

    def _set_axis(self, axis: str, value: float) -> None:
        self.pos = replace(self.pos, **{axis: value})

    def _slide(self, world: BlockContainer, axis: str, amount: float) -> None:
        steps = math.ceil(abs(amount) / self._size(axis))
        if steps == 0:
            return
        step = amount / steps
        sign = math.copysign(1.0, step)
        for _ in range(steps):
            base = getattr(self.pos, axis)
            self._set_axis(axis, base + step)
            if not self.intersect_world(world):
                continue
            low, high = 0.0, abs(step)
            while high - low > SEARCH_PRECISION:
                middle = (low + high) / 2.0
                self._set_axis(axis, base + middle * sign)
                if self.intersect_world(world):
                    high = middle
                else:
                    low = middle
            self._set_axis(axis, base + sign * low / 2.0)
            break

    def move_check_collision(self, world: BlockContainer, delta: Vec3) -> Vec3:
        """Move by ``delta`` axis by axis, stopping before full blocks.

        A box already inside blocks moves freely. Returns the actual movement.
        """
        if self.intersect_world(world):
            self.pos = self.pos + delta
            return delta
        moved: dict[str, float] = {}
        for axis in _AXES:
            start = getattr(self.pos, axis)
            self._slide(world, axis, getattr(delta, axis))
            moved[axis] = getattr(self.pos, axis) - start
        return Vec3(**moved)

    def is_on_the_ground(self, world: BlockContainer) -> bool:
        """True if the box is free but would touch a block slightly lower."""
        lowered = replace(self, pos=replace(self.pos, y=self.pos.y - GROUND_PROBE))
        return not self.intersect_world(world) and lowered.intersect_world(world)