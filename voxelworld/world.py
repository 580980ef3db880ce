"""Positions, chunks and light chunks, with run-length compression."""

from __future__ import annotations

import math
from array import array
from dataclasses import dataclass, field
from itertools import groupby, repeat
from typing import Iterable

CHUNK_SIZE = 32
"""Number of blocks along an axis of a chunk."""
CHUNK_VOLUME = CHUNK_SIZE**3
DEFAULT_LIGHT = 15


@dataclass(frozen=True)
class ChunkPos:
    """Position of a chunk in the world, in chunks."""

    px: int
    py: int
    pz: int

    def offset(self, dx: int, dy: int, dz: int) -> ChunkPos:
        return ChunkPos(self.px + dx, self.py + dy, self.pz + dz)

    def offset_by_pos(self, other: ChunkPos) -> ChunkPos:
        return self.offset(other.px, other.py, other.pz)

    def squared_euclidian_distance(self, other: ChunkPos) -> int:
        return (
            (self.px - other.px) ** 2
            + (self.py - other.py) ** 2
            + (self.pz - other.pz) ** 2
        )


@dataclass(frozen=True)
class BlockPos:
    """Position of a block in the world."""

    px: int
    py: int
    pz: int

    @classmethod
    def from_floats(cls, x: float, y: float, z: float) -> BlockPos:
        """The block containing the point (x, y, z)."""
        return cls(math.floor(x), math.floor(y), math.floor(z))

    def containing_chunk_pos(self) -> ChunkPos:
        return ChunkPos(
            self.px // CHUNK_SIZE, self.py // CHUNK_SIZE, self.pz // CHUNK_SIZE
        )

    def pos_in_containing_chunk(self) -> tuple[int, int, int]:
        return (self.px % CHUNK_SIZE, self.py % CHUNK_SIZE, self.pz % CHUNK_SIZE)


@dataclass(frozen=True)
class ChunkPosXZ:
    """Chunk position along the X and Z axes only."""

    px: int
    pz: int

    @classmethod
    def from_chunk_pos(cls, pos: ChunkPos) -> ChunkPosXZ:
        return cls(pos.px, pos.pz)

    def offset(self, dx: int, dz: int) -> ChunkPosXZ:
        return ChunkPosXZ(self.px + dx, self.pz + dz)

    def offset_by_pos(self, other: ChunkPosXZ) -> ChunkPosXZ:
        return self.offset(other.px, other.pz)


def _index(pos: tuple[int, int, int]) -> int:
    if len(pos) != 3 or not all(0 <= c < CHUNK_SIZE for c in pos):
        raise IndexError(f"position {pos!r} is outside the chunk")
    px, py, pz = pos
    return (px * CHUNK_SIZE + py) * CHUNK_SIZE + pz


def _rle_encode(values: Iterable[int]) -> list[tuple[int, int]]:
    return [(sum(1 for _ in run), value) for value, run in groupby(values)]


def _rle_decode(runs: Iterable[tuple[int, int]]) -> list[int]:
    values: list[int] = []
    for count, value in runs:
        if count < 0:
            raise ValueError(f"negative run length {count}")
        values.extend(repeat(value, count))
        if len(values) > CHUNK_VOLUME:
            raise ValueError("runs cover more than one chunk")
    values.extend(repeat(0, CHUNK_VOLUME - len(values)))
    return values


@dataclass
class Chunk:
    """A cube of CHUNK_SIZE³ block ids, all zero when created."""

    pos: ChunkPos
    data: array = field(default_factory=lambda: array("H", [0]) * CHUNK_VOLUME)

    def __post_init__(self) -> None:
        if not isinstance(self.data, array) or self.data.typecode != "H":
            self.data = array("H", self.data)
        if len(self.data) != CHUNK_VOLUME:
            raise ValueError(f"chunk data must hold {CHUNK_VOLUME} blocks")

    def get_block_at(self, pos: tuple[int, int, int]) -> int:
        return self.data[_index(pos)]

    def set_block_at(self, pos: tuple[int, int, int], block: int) -> None:
        self.data[_index(pos)] = block

    def fill(self, block: int) -> None:
        self.data = array("H", [block]) * CHUNK_VOLUME


@dataclass
class LightChunk:
    """Light levels of a chunk, at full light when created."""

    pos: ChunkPos
    light: bytearray = field(
        default_factory=lambda: bytearray([DEFAULT_LIGHT]) * CHUNK_VOLUME
    )

    def __post_init__(self) -> None:
        self.light = bytearray(self.light)
        if len(self.light) != CHUNK_VOLUME:
            raise ValueError(f"light data must hold {CHUNK_VOLUME} values")

    def get_light_at(self, pos: tuple[int, int, int]) -> int:
        return self.light[_index(pos)]


@dataclass
class CompressedChunk:
    """A run-length compressed chunk: (count, block id) pairs."""

    pos: ChunkPos
    data: list[tuple[int, int]]

    @classmethod
    def from_chunk(cls, chunk: Chunk) -> CompressedChunk:
        return cls(chunk.pos, _rle_encode(chunk.data))

    def to_chunk(self) -> Chunk:
        """Recover the chunk; positions not covered by runs are zero."""
        return Chunk(self.pos, array("H", _rle_decode(self.data)))


@dataclass
class CompressedLightChunk:
    """A run-length compressed light chunk: (count, light) pairs."""

    pos: ChunkPos
    data: list[tuple[int, int]]

    @classmethod
    def from_chunk(cls, chunk: LightChunk) -> CompressedLightChunk:
        return cls(chunk.pos, _rle_encode(chunk.light))

    def to_chunk(self) -> LightChunk:
        """Recover the light chunk; positions not covered by runs are zero."""
        return LightChunk(self.pos, bytearray(_rle_decode(self.data)))