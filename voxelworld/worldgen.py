"""World generators: a flat debug world and terrain decorated with trees."""

from __future__ import annotations

from array import array
from dataclasses import dataclass, field
from itertools import product
from typing import Protocol

from .blocks import Block
from .debug import send_debug_info
from .perlin import rand_pos_int
from .registry import Registry
from .topology import HeightMap, generate_chunk_topology
from .world import CHUNK_SIZE, BlockPos, Chunk, ChunkPos

AIR = 0
TREE_TRIES_PER_CHUNK = 32
_NEIGHBOURHOOD = 27
_CENTER = 13
_OFFSETS = tuple(product((-1, 0, 1), repeat=3))


class WorldGenerator(Protocol):
    """Anything that can generate chunks of the world."""

    def generate_chunk(self, pos: ChunkPos, block_registry: Registry[Block]) -> Chunk:
        """Generate the chunk at ``pos``.

        The result must not depend on earlier calls.
        """


def _block_id(block_registry: Registry[Block], name: str) -> int:
    block_id = block_registry.id_of(name)
    if block_id is None:
        raise KeyError(f"block {name!r} is not registered")
    return block_id


def _wrap32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


class DebugWorldGenerator:
    """A flat world: stone everywhere above height zero, air elsewhere."""

    def generate_chunk(self, pos: ChunkPos, block_registry: Registry[Block]) -> Chunk:
        stone = _block_id(block_registry, "stone")
        chunk = Chunk(pos)
        row = array("H", [stone]) * CHUNK_SIZE
        for i, j in product(range(CHUNK_SIZE), repeat=2):
            if j + CHUNK_SIZE * pos.py > 0:
                start = (i * CHUNK_SIZE + j) * CHUNK_SIZE
                chunk.data[start : start + CHUNK_SIZE] = row
        return chunk


@dataclass
class _DecoratorPass:
    """Blocks of one type placed at offsets from a structure's origin.

    A position may be overwritten only if it holds a whitelisted block; a
    position holding neither a whitelisted nor a non-blocking block cancels
    the structure.
    """

    block_type: int
    block_pos: list[tuple[int, int, int]] = field(default_factory=list)
    block_whitelist: set[int] = field(default_factory=lambda: {AIR})
    block_non_blocking: set[int] = field(default_factory=set)


@dataclass
class _Decorator:
    """A structure placed at random spots on allowed starting blocks."""

    number_of_try: int
    block_start_whitelist: set[int]
    passes: list[_DecoratorPass]


def _tree_decorator(grass: int, leaves: int, wood: int) -> _Decorator:
    pass_leaves = _DecoratorPass(leaves)
    pass_wood = _DecoratorPass(wood)
    pass_wood.block_whitelist.add(leaves)
    for jj in range(1, 8):
        if jj <= 2:
            radius = 0
        elif jj <= 5:
            radius = 2
        else:
            radius = 1
        for ii, kk in product(range(-radius, radius + 1), repeat=2):
            if (ii, kk) != (0, 0) or jj > 6:
                pass_leaves.block_pos.append((ii, jj, kk))
            else:
                pass_wood.block_pos.append((ii, jj, kk))
    return _Decorator(TREE_TRIES_PER_CHUNK, {grass}, [pass_leaves, pass_wood])


def _copy_chunk(chunk: Chunk) -> Chunk:
    return Chunk(chunk.pos, array("H", chunk.data))


def _inside(pos: BlockPos, low: tuple[int, int, int], high: tuple[int, int, int]) -> bool:
    return all(lo <= c < hi for c, lo, hi in zip((pos.px, pos.py, pos.pz), low, high))


def _try_structure(
    chunks: list[Chunk],
    decorator: _Decorator,
    origin: tuple[int, int, int],
    low: tuple[int, int, int],
    high: tuple[int, int, int],
) -> list[list[tuple[BlockPos, int]]] | None:
    """The blocks of each pass for a structure at ``origin``, or None if it cannot fit."""
    base = chunks[0].pos
    tx, ty, tz = origin
    placed: list[list[tuple[BlockPos, int]]] = []
    for decorator_pass in decorator.passes:
        blocks: list[tuple[BlockPos, int]] = []
        for dx, dy, dz in decorator_pass.block_pos:
            pos = BlockPos(dx + tx, dy + ty, dz + tz)
            if not _inside(pos, low, high):
                # Structures never reach beyond the surrounding chunks.
                return None
            cpos = pos.containing_chunk_pos()
            index = (cpos.px - base.px) * 9 + (cpos.py - base.py) * 3 + (cpos.pz - base.pz)
            existing = chunks[index].get_block_at(pos.pos_in_containing_chunk())
            if existing in decorator_pass.block_whitelist:
                blocks.append((pos, decorator_pass.block_type))
            elif existing not in decorator_pass.block_non_blocking:
                return None
        placed.append(blocks)
    return placed


def _decorate(chunks: list[Chunk], decorator: _Decorator) -> None:
    """Place structures into the centre chunk of a 3×3×3 neighbourhood."""
    base = chunks[0].pos
    low = (base.px * CHUNK_SIZE, base.py * CHUNK_SIZE, base.pz * CHUNK_SIZE)
    high = tuple(c + 3 * CHUNK_SIZE for c in low)
    inner_low = tuple(c + CHUNK_SIZE for c in low)
    inner_high = tuple(c + 2 * CHUNK_SIZE for c in low)
    pending: list[list[tuple[BlockPos, int]]] = [[] for _ in decorator.passes]

    for i in (-1, 0, 1):
        for j, k in product((-1, 0, 1), repeat=2):
            current = chunks[(i + 1) * 9 + (j + 1) * 3 + (k + 1)]
            cpos = current.pos
            cx, cy, cz = _wrap32(cpos.px), _wrap32(cpos.py), _wrap32(cpos.pz)
            for attempt in range(decorator.number_of_try):
                tx, ty, tz = (
                    rand_pos_int(cx, cy, cz, _wrap32(3 * attempt + n)) % CHUNK_SIZE
                    for n in range(3)
                )
                if current.get_block_at((tx, ty, tz)) not in decorator.block_start_whitelist:
                    continue
                origin = (
                    tx + cpos.px * CHUNK_SIZE,
                    ty + cpos.py * CHUNK_SIZE,
                    tz + cpos.pz * CHUNK_SIZE,
                )
                structure = _try_structure(chunks, decorator, origin, low, high)
                if structure is not None:
                    for target, blocks in zip(pending, structure):
                        target.extend(blocks)

        for blocks in pending:
            for pos, block_id in blocks:
                if _inside(pos, inner_low, inner_high):
                    chunks[_CENTER].set_block_at(pos.pos_in_containing_chunk(), block_id)
            blocks.clear()


class TopologyWorldGenerator:
    """Noise-based terrain decorated with trees.

    Neighbouring chunks are generated without decoration and kept until
    they have served every chunk around them.
    """

    def __init__(self, block_registry: Registry[Block]) -> None:
        grass = _block_id(block_registry, "grass")
        leaves = _block_id(block_registry, "leaves")
        wood = _block_id(block_registry, "wood")
        self._tree_decorator = _tree_decorator(grass, leaves, wood)
        self._pregenerated: dict[ChunkPos, Chunk] = {}
        self._decorator_counts: dict[ChunkPos, int] = {}
        self._height_map = HeightMap()

    def generate_chunk(self, pos: ChunkPos, block_registry: Registry[Block]) -> Chunk:
        chunks = []
        for offset in _OFFSETS:
            neighbour_pos = pos.offset(*offset)
            chunk = self._pregenerated.pop(neighbour_pos, None)
            if chunk is None:
                chunk = Chunk(neighbour_pos)
                generate_chunk_topology(chunk, block_registry, self._height_map)
            chunks.append(chunk)

        undecorated_center = _copy_chunk(chunks[_CENTER])
        _decorate(chunks, self._tree_decorator)
        result = chunks[_CENTER]
        chunks[_CENTER] = undecorated_center

        for chunk in chunks:
            count = self._decorator_counts.get(chunk.pos, 0) + 1
            if count < _NEIGHBOURHOOD:
                self._pregenerated[chunk.pos] = chunk
                self._decorator_counts[chunk.pos] = count

        send_debug_info(
            "Chunks",
            "worldgenstruct",
            f"Stored pregenerated chunks = {len(self._pregenerated)}",
        )
        return result