"""Terrain height and the ground blocks of generated chunks."""

from __future__ import annotations

from itertools import product

from .blocks import Block
from .perlin import perlin2d, perlin2d_with_displacement
from .registry import Registry
from .world import CHUNK_SIZE, Chunk, ChunkPosXZ


def generate_ground_level(px: float, pz: float) -> list[float]:
    """Ground height of every column of the chunk whose corner is at (px, pz).

    Columns are indexed ``i * CHUNK_SIZE + k``; heights below zero are
    deepened threefold.
    """
    dx = perlin2d(px, pz, CHUNK_SIZE, 1.0 / 64.0, 1.0 / 64.0, 5, 0.5, 0)
    dy = perlin2d(px, pz, CHUNK_SIZE, 1.0 / 64.0, 1.0 / 64.0, 5, 0.5, 1)
    shape = perlin2d_with_displacement(
        dx, dy, 2.0 * CHUNK_SIZE, px, pz, CHUNK_SIZE, 1.0 / 128.0, 1.0 / 128.0, 5, 0.4, 2
    )
    amplitude = perlin2d(px, pz, CHUNK_SIZE, 1.0 / 256.0, 1.0 / 256.0, 5, 0.3, 3)

    heights = []
    for shape_value, amplitude_value in zip(shape, amplitude):
        height = shape_value * (amplitude_value * 130.0) - 10.0
        if height <= 0.0:
            height *= 3.0
        heights.append(height)
    return heights


class HeightMap:
    """Integer ground heights per chunk column, computed once per XZ position."""

    def __init__(self) -> None:
        self._heights: dict[ChunkPosXZ, list[int]] = {}

    def chunk_height_map(self, pos: ChunkPosXZ) -> list[int]:
        heights = self._heights.get(pos)
        if heights is None:
            levels = generate_ground_level(float(pos.px * CHUNK_SIZE), float(pos.pz * CHUNK_SIZE))
            heights = [int(level) for level in levels]
            self._heights[pos] = heights
        return heights


def _block_id(block_registry: Registry[Block], name: str) -> int:
    block_id = block_registry.id_of(name)
    if block_id is None:
        raise KeyError(f"block {name!r} is not registered")
    return block_id


def generate_chunk_topology(
    chunk: Chunk, block_registry: Registry[Block], height_map: HeightMap
) -> None:
    """Fill ``chunk`` with ground blocks below the terrain and water below sea level."""
    stone = _block_id(block_registry, "stone")
    grass = _block_id(block_registry, "grass")
    dirt = _block_id(block_registry, "dirt")
    dirt_grass = _block_id(block_registry, "dirt_grass")
    water = _block_id(block_registry, "water")
    sand = _block_id(block_registry, "sand")

    def ground_block(depth: int, surface: int) -> int:
        if depth > 4:
            return stone
        if surface < 1:
            return sand
        if depth == 0:
            return grass
        if depth == 1:
            return dirt_grass
        return dirt

    heights = height_map.chunk_height_map(ChunkPosXZ.from_chunk_pos(chunk.pos))
    base_y = CHUNK_SIZE * chunk.pos.py

    for i, k in product(range(CHUNK_SIZE), repeat=2):
        surface = heights[i * CHUNK_SIZE + k]
        for j in range(CHUNK_SIZE):
            y = base_y + j
            if y > surface:
                if y >= 0:
                    break
                block = water
            else:
                block = ground_block(surface - y, surface)
            chunk.set_block_at((i, j, k), block)