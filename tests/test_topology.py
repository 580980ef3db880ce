from itertools import product

import pytest

from voxelworld.blocks import Block, BlockKind, BlockType
from voxelworld.registry import Registry
from voxelworld.topology import HeightMap, generate_chunk_topology, generate_ground_level
from voxelworld.world import CHUNK_SIZE, Chunk, ChunkPos, ChunkPosXZ

NAMES = ["air", "stone", "grass", "dirt", "dirt_grass", "water", "sand"]


def make_registry(names=NAMES):
    registry = Registry()
    for name in names:
        registry.register(name, Block(name, BlockType(BlockKind.AIR)))
    return registry


@pytest.fixture(scope="module")
def registry():
    return make_registry()


@pytest.fixture(scope="module")
def height_map():
    return HeightMap()


def test_ground_level_covers_every_column_and_is_deterministic():
    first = generate_ground_level(0.0, 0.0)
    assert len(first) == CHUNK_SIZE * CHUNK_SIZE
    assert first == generate_ground_level(0.0, 0.0)


def test_ground_level_is_bounded():
    levels = generate_ground_level(64.0, -96.0)
    assert all(-30.0 <= level <= 120.0 for level in levels)


def test_height_map_truncates_and_caches(height_map):
    pos = ChunkPosXZ(0, 0)
    heights = height_map.chunk_height_map(pos)
    assert heights == [int(level) for level in generate_ground_level(0.0, 0.0)]
    assert height_map.chunk_height_map(pos) is heights


def test_chunk_high_above_terrain_stays_empty(registry, height_map):
    chunk = Chunk(ChunkPos(0, 10, 0))
    generate_chunk_topology(chunk, registry, height_map)
    assert set(chunk.data) == {0}


def test_chunk_deep_below_terrain_is_stone(registry, height_map):
    chunk = Chunk(ChunkPos(0, -10, 0))
    generate_chunk_topology(chunk, registry, height_map)
    assert set(chunk.data) == {registry.id_of("stone")}


@pytest.mark.parametrize("py", [-1, 0])
def test_chunk_layers_follow_the_height_map(registry, height_map, py):
    chunk = Chunk(ChunkPos(0, py, 0))
    generate_chunk_topology(chunk, registry, height_map)
    heights = height_map.chunk_height_map(ChunkPosXZ(0, 0))
    water = registry.id_of("water")
    stone = registry.id_of("stone")
    for i, k, j in product(range(CHUNK_SIZE), range(CHUNK_SIZE), range(CHUNK_SIZE)):
        y = j + CHUNK_SIZE * py
        surface = heights[i * CHUNK_SIZE + k]
        block = chunk.get_block_at((i, j, k))
        if y > surface:
            assert block == (water if y < 0 else 0)
        elif surface - y > 4:
            assert block == stone
        else:
            assert block not in (0, water, stone)


def test_missing_block_raises_key_error(height_map):
    registry = make_registry([name for name in NAMES if name != "sand"])
    with pytest.raises(KeyError):
        generate_chunk_topology(Chunk(ChunkPos(0, 0, 0)), registry, height_map)