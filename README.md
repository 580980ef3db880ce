# voxelworld

The shared core of a voxel game: world data, world generation, physics and
the messages a client and a server exchange. It has no dependencies beyond
the standard library.

## What it provides

- **Registries** (`voxelworld.registry`): `Registry` stores values by name and
  by id, ids given in registration order. `register` returns the new id and
  raises `RegistryError` for a name registered twice; `id_of` and `value_of`
  return `None` for unknown names and ids.
- **World data** (`voxelworld.world`): `BlockPos`, `ChunkPos`, `ChunkPosXZ`,
  32×32×32 `Chunk` grids of block ids (all zero when created) and `LightChunk`
  grids (full light, 15, when created), and their run-length encoded forms
  `CompressedChunk` and `CompressedLightChunk`.
- **Blocks and items** (`voxelworld.blocks`): `Block`, `BlockType`, `BlockKind`,
  `BlockMesh` (empty, or a full cube with six `TextureRect`s), `Item`,
  `ItemType` and `ItemMesh`.
- **Players** (`voxelworld.player`): `PlayerInput`, `PlayerId`,
  `RenderDistance`, `sorted_close_chunks` and `CloseChunks`, which keeps the
  visible chunk offsets sorted nearest first.
- **Physics**:
  - `voxelworld.aabb`: `Vec3`, `AABB` boxes and their collisions with any
    `BlockContainer` (an object with `is_block_full(pos)`).
  - `voxelworld.physics_player`: `PhysicsPlayer`, with its camera position and
    block picking by ray casting (`get_pointed_at`).
  - `voxelworld.camera`: `default_camera`, flying and walking movement with
    jumping and gravity.
  - `voxelworld.simulation`: `PhysicsState`, `ServerPhysicsSimulation`, and
    `ClientPhysicsSimulation`, which predicts the client's movement and replays
    its inputs after each server update. Times are floats in seconds.
- **World generation**:
  - `voxelworld.perlin`: deterministic 2D and 3D value noise and the integer
    hash behind it.
  - `voxelworld.topology`: `generate_ground_level`, `HeightMap` and
    `generate_chunk_topology` (stone, dirt, grass, sand and water layers).
  - `voxelworld.worldgen`: `TopologyWorldGenerator`, terrain decorated with
    trees, and the flat `DebugWorldGenerator`.
- **Infrastructure**:
  - `voxelworld.worker`: `Worker` runs a function on a background thread behind
    bounded queues; `enqueue` raises `QueueFull` when there is no room and
    `get_result` returns `None` when nothing is ready.
  - `voxelworld.debug`: `DebugInfo.new_current()` makes a collector that any
    thread can post to with `send_debug_info`, `send_worker_perf` and
    `send_perf_breakdown`.
  - `voxelworld.timing`: `AverageTimeCounter` and `BreakdownCounter`, rolling
    over the last ten seconds.
  - `voxelworld.network`: the client and server message types and events, and
    `dummy_pair()`, an in-memory client and server for a single player.
  - `voxelworld.merging`: `merge_arrays` merges sequences sorted in descending
    order into one descending list.

## Installation

```
pip install .
```

## Example

```python
from voxelworld.registry import Registry
from voxelworld.world import ChunkPos, CompressedChunk
from voxelworld.worldgen import DebugWorldGenerator

blocks = Registry()
blocks.register("air", None)
stone = blocks.register("stone", None)

chunk = DebugWorldGenerator().generate_chunk(ChunkPos(0, 0, 0), blocks)
assert chunk.get_block_at((0, 5, 0)) == stone

packed = CompressedChunk.from_chunk(chunk)
assert packed.to_chunk().data == chunk.data
```

`TopologyWorldGenerator` needs a registry holding the blocks `stone`, `grass`,
`dirt`, `dirt_grass`, `water`, `sand`, `leaves` and `wood`; a missing one
raises `KeyError`.

## What it does not do

- It has no window, renderer or user interface, and no command to run.
- It does not load game data such as textures, block and item definitions, or
  voxel model files from disk; blocks and items are registered by the caller.
- Its only transport is the in-memory pair from `dummy_pair()`; there is no
  network server or client over sockets.

## Running the tests

```
pip install .[test]
pytest
```