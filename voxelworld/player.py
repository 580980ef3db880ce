"""Player input, identity and render distance."""

from __future__ import annotations

from dataclasses import dataclass, fields
from itertools import product
from typing import Iterator

from .world import ChunkPos


@dataclass
class PlayerInput:
    """The input of a player for one tick."""

    key_move_forward: bool = False
    key_move_left: bool = False
    key_move_backward: bool = False
    key_move_right: bool = False
    key_move_up: bool = False
    key_move_down: bool = False
    yaw: float = 0.0
    pitch: float = 0.0
    flying: bool = True


@dataclass(frozen=True)
class PlayerId:
    """A unique player id in the range of an unsigned 16-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"player id out of range: {self.value}")


@dataclass(frozen=True)
class RenderDistance:
    """How many chunks a player sees in each direction of each axis."""

    x_max: int = 1
    x_min: int = 1
    y_max: int = 1
    y_min: int = 1
    z_max: int = 1
    z_min: int = 1

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must not be negative")

    def iterate_around_player(self, player_chunk: ChunkPos) -> Iterator[ChunkPos]:
        """Yield every chunk in render distance, x outermost and z innermost."""
        for i, j, k in product(
            range(-self.x_min, self.x_max + 1),
            range(-self.y_min, self.y_max + 1),
            range(-self.z_min, self.z_max + 1),
        ):
            yield player_chunk.offset(i, j, k)

    def is_chunk_visible(self, player_chunk: ChunkPos, chunk_pos: ChunkPos) -> bool:
        return (
            chunk_pos.px - player_chunk.px <= self.x_max
            and chunk_pos.py - player_chunk.py <= self.y_max
            and chunk_pos.pz - player_chunk.pz <= self.z_max
            and player_chunk.px - chunk_pos.px <= self.x_min
            and player_chunk.py - chunk_pos.py <= self.y_min
            and player_chunk.pz - chunk_pos.pz <= self.z_min
        )


def sorted_close_chunks(render_distance: RenderDistance) -> list[ChunkPos]:
    """Chunk offsets within ``render_distance``, nearest first."""
    origin = ChunkPos(0, 0, 0)
    return sorted(
        render_distance.iterate_around_player(origin),
        key=origin.squared_euclidian_distance,
    )


class CloseChunks:
    """The visible chunk offsets for a render distance, sorted by distance."""

    def __init__(self, render_distance: RenderDistance | None = None) -> None:
        self._render_distance = render_distance or RenderDistance()
        self._chunks = sorted_close_chunks(self._render_distance)

    def update(self, render_distance: RenderDistance) -> None:
        """Recompute the chunks if the render distance changed."""
        if render_distance != self._render_distance:
            self._chunks = sorted_close_chunks(render_distance)
            self._render_distance = render_distance

    def close_chunks(self) -> list[ChunkPos]:
        return list(self._chunks)