"""The physical body of a player and block picking by ray casting."""

from __future__ import annotations

from dataclasses import dataclass, field

from .aabb import AABB, BlockContainer, Vec3
from .world import BlockPos

PLAYER_SIDE = 0.8
PLAYER_HEIGHT = 1.8
CAMERA_OFFSET = Vec3(0.4, 1.6, 0.4)
DEFAULT_POSITION = Vec3(1.46, 52.6, 1.85)

_FACE_DIRECTIONS = (
    Vec3(-1.0, 0.0, 0.0),
    Vec3(1.0, 0.0, 0.0),
    Vec3(0.0, -1.0, 0.0),
    Vec3(0.0, 1.0, 0.0),
    Vec3(0.0, 0.0, -1.0),
    Vec3(0.0, 0.0, 1.0),
)


def _default_aabb() -> AABB:
    return AABB(DEFAULT_POSITION, PLAYER_SIDE, PLAYER_HEIGHT, PLAYER_SIDE)


@dataclass
class PhysicsPlayer:
    """A player's bounding box and velocity."""

    aabb: AABB = field(default_factory=_default_aabb)
    velocity: Vec3 = field(default_factory=Vec3)

    def camera_position(self) -> Vec3:
        return self.aabb.pos + CAMERA_OFFSET

    def get_pointed_at(
        self, direction: Vec3, max_dist: float, world: BlockContainer
    ) -> tuple[BlockPos, int] | None:
        """Cast a ray from the camera and return the first full block hit.

        The face is an index into -x, x, -y, y, -z, z. Returns None if no
        block is hit within ``max_dist``.
        """
        direction = direction.normalize()
        pos = self.camera_position()
        was_inside = world.is_block_full(BlockPos.from_floats(*pos))
        while True:
            targets = (
                float(int(pos.x // 1)),
                -float(int(-pos.x // 1)),
                float(int(pos.y // 1)),
                -float(int(-pos.y // 1)),
                float(int(pos.z // 1)),
                -float(int(-pos.z // 1)),
            )
            nearest = 1e9
            face = 0
            for index, (target, axis) in enumerate(zip(targets, _FACE_DIRECTIONS)):
                effective_movement = direction.dot(axis)
                if effective_movement > 1e-6:
                    offset = abs(abs(target) - abs(pos.dot(axis)))
                    distance = offset / effective_movement
                    if nearest > distance:
                        nearest = distance
                        face = index

            if was_inside:
                return BlockPos.from_floats(*pos), face ^ 1
            if nearest > max_dist:
                return None
            nearest += 1e-5
            max_dist -= nearest
            pos = pos + direction * nearest
            block_pos = BlockPos.from_floats(*pos)
            if world.is_block_full(block_pos):
                return block_pos, face