import pytest

from voxelworld.aabb import AABB, Vec3
from voxelworld.physics_player import (
    CAMERA_OFFSET,
    PLAYER_HEIGHT,
    PLAYER_SIDE,
    PhysicsPlayer,
)
from voxelworld.world import BlockPos


class _World:
    def __init__(self, full=()):
        self.full = set(full)

    def is_block_full(self, pos: BlockPos) -> bool:
        return (pos.px, pos.py, pos.pz) in self.full


def _player_at(x, y, z):
    return PhysicsPlayer(aabb=AABB(Vec3(x, y, z), PLAYER_SIDE, PLAYER_HEIGHT, PLAYER_SIDE))


def test_default_player():
    player = PhysicsPlayer()
    assert player.aabb.pos == Vec3(1.46, 52.6, 1.85)
    assert (player.aabb.size_x, player.aabb.size_y, player.aabb.size_z) == (0.8, 1.8, 0.8)
    assert player.velocity == Vec3()


def test_default_players_are_independent():
    a = PhysicsPlayer()
    b = PhysicsPlayer()
    a.aabb.pos = Vec3()
    assert b.aabb.pos == Vec3(1.46, 52.6, 1.85)


def test_camera_position_is_offset_from_box():
    player = _player_at(0.0, 0.0, 0.0)
    assert player.camera_position() == Vec3(0.4, 1.6, 0.4)
    moved = _player_at(2.0, 3.0, -1.0)
    assert tuple(moved.camera_position() - moved.aabb.pos) == pytest.approx(
        tuple(CAMERA_OFFSET)
    )


def test_pointed_at_nothing_in_empty_world():
    player = _player_at(0.1, 0.0, 0.1)
    assert player.get_pointed_at(Vec3(0.0, 0.0, -1.0), 10.0, _World()) is None


def test_pointed_at_block_ahead():
    world = _World({(0, 1, -3)})
    player = _player_at(0.1, 0.0, 0.1)
    assert player.get_pointed_at(Vec3(0.0, 0.0, -1.0), 10.0, world) == (
        BlockPos(0, 1, -3),
        4,
    )


def test_pointed_at_unnormalized_direction_is_the_same():
    world = _World({(0, 1, -3)})
    player = _player_at(0.1, 0.0, 0.1)
    assert player.get_pointed_at(Vec3(0.0, 0.0, -7.0), 10.0, world) == player.get_pointed_at(
        Vec3(0.0, 0.0, -1.0), 10.0, world
    )


def test_pointed_at_block_out_of_reach():
    world = _World({(0, 1, -3)})
    player = _player_at(0.1, 0.0, 0.1)
    assert player.get_pointed_at(Vec3(0.0, 0.0, -1.0), 2.0, world) is None


def test_pointed_at_from_inside_block_flips_face():
    world = _World({(0, 1, 0)})
    player = _player_at(0.1, 0.0, 0.1)
    assert player.get_pointed_at(Vec3(0.0, 0.0, -1.0), 10.0, world) == (
        BlockPos(0, 1, 0),
        5,
    )


def test_pointed_at_zero_direction_raises():
    with pytest.raises(ValueError):
        _player_at(0.0, 0.0, 0.0).get_pointed_at(Vec3(), 5.0, _World())