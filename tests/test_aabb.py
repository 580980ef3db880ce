import pytest

from voxelworld.aabb import AABB, Vec3
from voxelworld.world import BlockPos


class _World:
    def __init__(self, full=()):
        self.full = set(full)

    def is_block_full(self, pos: BlockPos) -> bool:
        return (pos.px, pos.py, pos.pz) in self.full


def test_vec3_norm_and_normalize():
    v = Vec3(3.0, 4.0, 0.0)
    assert v.norm() == pytest.approx(5.0)
    unit = v.normalize()
    assert unit.norm() == pytest.approx(1.0)
    assert unit.dot(v) == pytest.approx(v.norm())


def test_vec3_arithmetic_round_trip():
    a = Vec3(1.5, -2.0, 0.25)
    b = Vec3(-3.0, 4.0, 8.0)
    assert (a + b) - b == a
    assert tuple(-a) == (-1.5, 2.0, -0.25)
    assert tuple(2.0 * a) == tuple(a * 2.0)
    assert (a * 4.0) / 4.0 == a


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        Vec3().normalize()


def test_cube_has_equal_sides():
    box = AABB.cube(Vec3(1.0, 2.0, 3.0), 0.5)
    assert (box.size_x, box.size_y, box.size_z) == (0.5, 0.5, 0.5)


def test_intersects_overlap_and_touching():
    a = AABB.cube(Vec3(0.0, 0.0, 0.0), 1.0)
    overlapping = AABB.cube(Vec3(0.5, 0.5, 0.5), 1.0)
    touching = AABB.cube(Vec3(1.0, 0.0, 0.0), 1.0)
    assert a.intersects(overlapping)
    assert overlapping.intersects(a)
    assert not a.intersects(touching)


def test_contains_point_includes_boundary():
    box = AABB(Vec3(0.0, 0.0, 0.0), 1.0, 2.0, 1.0)
    assert box.contains_point((1.0, 2.0, 1.0))
    assert box.contains_point((0.5, 1.0, 0.5))
    assert not box.contains_point((0.5, 2.5, 0.5))


def test_intersect_world():
    world = _World({(0, 0, 0)})
    assert AABB.cube(Vec3(0.5, 0.5, 0.5), 0.2).intersect_world(world)
    assert not AABB.cube(Vec3(1.0, 0.0, 0.0), 1.0).intersect_world(world)
    assert not AABB.cube(Vec3(0.5, 0.5, 0.5), 0.2).intersect_world(_World())


def test_move_in_empty_world_moves_by_delta():
    box = AABB(Vec3(0.0, 0.0, 0.0), 0.8, 1.8, 0.8)
    delta = Vec3(2.5, -3.0, 0.7)
    moved = box.move_check_collision(_World(), delta)
    assert tuple(moved) == pytest.approx(tuple(delta))
    assert tuple(box.pos) == pytest.approx(tuple(delta))


def test_move_stops_before_wall():
    wall = {(3, y, z) for y in range(-2, 3) for z in range(-2, 3)}
    world = _World(wall)
    box = AABB.cube(Vec3(0.0, 0.0, 0.0), 1.0)
    moved = box.move_check_collision(world, Vec3(5.0, 0.0, 0.0))
    assert box.pos.x + box.size_x <= 3.0
    assert not box.intersect_world(world)
    assert moved.x == pytest.approx(box.pos.x)
    assert box.pos.x == pytest.approx(2.0, abs=1e-3)


def test_move_when_already_inside_is_free():
    world = _World({(0, 0, 0)})
    box = AABB.cube(Vec3(0.2, 0.2, 0.2), 0.5)
    delta = Vec3(0.0, 4.0, 0.0)
    assert box.move_check_collision(world, delta) == delta
    assert box.pos.y == pytest.approx(4.2)


def test_is_on_the_ground():
    world = _World({(0, 0, 0)})
    assert AABB.cube(Vec3(0.0, 1.0, 0.0), 1.0).is_on_the_ground(world)
    assert not AABB.cube(Vec3(0.0, 1.5, 0.0), 1.0).is_on_the_ground(world)
    assert not AABB.cube(Vec3(0.0, 0.5, 0.0), 1.0).is_on_the_ground(world)


def test_is_on_the_ground_leaves_position_unchanged():
    box = AABB.cube(Vec3(0.0, 1.0, 0.0), 1.0)
    box.is_on_the_ground(_World({(0, 0, 0)}))
    assert box.pos == Vec3(0.0, 1.0, 0.0)