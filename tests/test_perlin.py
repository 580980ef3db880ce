import math

import pytest

from voxelworld.perlin import (
    hash_int,
    perlin,
    perlin2d,
    perlin2d_with_displacement,
    rand_pos,
    rand_pos_int,
    value_noise,
    value_noise2d,
)


def test_hash_of_zero_is_zero():
    assert hash_int(0) == 0


@pytest.mark.parametrize("value", [1, -1, 12345, 2**31 - 1, -(2**31), 987654321])
def test_hash_stays_in_signed_32_bit_range(value):
    result = hash_int(value)
    assert -(2**31) <= result < 2**31


def test_hash_wraps_its_input():
    assert hash_int(2**32 + 5) == hash_int(5)
    assert hash_int(-(2**32) + 77) == hash_int(77)


def test_rand_pos_int_is_deterministic_and_in_range():
    values = [rand_pos_int(x, 3, -7, 11) for x in range(-5, 5)]
    assert values == [rand_pos_int(x, 3, -7, 11) for x in range(-5, 5)]
    assert all(-(2**31) <= v < 2**31 for v in values)


def test_rand_pos_in_unit_interval_and_seed_dependent():
    values = [rand_pos(x, y, 0, 1) for x in range(10) for y in range(10)]
    assert all(0.0 <= v < 1.0 for v in values)
    other = [rand_pos(x, y, 0, 2) for x in range(10) for y in range(10)]
    assert values != other


def test_perlin2d_on_lattice_points_equals_lattice_values():
    result = perlin2d(0.0, 0.0, 3, 1.0, 1.0, 1, 0.5, 5)
    for i in range(3):
        for j in range(3):
            assert result[i * 3 + j] == pytest.approx(rand_pos(i, j, 0, 5))


def test_perlin_3d_on_lattice_points_equals_lattice_values():
    result = perlin(0.0, 0.0, 0.0, 2, 1.0, 1.0, 1.0, 1, 0.5, 7)
    for i in range(2):
        for j in range(2):
            for k in range(2):
                assert result[(i * 2 + j) * 2 + k] == pytest.approx(rand_pos(i, j, k, 7))


def test_perlin2d_midpoint_is_mean_of_corners():
    result = perlin2d(0.5, 0.5, 1, 1.0, 1.0, 1, 0.5, 9)
    corners = [rand_pos(i, j, 0, 9) for i in (0, 1) for j in (0, 1)]
    assert result[0] == pytest.approx(sum(corners) / 4)


def test_value_noise2d_adds_weighted_values_in_place():
    to_add = [1.0] * 4
    value_noise2d((0.0, 0.0), (2, 2), (1.0, 1.0), 2.0, to_add, 3)
    for i in range(2):
        for j in range(2):
            assert to_add[i * 2 + j] == pytest.approx(1.0 + 2.0 * rand_pos(i, j, 0, 3))


def test_value_noise_adds_weighted_values_in_place():
    to_add = [0.5] * 8
    value_noise((0.0, 0.0, 0.0), (2, 2, 2), (1.0, 1.0, 1.0), 3.0, to_add, 4)
    for i in range(2):
        for j in range(2):
            for k in range(2):
                expected = 0.5 + 3.0 * rand_pos(i, j, k, 4)
                assert to_add[(i * 2 + j) * 2 + k] == pytest.approx(expected)


def test_multi_octave_noise_is_normalized():
    values2d = perlin2d(10.0, -20.0, 8, 1 / 16, 1 / 16, 5, 0.5, 0)
    values3d = perlin(-3.0, 4.0, 100.0, 4, 1 / 8, 1 / 8, 1 / 8, 3, 0.4, 2)
    assert len(values2d) == 64
    assert len(values3d) == 64
    assert all(0.0 <= v <= 1.0 for v in values2d + values3d)


def test_noise_is_deterministic():
    first = perlin2d(32.0, 64.0, 4, 1 / 64, 1 / 64, 5, 0.5, 1)
    second = perlin2d(32.0, 64.0, 4, 1 / 64, 1 / 64, 5, 0.5, 1)
    assert first == second


def test_zero_octaves_gives_nan():
    result = perlin2d(0.0, 0.0, 2, 1.0, 1.0, 0, 0.5, 0)
    assert len(result) == 4
    assert all(math.isnan(v) for v in result)


def test_displacement_with_zero_strength_matches_plain_noise():
    size = 4
    dx = [0.3] * (size * size)
    dy = [0.9] * (size * size)
    displaced = perlin2d_with_displacement(dx, dy, 0.0, 5.0, -3.0, size, 0.3, 0.2, 3, 0.5, 2)
    plain = perlin2d(5.0, -3.0, size, 0.3, 0.2, 3, 0.5, 2)
    assert displaced == pytest.approx(plain)


def test_displacement_changes_the_noise():
    size = 4
    dx = [1.0] * (size * size)
    dy = [0.0] * (size * size)
    displaced = perlin2d_with_displacement(dx, dy, 3.0, 0.0, 0.0, size, 0.3, 0.3, 2, 0.5, 2)
    plain = perlin2d(0.0, 0.0, size, 0.3, 0.3, 2, 0.5, 2)
    assert displaced != pytest.approx(plain)
    assert all(0.0 <= v <= 1.0 for v in displaced)