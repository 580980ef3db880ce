"""Value noise in two and three dimensions, and the integer hash behind it."""

from __future__ import annotations

import math
from itertools import product
from typing import MutableSequence, Sequence

_MODULUS = 10_000_000


def _wrap(value: int) -> int:
    """Wrap ``value`` to a signed 32-bit integer."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


def hash_int(value: int) -> int:
    """Scramble a signed 32-bit integer; arithmetic wraps around."""
    a = _wrap(value)
    a = _wrap(a - _wrap(a << 6))
    a ^= a >> 17
    a = _wrap(a - _wrap(a << 9))
    a = _wrap(a ^ (a << 4))
    a = _wrap(a - _wrap(a << 3))
    a = _wrap(a ^ (a << 10))
    a ^= a >> 15
    return a


def rand_pos_int(x: int, y: int, z: int, seed: int) -> int:
    """A pseudo-random signed 32-bit integer fixed by a position and a seed."""
    a = hash_int(_wrap(x + seed))
    b = hash_int(_wrap(y + a))
    return hash_int(_wrap(z + b))


def rand_pos(x: int, y: int, z: int, seed: int) -> float:
    """A pseudo-random value in [0, 1) fixed by a position and a seed."""
    c = rand_pos_int(x, y, z, seed)
    remainder = int(math.copysign(abs(c) % _MODULUS, c)) if c else 0
    return ((_MODULUS + remainder) % _MODULUS) / _MODULUS


def _smoothstep(t: float) -> float:
    t2 = t * t
    t4 = t2 * t2
    return 6.0 * t * t4 - 15.0 * t4 + 10.0 * t * t2


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _lattice_bounds(origin: float, size: int, scale: float) -> tuple[int, int]:
    low = math.floor(origin * scale)
    high = math.ceil((origin + size - 1.0) * scale)
    return low, high - low + 2


def _axis(origin: float, size: int, scale: float, low: int) -> list[tuple[int, float]]:
    """For each sample along an axis, its lattice cell and smoothed fraction."""
    samples = []
    for offset in range(size):
        t = (origin + offset) * scale
        cell = math.floor(t)
        samples.append((cell - low, _smoothstep(t - cell)))
    return samples


def _normalized(result: list[float], total_weight: float) -> list[float]:
    if total_weight == 0:
        return [math.nan] * len(result)
    return [value / total_weight for value in result]


def value_noise(
    origin: tuple[float, float, float],
    size: tuple[int, int, int],
    scale: tuple[float, float, float],
    p: float,
    to_add: MutableSequence[float],
    seed: int,
) -> None:
    """Add ``p`` times one octave of 3D value noise to ``to_add`` in place.

    Samples lie one unit apart from ``origin``; ``to_add`` is indexed
    ``(i * size_y + j) * size_z + k``.
    """
    (x, y, z), (size_x, size_y, size_z), (scale_x, scale_y, scale_z) = origin, size, scale
    low_x, nx = _lattice_bounds(x, size_x, scale_x)
    low_y, ny = _lattice_bounds(y, size_y, scale_y)
    low_z, nz = _lattice_bounds(z, size_z, scale_z)

    values = [
        [
            [rand_pos(low_x + i, low_y + j, low_z + k, seed) for k in range(nz)]
            for j in range(ny)
        ]
        for i in range(nx)
    ]

    xs = _axis(x, size_x, scale_x, low_x)
    ys = _axis(y, size_y, scale_y, low_y)
    zs = _axis(z, size_z, scale_z, low_z)

    for index, ((cx, fx), (cy, fy), (cz, fz)) in enumerate(product(xs, ys, zs)):
        near, far = values[cx], values[cx + 1]
        a_a = _lerp(near[cy][cz], near[cy][cz + 1], fz)
        a_b = _lerp(near[cy + 1][cz], near[cy + 1][cz + 1], fz)
        b_a = _lerp(far[cy][cz], far[cy][cz + 1], fz)
        b_b = _lerp(far[cy + 1][cz], far[cy + 1][cz + 1], fz)
        a = _lerp(a_a, a_b, fy)
        b = _lerp(b_a, b_b, fy)
        to_add[index] += p * _lerp(a, b, fx)


def perlin(
    x: float,
    y: float,
    z: float,
    size: int,
    scale_x: float,
    scale_y: float,
    scale_z: float,
    octave: int,
    persistance: float,
    seed: int,
) -> list[float]:
    """Fractal 3D noise over a cube of ``size``³ samples one unit apart.

    Each octave doubles the scale, uses the next seed and weighs
    ``persistance`` times the previous one; the sum is normalized.
    """
    result = [0.0] * (size * size * size)
    weight = 1.0
    total_weight = 0.0
    factors = (scale_x, scale_y, scale_z)
    for _ in range(octave):
        value_noise((x, y, z), (size, size, size), factors, weight, result, seed)
        factors = tuple(f * 2.0 for f in factors)
        seed = _wrap(seed + 1)
        total_weight += weight
        weight *= persistance
    return _normalized(result, total_weight)


def value_noise2d(
    origin: tuple[float, float],
    size: tuple[int, int],
    scale: tuple[float, float],
    p: float,
    to_add: MutableSequence[float],
    seed: int,
) -> None:
    """Add ``p`` times one octave of 2D value noise to ``to_add`` in place.

    ``to_add`` is indexed ``i * size_y + j``.
    """
    (x, y), (size_x, size_y), (scale_x, scale_y) = origin, size, scale
    low_x, nx = _lattice_bounds(x, size_x, scale_x)
    low_y, ny = _lattice_bounds(y, size_y, scale_y)

    values = [
        [rand_pos(low_x + i, low_y + j, 0, seed) for j in range(ny)] for i in range(nx)
    ]

    xs = _axis(x, size_x, scale_x, low_x)
    ys = _axis(y, size_y, scale_y, low_y)

    for index, ((cx, fx), (cy, fy)) in enumerate(product(xs, ys)):
        near, far = values[cx], values[cx + 1]
        a = _lerp(near[cy], near[cy + 1], fy)
        b = _lerp(far[cy], far[cy + 1], fy)
        to_add[index] += p * _lerp(a, b, fx)


def perlin2d(
    x: float,
    y: float,
    size: int,
    scale_x: float,
    scale_y: float,
    octave: int,
    persistance: float,
    seed: int,
) -> list[float]:
    """Fractal 2D noise over a square of ``size``² samples one unit apart."""
    result = [0.0] * (size * size)
    weight = 1.0
    total_weight = 0.0
    factors = (scale_x, scale_y)
    for _ in range(octave):
        value_noise2d((x, y), (size, size), factors, weight, result, seed)
        factors = (factors[0] * 2.0, factors[1] * 2.0)
        seed = _wrap(seed + 1)
        total_weight += weight
        weight *= persistance
    return _normalized(result, total_weight)


def perlin2d_with_displacement(
    dx: Sequence[float],
    dy: Sequence[float],
    d: float,
    x: float,
    y: float,
    size: int,
    scale_x: float,
    scale_y: float,
    octave: int,
    persistance: float,
    seed: int,
) -> list[float]:
    """Fractal 2D noise with each sample shifted by ``(dx - 0.5) * d``, ``(dy - 0.5) * d``."""
    result = []
    for index in range(size * size):
        sx, sy = scale_x, scale_y
        weight = 1.0
        total_weight = 0.0
        value = 0.0
        row, column = divmod(index, size)
        for octave_index in range(octave):
            px = (x + row + (dx[index] - 0.5) * d) * sx
            py = (y + column + (dy[index] - 0.5) * d) * sy
            ax, ay = math.floor(px), math.floor(py)
            fx, fy = _smoothstep(px - ax), _smoothstep(py - ay)
            octave_seed = _wrap(seed + octave_index)
            v_a = _lerp(rand_pos(ax, ay, 0, octave_seed), rand_pos(ax, ay + 1, 0, octave_seed), fy)
            v_b = _lerp(
                rand_pos(ax + 1, ay, 0, octave_seed), rand_pos(ax + 1, ay + 1, 0, octave_seed), fy
            )
            value += weight * _lerp(v_a, v_b, fx)
            sx *= 2.0
            sy *= 2.0
            total_weight += weight
            weight *= persistance
        result.append(value / total_weight if total_weight else math.nan)
    return result