"""How a player's body reacts to that player's input."""

from __future__ import annotations

import math
from dataclasses import replace

from .aabb import BlockContainer, Vec3
from .debug import send_debug_info
from .physics_player import PhysicsPlayer
from .player import PlayerInput

ACCELERATION = 50.0
MAX_SPEED = 30.0
JUMP_SPEED = 8.0
GRAVITY_ACCELERATION = 25.0
MAX_DOWN_SPEED = 30.0
HORIZONTAL_SPEED = 7.0


def _movement_direction(yaw: float, angle: float) -> Vec3:
    radians = math.radians(yaw + angle)
    return Vec3(-math.sin(radians), 0.0, -math.cos(radians)).normalize()


def _normalize_or_zero(v: Vec3) -> Vec3:
    return v.normalize() if v.norm() > 1e-9 else Vec3()


def _wished_direction(input: PlayerInput) -> Vec3:
    total = Vec3()
    for pressed, angle in (
        (input.key_move_forward, 0.0),
        (input.key_move_left, 90.0),
        (input.key_move_backward, 180.0),
        (input.key_move_right, 270.0),
    ):
        if pressed:
            total = total + _movement_direction(input.yaw, angle)
    return total


def default_camera(
    player: PhysicsPlayer,
    input: PlayerInput,
    seconds_delta: float,
    world: BlockContainer,
) -> None:
    """Move ``player`` for one tick of ``seconds_delta`` seconds.

    Flying players, and players stuck inside blocks, accelerate freely;
    the others walk, jump and fall. Blocks stop a player unless it is
    already inside them.
    """
    if input.flying or player.aabb.intersect_world(world):
        velocity = replace(player.velocity, y=0.0)
        auto_acceleration = -_normalize_or_zero(velocity)
        wished = _normalize_or_zero(_wished_direction(input))
        acceleration = (wished * 1.5 + auto_acceleration * 0.5) * ACCELERATION
        velocity = velocity + acceleration * seconds_delta
        speed = velocity.norm()
        if speed > MAX_SPEED:
            velocity = velocity * (MAX_SPEED / speed)
        player.velocity = velocity
        movement = velocity * seconds_delta
        if input.key_move_up:
            movement = replace(movement, y=movement.y + seconds_delta * MAX_SPEED)
        if input.key_move_down:
            movement = replace(movement, y=movement.y - seconds_delta * MAX_SPEED)
        player.aabb.move_check_collision(world, movement)
    else:
        horizontal = _normalize_or_zero(_wished_direction(input)) * HORIZONTAL_SPEED
        if player.aabb.is_on_the_ground(world):
            vertical = JUMP_SPEED if input.key_move_up else 0.0
        else:
            vertical = max(
                player.velocity.y - GRAVITY_ACCELERATION * seconds_delta,
                -MAX_DOWN_SPEED,
            )
        player.velocity = Vec3(0.0, vertical, 0.0)
        movement = (player.velocity + horizontal) * seconds_delta
        player.aabb.move_check_collision(world, movement)

    on_ground = "true" if player.aabb.is_on_the_ground(world) else "false"
    send_debug_info("Physics", "ontheground", f"Player 0 on the ground? {on_ground}")
    vx, vy, vz = player.velocity
    send_debug_info("Physics", "velocity", f"velocity: {vx:.2f} {vy:.2f} {vz:.2f}")