"""The physics simulation on the server and its prediction on the client."""

from __future__ import annotations

import time as _time
from copy import copy, deepcopy
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

from .aabb import BlockContainer, Vec3
from .camera import default_camera
from .physics_player import PhysicsPlayer
from .player import PlayerId, PlayerInput

Duration = Union[float, timedelta]


def _seconds(dt: Duration) -> float:
    return dt.total_seconds() if isinstance(dt, timedelta) else float(dt)


def _elapsed(earlier: float, later: float) -> float:
    return max(0.0, later - earlier)


@dataclass
class SimulationInput:
    """The inputs of every connected player."""

    player_inputs: dict[PlayerId, PlayerInput] = field(default_factory=dict)


@dataclass
class PhysicsState:
    """The physical state of every player."""

    players: dict[PlayerId, PhysicsPlayer] = field(default_factory=dict)

    def step_simulation(
        self, input: SimulationInput, dt: Duration, world: BlockContainer
    ) -> None:
        """Move every player with an input by ``dt`` (seconds or timedelta).

        Players without an input are removed; new ones start at the default.
        """
        seconds = _seconds(dt)
        for player_id, player_input in input.player_inputs.items():
            player = self.players.setdefault(player_id, PhysicsPlayer())
            default_camera(player, player_input, seconds, world)
        self.players = {
            player_id: player
            for player_id, player in self.players.items()
            if player_id in input.player_inputs
        }


@dataclass
class ServerState:
    """A physics state as sent by the server, with its time and inputs."""

    physics_state: PhysicsState
    server_time: float
    input: SimulationInput


class ClientPhysicsSimulation:
    """Predicts the client's physics between server updates."""

    def __init__(self, server_state: ServerState, player_id: PlayerId) -> None:
        self._client_inputs: list[tuple[float, PlayerInput]] = []
        self._last_server_state = deepcopy(server_state)
        self._current_state = deepcopy(server_state.physics_state)
        self._needs_recomputing = False
        self._player_id = player_id

    def receive_server_update(self, state: ServerState) -> None:
        """Take a new server state; inputs not newer than it are dropped."""
        self._last_server_state = deepcopy(state)
        self._client_inputs = [
            (moment, player_input)
            for moment, player_input in self._client_inputs
            if moment > state.server_time
        ]
        self._needs_recomputing = True

    def camera_position(self) -> Vec3:
        return self.player().camera_position()

    def player(self) -> PhysicsPlayer:
        """The client's own player; KeyError if it is not simulated."""
        return self._current_state.players[self._player_id]

    def step_simulation(
        self, input: PlayerInput, time: float, world: BlockContainer
    ) -> None:
        """Advance to ``time`` with ``input``, replaying inputs after an update."""
        server = self._last_server_state
        if self._needs_recomputing:
            self._needs_recomputing = False
            self._current_state = deepcopy(server.physics_state)
            previous = server.server_time
            for moment, player_input in self._client_inputs:
                server.input.player_inputs[self._player_id] = player_input
                self._current_state.step_simulation(
                    server.input, _elapsed(previous, moment), world
                )
                previous = moment

        previous = self._client_inputs[-1][0] if self._client_inputs else server.server_time
        player_input = copy(input)
        self._client_inputs.append((time, player_input))
        server.input.player_inputs[self._player_id] = player_input
        self._current_state.step_simulation(server.input, _elapsed(previous, time), world)


class ServerPhysicsSimulation:
    """The authoritative simulation, starting with no players."""

    def __init__(self, start_time: float | None = None) -> None:
        self._server_state = ServerState(
            physics_state=PhysicsState(),
            server_time=_time.monotonic() if start_time is None else start_time,
            input=SimulationInput(),
        )

    def set_player_input(self, player_id: PlayerId, input: PlayerInput) -> None:
        self._server_state.input.player_inputs[player_id] = copy(input)

    def remove(self, player_id: PlayerId) -> None:
        """Stop simulating a player; it disappears at the next step."""
        self._server_state.input.player_inputs.pop(player_id, None)

    def step_simulation(self, time: float, world: BlockContainer) -> None:
        """Advance the simulation to ``time``."""
        state = self._server_state
        state.physics_state.step_simulation(
            state.input, _elapsed(state.server_time, time), world
        )
        state.server_time = time

    def state(self) -> ServerState:
        return self._server_state