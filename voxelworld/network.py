"""Messages and events exchanged between client and server, with an in-memory transport."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from typing import Any, Union

from .player import PlayerId, PlayerInput, RenderDistance
from .world import Chunk, LightChunk

Vector = tuple[float, float, float]


# Messages sent to the server by the client.


@dataclass(frozen=True)
class SetRenderDistance:
    """Update the player's render distance."""

    render_distance: RenderDistance


@dataclass(frozen=True)
class UpdateInput:
    """Update the player's input."""

    input: PlayerInput


@dataclass(frozen=True)
class BreakBlock:
    """Break the block the player points at."""

    position: Vector
    yaw: float
    pitch: float


@dataclass(frozen=True)
class SelectBlock:
    """Select the block the player points at."""

    position: Vector
    yaw: float
    pitch: float


@dataclass(frozen=True)
class PlaceBlock:
    """Place a block where the player points."""

    position: Vector
    yaw: float
    pitch: float


ToServer = Union[SetRenderDistance, UpdateInput, BreakBlock, SelectBlock, PlaceBlock]


# Messages sent to the client by the server.


@dataclass(frozen=True)
class GameData:
    """The game data."""

    data: Any


@dataclass(frozen=True)
class ChunkMessage:
    """A chunk and its light."""

    chunk: Chunk
    light_chunk: LightChunk


@dataclass(frozen=True)
class UpdatePhysics:
    """The whole state of the physics simulation."""

    state: Any


@dataclass(frozen=True)
class CurrentId:
    """The id of the receiving player."""

    player_id: PlayerId


ToClient = Union[GameData, ChunkMessage, UpdatePhysics, CurrentId]


# Events.


@dataclass(frozen=True)
class NoEvent:
    """No pending events."""


@dataclass(frozen=True)
class ClientConnected:
    player_id: PlayerId


@dataclass(frozen=True)
class ClientDisconnected:
    player_id: PlayerId


@dataclass(frozen=True)
class ClientMessage:
    player_id: PlayerId
    message: ToServer


@dataclass(frozen=True)
class Connected:
    """The client connected to the server."""


@dataclass(frozen=True)
class Disconnected:
    """The client was disconnected from the server."""


@dataclass(frozen=True)
class ServerMessage:
    message: ToClient


ServerEvent = Union[NoEvent, ClientConnected, ClientDisconnected, ClientMessage]
ClientEvent = Union[NoEvent, Connected, Disconnected, ServerMessage]

_DUMMY_PLAYER = PlayerId(0)


class DummyClient:
    """Client end of an in-memory connection."""

    def __init__(
        self, to_server: queue.SimpleQueue[ToServer], to_client: queue.SimpleQueue[ToClient]
    ) -> None:
        self._first_query = True
        self._to_server = to_server
        self._to_client = to_client

    def receive_event(self) -> ClientEvent:
        """Return the next event; the first is always Connected."""
        if self._first_query:
            self._first_query = False
            return Connected()
        try:
            return ServerMessage(self._to_client.get_nowait())
        except queue.Empty:
            return NoEvent()

    def send(self, message: ToServer) -> None:
        self._to_server.put(message)


class DummyServer:
    """Server end of an in-memory connection with a single player, id 0."""

    def __init__(
        self, to_client: queue.SimpleQueue[ToClient], to_server: queue.SimpleQueue[ToServer]
    ) -> None:
        self._first_query = True
        self._to_client = to_client
        self._to_server = to_server

    def receive_event(self) -> ServerEvent:
        """Return the next event; the first is always the player connecting."""
        if self._first_query:
            self._first_query = False
            return ClientConnected(_DUMMY_PLAYER)
        try:
            return ClientMessage(_DUMMY_PLAYER, self._to_server.get_nowait())
        except queue.Empty:
            return NoEvent()

    def send(self, client: PlayerId, message: ToClient) -> None:
        self._to_client.put(message)


def dummy_pair() -> tuple[DummyClient, DummyServer]:
    """Create a connected in-memory client and server."""
    server_to_client: queue.SimpleQueue[ToClient] = queue.SimpleQueue()
    client_to_server: queue.SimpleQueue[ToServer] = queue.SimpleQueue()
    return (
        DummyClient(client_to_server, server_to_client),
        DummyServer(server_to_client, client_to_server),
    )