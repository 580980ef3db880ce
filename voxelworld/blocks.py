"""Block and item descriptions and their meshes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

FACE_COUNT = 6


@dataclass(frozen=True)
class TextureRect:
    """A rectangle in the texture atlas, in normalized coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class BlockKind(enum.Enum):
    AIR = "Air"
    NORMAL_CUBE = "NormalCube"


@dataclass(frozen=True)
class BlockType:
    """What the author of a block provides: its kind and face texture names."""

    kind: BlockKind
    face_textures: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "face_textures", tuple(self.face_textures))
        if self.kind is BlockKind.AIR and self.face_textures:
            raise ValueError("air blocks have no face textures")


@dataclass(frozen=True)
class Block:
    """A block as held in memory."""

    name: str
    block_type: BlockType


@dataclass(frozen=True)
class BlockMesh:
    """The mesh of a block: empty, or a full cube with one texture per face."""

    textures: tuple[TextureRect, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "textures", tuple(self.textures))
        if self.textures and len(self.textures) != FACE_COUNT:
            raise ValueError(
                f"a full cube needs {FACE_COUNT} face textures, got {len(self.textures)}"
            )

    def is_opaque(self) -> bool:
        """True for full cubes, False for empty meshes."""
        return bool(self.textures)


@dataclass(frozen=True)
class ItemType:
    """What the author of an item provides: its texture name."""

    texture: str


@dataclass(frozen=True)
class Item:
    """An item as held in memory."""

    name: str
    item_type: ItemType


@dataclass(frozen=True)
class ItemMesh:
    """A mesh for an item, scaled and centred around ``mesh_center``."""

    mesh_id: int
    scale: float
    mesh_center: tuple[float, float, float]