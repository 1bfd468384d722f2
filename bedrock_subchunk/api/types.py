from __future__ import annotations

from collections.abc import Iterator

from msgspec import Struct

from ..core.voxel import XYZ, iter_voxels, to_index

BlockName = str  # "minecraft:stone"
StateValue = str | int | bool | float | list | dict
Properties = dict[str, StateValue]

DEFAULT_NAMESPACE = "minecraft"

# position of the water state in a waterlogging layer's palette
WATER_INDEX = 1


def split_name(name: BlockName) -> tuple[str, str]:
    if ":" not in name:
        return DEFAULT_NAMESPACE, name
    namespace, base_name = name.split(":", 1)
    return namespace, base_name


class BlockState(Struct, frozen=True):
    """A palette entry.

    Fields cannot be reassigned, but `states` is a plain dict and is not
    frozen; each decode builds its own, so records never share one.
    """

    name: BlockName
    states: Properties = {}
    version: int | None = None

    @property
    def namespace(self) -> str:
        return split_name(self.name)[0]

    @property
    def base_name(self) -> str:
        return split_name(self.name)[1]

    def is_named(self, name: BlockName) -> bool:
        """Compare names, treating un-namespaced names as minecraft's."""
        return split_name(self.name) == split_name(name)

    def __str__(self):
        if not self.states:
            return self.name
        props = ",".join(f"{k}={v}" for k, v in self.states.items())
        return f"{self.name}[{props}]"


class BlockLayer(Struct, frozen=True):
    indices: tuple[int, ...]
    palette: tuple[BlockState, ...]
    bits_per_index: int = 0

    def index_at(self, x: int, y: int, z: int) -> int:
        return self.indices[to_index(x, y, z)]

    def block_at(self, x: int, y: int, z: int) -> BlockState:
        return self.palette[self.index_at(x, y, z)]

    def counts(self) -> list[int]:
        """Number of voxels using each palette entry."""
        counts = [0] * len(self.palette)
        for index in self.indices:
            counts[index] += 1
        return counts

    def __iter__(self) -> Iterator[tuple[XYZ, BlockState]]:
        for coords, index in zip(iter_voxels(), self.indices):
            yield coords, self.palette[index]


class SubchunkRecord(Struct, frozen=True):
    version: int
    blocks: BlockLayer
    waterlogged: BlockLayer | None = None

    @property
    def layers(self) -> tuple[BlockLayer, ...]:
        if self.waterlogged is None:
            return (self.blocks,)
        return (self.blocks, self.waterlogged)

    def block_at(self, x: int, y: int, z: int) -> BlockState:
        return self.blocks.block_at(x, y, z)

    def is_waterlogged(self, x: int, y: int, z: int) -> bool:
        index = to_index(x, y, z)
        if self.waterlogged is None:
            return False
        return self.waterlogged.indices[index] == WATER_INDEX
