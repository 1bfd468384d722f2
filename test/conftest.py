import struct

import pytest

from bedrock_subchunk.core.nbt import encode_compound
from bedrock_subchunk.core.packing import pack_indices
from bedrock_subchunk.core.voxel import BLOCK_COUNT


@pytest.fixture
def palette_bytes():
    def encode(*entries: dict) -> bytes:
        return struct.pack("<i", len(entries)) + b"".join(
            encode_compound(entry) for entry in entries
        )

    return encode


@pytest.fixture
def layer_bytes(palette_bytes):
    def encode(names: list[str], indices=None, bits: int = 4) -> bytes:
        if indices is None:
            indices = [0] * BLOCK_COUNT
        entries = ({"name": name, "states": {}} for name in names)
        return pack_indices(indices, bits) + palette_bytes(*entries)

    return encode


@pytest.fixture
def stone_record(layer_bytes) -> bytes:
    # air everywhere except a stone floor at y == 0
    indices = [1 if i % 16 == 0 else 0 for i in range(BLOCK_COUNT)]
    return bytes([8, 1]) + layer_bytes(["minecraft:air", "minecraft:stone"], indices)


@pytest.fixture
def waterlogged_record(layer_bytes) -> bytes:
    blocks = layer_bytes(["minecraft:air", "minecraft:seagrass"], [1] * BLOCK_COUNT)
    # only the voxel at (0, 0, 0) is submerged
    water = layer_bytes(
        ["minecraft:air", "minecraft:water"], [1] + [0] * (BLOCK_COUNT - 1), bits=1
    )
    return bytes([8, 2]) + blocks + water
