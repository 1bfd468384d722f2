import struct

import pytest

from bedrock_subchunk import (
    BlockState,
    DecoderConfig,
    EmptyStorageRecord,
    SubchunkRecord,
    TruncatedData,
    UnexpectedWaterLayerShape,
    UnsupportedStorageCount,
    UnsupportedVersion,
    decode_subchunk,
    encode_subchunk,
)
from bedrock_subchunk.api.types import BlockLayer
from bedrock_subchunk.core.nbt import encode_compound
from bedrock_subchunk.core.voxel import BLOCK_COUNT

AIR = BlockState(name="minecraft:air")


def test_all_air_record():
    data = (
        bytes([8, 1, 4 << 1])
        + bytes(512 * 4)
        + struct.pack("<i", 1)
        + encode_compound({"name": "air"})
    )

    record = decode_subchunk(data)

    assert record.version == 8
    assert record.waterlogged is None
    assert record.blocks.palette == (BlockState(name="air"),)
    assert record.blocks.indices == (0,) * BLOCK_COUNT
    for x, y, z in [(0, 0, 0), (15, 15, 15), (3, 9, 12)]:
        assert record.block_at(x, y, z).name == "air"
        assert not record.is_waterlogged(x, y, z)


def test_stone_floor(stone_record):
    record = decode_subchunk(stone_record)

    assert record.block_at(7, 0, 7).name == "minecraft:stone"
    assert record.block_at(7, 1, 7).name == "minecraft:air"
    assert record.blocks.counts() == [BLOCK_COUNT - 256, 256]


@pytest.mark.parametrize("version", [0, 3, 9, -8])
def test_unsupported_version(stone_record, version):
    data = struct.pack("<b", version) + stone_record[1:]
    with pytest.raises(UnsupportedVersion) as exc_info:
        decode_subchunk(data)
    assert exc_info.value.offset == 0


def test_legacy_version(layer_bytes):
    data = bytes([1]) + layer_bytes(["minecraft:air", "minecraft:stone"])
    record = decode_subchunk(data)
    assert record.version == 1
    assert record.layers == (record.blocks,)


def test_empty_storage_record(stone_record):
    with pytest.raises(EmptyStorageRecord):
        decode_subchunk(bytes([8, 0]) + stone_record[2:])


@pytest.mark.parametrize("count", [3, -1, 127])
def test_unsupported_storage_count(stone_record, count):
    data = struct.pack("<bb", 8, count) + stone_record[2:]
    with pytest.raises(UnsupportedStorageCount) as exc_info:
        decode_subchunk(data)
    assert exc_info.value.offset == 1


def test_missing_storage_count():
    with pytest.raises(TruncatedData):
        decode_subchunk(bytes([8]))


def test_waterlogged_layer(waterlogged_record):
    record = decode_subchunk(waterlogged_record)

    assert record.waterlogged is not None
    assert record.waterlogged.bits_per_index == 1
    assert record.block_at(0, 0, 0).name == "minecraft:seagrass"
    assert record.is_waterlogged(0, 0, 0)
    assert not record.is_waterlogged(0, 1, 0)
    assert len(record.layers) == 2


@pytest.mark.parametrize(
    "names",
    [
        ["minecraft:air", "minecraft:water"],
        ["minecraft:lava", "minecraft:water"],
        ["air", "water"],
        ["minecraft:air"],
    ],
)
def test_water_layer_accepted(layer_bytes, names):
    data = bytes([8, 2]) + layer_bytes(["minecraft:stone"]) + layer_bytes(names)
    record = decode_subchunk(data)
    assert record.waterlogged is not None


@pytest.mark.parametrize(
    "names",
    [
        ["minecraft:air", "minecraft:water", "minecraft:lava"],
        ["minecraft:water", "minecraft:lava"],
        ["minecraft:air", "mymod:water"],
    ],
)
def test_water_layer_rejected(layer_bytes, names):
    blocks = layer_bytes(["minecraft:stone"])
    data = bytes([8, 2]) + blocks + layer_bytes(names)

    with pytest.raises(UnexpectedWaterLayerShape) as exc_info:
        decode_subchunk(data)

    assert exc_info.value.layer == 1
    assert exc_info.value.offset == 2 + len(blocks)


def test_lenient_water_layer(layer_bytes):
    names = ["minecraft:air", "minecraft:water", "minecraft:lava"]
    data = bytes([8, 2]) + layer_bytes(["minecraft:stone"]) + layer_bytes(names)
    record = decode_subchunk(data, DecoderConfig(strict_water_layer=False))
    assert record.waterlogged is not None
    assert len(record.waterlogged.palette) == 3


def test_errors_name_the_layer(layer_bytes):
    blocks = layer_bytes(["minecraft:air"])
    data = bytes([8, 2]) + blocks + layer_bytes(["minecraft:air"])[:100]

    with pytest.raises(TruncatedData) as exc_info:
        decode_subchunk(data)

    error = exc_info.value
    assert error.layer == 1
    assert error.offset == 2 + len(blocks) + 1
    assert "layer 1" in str(error)


def test_primary_layer_error(stone_record):
    with pytest.raises(TruncatedData) as exc_info:
        decode_subchunk(stone_record[:100])
    assert exc_info.value.layer == 0
    assert exc_info.value.offset == 3


def test_trailing_bytes_are_ignored(stone_record):
    assert decode_subchunk(stone_record + b"\x00" * 7) == decode_subchunk(stone_record)


def test_encode_round_trip(waterlogged_record, stone_record):
    for data in (waterlogged_record, stone_record):
        record = decode_subchunk(data)
        assert encode_subchunk(record) == data


def test_encode_legacy_version():
    layer = BlockLayer(indices=(0,) * BLOCK_COUNT, palette=(AIR,))
    data = encode_subchunk(SubchunkRecord(version=1, blocks=layer))

    assert data[0] == 1
    record = decode_subchunk(data)
    assert record.version == 1
    assert record.blocks.palette == (AIR,)
    assert record.blocks.bits_per_index == 1


def test_encode_rejects_water_layer_in_legacy_version():
    layer = BlockLayer(indices=(0,) * BLOCK_COUNT, palette=(AIR,))
    with pytest.raises(ValueError):
        encode_subchunk(SubchunkRecord(version=1, blocks=layer, waterlogged=layer))
