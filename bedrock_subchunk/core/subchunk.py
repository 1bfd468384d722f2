from __future__ import annotations

import logging
import struct

from ..api.types import WATER_INDEX, BlockLayer, SubchunkRecord
from .config import DEFAULT_CONFIG, DecoderConfig
from .errors import (
    EmptyStorageRecord,
    SubchunkDecodeError,
    UnexpectedWaterLayerShape,
    UnsupportedStorageCount,
    UnsupportedVersion,
)
from .layer import encode_layer, read_layer
from .reader import ByteReader

logger = logging.getLogger(__name__)

LEGACY_VERSION = 1  # single layer, no storage count
PALETTED_VERSION = 8
SUPPORTED_VERSIONS = (LEGACY_VERSION, PALETTED_VERSION)

BLOCKS_LAYER = 0
WATER_LAYER = 1


def decode_subchunk(
    data: bytes | bytearray | memoryview, config: DecoderConfig | None = None
) -> SubchunkRecord:
    """Decode one subchunk block-storage record.

    Raises a SubchunkDecodeError subclass if the bytes are not a valid
    record. Bytes after the last storage sub-record are ignored.
    """
    config = config or DEFAULT_CONFIG
    reader = ByteReader(data)

    version = reader.read_int8(what="version")
    match version:
        case 1:
            storage_count = 1
        case 8:
            storage_count = _read_storage_count(reader)
        case _:
            raise UnsupportedVersion(
                f"Unsupported subchunk version {version}; "
                + f"expected one of {SUPPORTED_VERSIONS}.",
                offset=0,
            )
    logger.debug("Subchunk version %d with %d storage records", version, storage_count)

    blocks = _read_layer(reader, config, BLOCKS_LAYER)
    waterlogged = None
    if storage_count == 2:
        water_start = reader.offset
        waterlogged = _read_layer(reader, config, WATER_LAYER)
        if config.strict_water_layer:
            _check_water_layer(waterlogged, config, offset=water_start)

    if trailing := len(reader):
        logger.debug("Ignoring %d trailing bytes", trailing)

    return SubchunkRecord(version=version, blocks=blocks, waterlogged=waterlogged)


def _read_storage_count(reader: ByteReader) -> int:
    offset = reader.offset
    storage_count = reader.read_int8(what="storage count")
    if storage_count == 0:
        raise EmptyStorageRecord("Subchunk has no storage records.", offset=offset)
    if storage_count not in (1, 2):
        raise UnsupportedStorageCount(
            f"Unsupported storage count {storage_count}; expected 1 or 2.",
            offset=offset,
        )
    return storage_count


def _read_layer(reader: ByteReader, config: DecoderConfig, layer: int) -> BlockLayer:
    try:
        return read_layer(reader, config)
    except SubchunkDecodeError as e:
        e.layer = layer
        raise


def _check_water_layer(layer: BlockLayer, config: DecoderConfig, *, offset: int):
    palette = layer.palette
    if len(palette) > 2:
        error = UnexpectedWaterLayerShape(
            f"Waterlogging layer has {len(palette)} palette entries; at most 2 "
            + "are expected. Found: "
            + ", ".join(str(state) for state in palette),
            offset=offset,
        )
    elif len(palette) == 2 and not palette[WATER_INDEX].is_named(config.water_name):
        error = UnexpectedWaterLayerShape(
            f"Waterlogging layer has '{palette[WATER_INDEX].name}' at palette "
            + f"index {WATER_INDEX}; expected '{config.water_name}'.",
            offset=offset,
        )
    else:
        return
    error.layer = WATER_LAYER
    raise error


def encode_subchunk(record: SubchunkRecord) -> bytes:
    match record.version:
        case 1:
            if record.waterlogged is not None:
                raise ValueError("Version 1 records can only hold one layer.")
            header = struct.pack("<b", record.version)
        case 8:
            header = struct.pack("<bb", record.version, len(record.layers))
        case _:
            raise ValueError(f"Cannot encode subchunk version {record.version}.")
    return header + b"".join(encode_layer(layer) for layer in record.layers)
