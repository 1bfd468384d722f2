from __future__ import annotations

import logging

from ..api.types import BlockLayer
from .config import DEFAULT_CONFIG, DecoderConfig
from .errors import IndexOutOfPaletteRange
from .packing import bits_for_palette, pack_indices, unpack_indices
from .palette import decode_palette, encode_palette
from .reader import ByteReader
from .voxel import to_voxel

logger = logging.getLogger(__name__)


def read_layer(reader: ByteReader, config: DecoderConfig = DEFAULT_CONFIG) -> BlockLayer:
    # indices precede the palette on the wire
    start = reader.offset
    indices, bits = unpack_indices(reader)
    palette = decode_palette(reader, config)

    highest = max(indices)
    if highest >= len(palette):
        voxel = to_voxel(indices.index(highest))
        raise IndexOutOfPaletteRange(
            f"Voxel {voxel} refers to palette entry {highest}, "
            + f"but the palette only has {len(palette)} entries.",
            offset=start,
        )

    logger.debug(
        "Read layer of %d bytes: %d bits per index, %d palette entries",
        reader.offset - start,
        bits,
        len(palette),
    )
    return BlockLayer(indices=indices, palette=palette, bits_per_index=bits)


def encode_layer(layer: BlockLayer, bits: int | None = None) -> bytes:
    if layer.indices and max(layer.indices) >= len(layer.palette):
        raise IndexOutOfPaletteRange(
            f"Layer refers to palette entry {max(layer.indices)}, "
            + f"but the palette only has {len(layer.palette)} entries."
        )
    if bits is None:
        bits = layer.bits_per_index or bits_for_palette(len(layer.palette))
    return pack_indices(layer.indices, bits) + encode_palette(layer.palette)
