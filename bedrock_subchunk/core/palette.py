from __future__ import annotations

import logging
import struct
from collections.abc import Sequence

from ..api.types import BlockState
from .config import DEFAULT_CONFIG, DecoderConfig
from .errors import (
    MalformedPaletteEntry,
    NegativePaletteSize,
    PaletteSizeMismatch,
    PaletteTooLarge,
    TruncatedData,
)
from .nbt import encode_compound
from .reader import ByteReader

logger = logging.getLogger(__name__)


def decode_palette(
    reader: ByteReader, config: DecoderConfig = DEFAULT_CONFIG
) -> tuple[BlockState, ...]:
    """Read a palette size and that many block states.

    The reader is left right after the last entry, since a second
    storage sub-record may follow.
    """
    start = reader.offset
    size = reader.read_int32(what="palette size")
    if size < 0:
        raise NegativePaletteSize(f"Palette size is negative: {size}.", offset=start)
    if size > config.max_palette_size:
        raise PaletteTooLarge(
            f"Palette declares {size} entries; at most "
            + f"{config.max_palette_size} are allowed.",
            offset=start,
        )

    entries_start = reader.offset
    try:
        entries, consumed = config.parse_tag_list(reader.remaining(), size)
    except (MalformedPaletteEntry, TruncatedData) as e:
        e.offset = entries_start
        raise
    if len(entries) != size:
        raise PaletteSizeMismatch(
            f"Palette declares {size} entries but {len(entries)} were found.",
            offset=entries_start,
        )
    reader.skip(consumed)

    palette = tuple(
        _to_block_state(entry, position, entries_start)
        for position, entry in enumerate(entries)
    )
    logger.debug("Decoded palette of %d entries (%d bytes)", size, consumed)
    return palette


def _to_block_state(entry: dict, position: int, offset: int) -> BlockState:
    name = entry.get("name")
    if not isinstance(name, str):
        raise MalformedPaletteEntry(
            f"Palette entry {position} has no name.", offset=offset
        )

    states = entry.get("states", {})
    if not isinstance(states, dict):
        raise MalformedPaletteEntry(
            f"Palette entry {position} ({name}) has states that are not a compound.",
            offset=offset,
        )

    version = entry.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        version = None

    return BlockState(name=name, states=states, version=version)


def encode_palette(palette: Sequence[BlockState]) -> bytes:
    chunks = [struct.pack("<i", len(palette))]
    for state in palette:
        entry: dict = {"name": state.name, "states": dict(state.states)}
        if state.version is not None:
            entry["version"] = state.version
        chunks.append(encode_compound(entry))
    return b"".join(chunks)
