from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from .errors import InvalidBitWidth, UnsupportedStorageFormat
from .reader import ByteReader
from .voxel import BLOCK_COUNT

logger = logging.getLogger(__name__)

WORD_BITS = 32

# widths the game itself writes
BEDROCK_BIT_WIDTHS = (1, 2, 3, 4, 5, 6, 8, 16)


def word_layout(bits: int) -> tuple[int, int]:
    """Return (indices per word, word count) for a bits-per-index width."""
    indices_per_word = WORD_BITS // bits if bits > 0 else 0
    if not indices_per_word:
        raise InvalidBitWidth(
            f"Bits per index must be within 1-{WORD_BITS}; received {bits}."
        )
    return indices_per_word, -(-BLOCK_COUNT // indices_per_word)


def unpack_indices(reader: ByteReader) -> tuple[tuple[int, ...], int]:
    """Read one storage sub-record's header byte and packed index words.

    Returns the 4096 palette indices in storage order and the width
    they were packed with. Indices never straddle two words: when the
    width does not divide 32, the high bits of every word are padding.
    """
    start = reader.offset
    header = reader.read_uint8(what="bits-per-index header")
    if header & 1:
        raise UnsupportedStorageFormat(
            "Storage format flag is set; only save-file (persistent) storage "
            + "is supported.",
            offset=start,
        )
    bits = header >> 1
    try:
        indices_per_word, word_count = word_layout(bits)
    except InvalidBitWidth as e:
        e.offset = start
        raise

    raw = reader.read(word_count * 4, what=f"{word_count} packed index words")
    words = np.frombuffer(raw, dtype="<u4").astype(np.uint64)
    mask = np.uint64((1 << bits) - 1)

    result = np.zeros(BLOCK_COUNT, dtype=np.int64)
    for i in range(indices_per_word):
        count = (BLOCK_COUNT + indices_per_word - 1 - i) // indices_per_word
        result[i::indices_per_word] = (words[:count] >> np.uint64(bits * i)) & mask

    logger.debug(
        "Unpacked %d words at %d bits per index (%d per word)",
        word_count,
        bits,
        indices_per_word,
    )
    return tuple(result.tolist()), bits


def pack_indices(indices: Sequence[int], bits: int) -> bytes:
    """Inverse of unpack_indices: header byte followed by the packed words."""
    indices_per_word, word_count = word_layout(bits)
    values = np.asarray(indices, dtype=np.int64)
    if values.shape != (BLOCK_COUNT,):
        raise ValueError(f"Expected {BLOCK_COUNT} indices; received {values.size}.")
    if values.min() < 0 or values.max() >= 1 << bits:
        raise ValueError(f"Indices do not fit in {bits} bits.")

    padded = np.zeros(word_count * indices_per_word, dtype=np.uint64)
    padded[:BLOCK_COUNT] = values
    shifts = np.arange(indices_per_word, dtype=np.uint64) * np.uint64(bits)
    words = np.bitwise_or.reduce(
        padded.reshape(word_count, indices_per_word) << shifts, axis=1
    )
    return bytes([bits << 1]) + words.astype("<u4").tobytes()


def bits_for_palette(size: int) -> int:
    for bits in BEDROCK_BIT_WIDTHS:
        if size <= 1 << bits:
            return bits
    raise ValueError(f"Palette of {size} entries is too large to be indexed.")
