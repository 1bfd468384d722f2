from __future__ import annotations

from collections.abc import Iterator

from .errors import CoordinateOutOfRange

XYZ = tuple[int, int, int]

CHUNK_SIZE = 16
BLOCK_COUNT = CHUNK_SIZE**3  # 4096


def to_index(x: int, y: int, z: int) -> int:
    """Linear storage index of a voxel.

    Y varies fastest, then Z, then X. This is the on-disk order,
    so every index read from a record must be addressed this way.
    """
    if not (0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE and 0 <= z < CHUNK_SIZE):
        raise CoordinateOutOfRange((x, y, z))
    return y + (z << 4) + (x << 8)


def to_voxel(index: int) -> XYZ:
    if not 0 <= index < BLOCK_COUNT:
        raise CoordinateOutOfRange(index)
    return (index >> 8) & 15, index & 15, (index >> 4) & 15


def iter_voxels() -> Iterator[XYZ]:
    # column by column: y, then z at the end of a column, then x
    for index in range(BLOCK_COUNT):
        yield (index >> 8) & 15, index & 15, (index >> 4) & 15
