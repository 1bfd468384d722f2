__version__ = "0.1.0"

from .api.types import BlockLayer, BlockState, SubchunkRecord  # noqa: E402
from .core.config import DEFAULT_CONFIG, DecoderConfig  # noqa: E402
from .core.errors import (  # noqa: E402
    CoordinateOutOfRange,
    EmptyStorageRecord,
    IndexOutOfPaletteRange,
    InvalidBitWidth,
    MalformedPaletteEntry,
    NegativePaletteSize,
    PaletteSizeMismatch,
    PaletteTooLarge,
    SubchunkDecodeError,
    SubchunkError,
    TruncatedData,
    UnexpectedWaterLayerShape,
    UnsupportedStorageCount,
    UnsupportedStorageFormat,
    UnsupportedVersion,
)
from .core.subchunk import decode_subchunk, encode_subchunk  # noqa: E402
from .core.voxel import BLOCK_COUNT, CHUNK_SIZE, to_index, to_voxel  # noqa: E402
