from __future__ import annotations


class SubchunkError(Exception): ...


class CoordinateOutOfRange(SubchunkError, ValueError):
    def __init__(self, value: object):
        super().__init__(
            f"{value} is outside the subchunk; coordinates must be within 0-15 "
            + "and indices within 0-4095"
        )
        self.value = value


class SubchunkDecodeError(SubchunkError):
    """Raised when a record's bytes do not describe a valid subchunk.

    `offset` is the byte position where the problem was detected and
    `layer` the storage sub-record being decoded (0 for blocks, 1 for
    the waterlogging layer), when known.
    """

    def __init__(self, message: str, *, offset: int | None = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.layer: int | None = None

    def __str__(self):
        context = []
        if self.layer is not None:
            context.append(f"layer {self.layer}")
        if self.offset is not None:
            context.append(f"byte {self.offset}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class UnsupportedVersion(SubchunkDecodeError): ...


class UnsupportedStorageFormat(SubchunkDecodeError): ...


class UnsupportedStorageCount(SubchunkDecodeError): ...


class EmptyStorageRecord(SubchunkDecodeError): ...


class InvalidBitWidth(SubchunkDecodeError): ...


class TruncatedData(SubchunkDecodeError): ...


class NegativePaletteSize(SubchunkDecodeError): ...


class PaletteTooLarge(SubchunkDecodeError): ...


class MalformedPaletteEntry(SubchunkDecodeError): ...


class PaletteSizeMismatch(SubchunkDecodeError): ...


class IndexOutOfPaletteRange(SubchunkDecodeError): ...


class UnexpectedWaterLayerShape(SubchunkDecodeError): ...
