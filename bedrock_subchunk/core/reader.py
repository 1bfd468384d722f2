from __future__ import annotations

import struct

from .errors import TruncatedData

_INT8 = struct.Struct("<b")
_UINT8 = struct.Struct("<B")
_INT32 = struct.Struct("<i")


class ByteReader:
    """Sequential little-endian reads over an immutable buffer."""

    def __init__(self, data: bytes | bytearray | memoryview):
        self._data = memoryview(data).cast("B")
        self.offset = 0

    def __len__(self):
        return len(self._data) - self.offset

    def read(self, size: int, *, what: str = "bytes") -> memoryview:
        end = self.offset + size
        if size < 0 or end > len(self._data):
            raise TruncatedData(
                f"Expected {size} bytes of {what} but only {len(self)} remain.",
                offset=self.offset,
            )
        chunk = self._data[self.offset : end]
        self.offset = end
        return chunk

    def read_int8(self, *, what: str = "byte") -> int:
        return _INT8.unpack(self.read(1, what=what))[0]

    def read_uint8(self, *, what: str = "byte") -> int:
        return _UINT8.unpack(self.read(1, what=what))[0]

    def read_int32(self, *, what: str = "int32") -> int:
        return _INT32.unpack(self.read(4, what=what))[0]

    def remaining(self) -> memoryview:
        return self._data[self.offset :]

    def skip(self, size: int) -> None:
        self.read(size)
