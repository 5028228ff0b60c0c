"""Sequential little-endian reads over an immutable buffer."""

from __future__ import annotations

import struct
from functools import lru_cache

from .errors import EndOfDataError, InvalidBoolError, MalformedTextError


@lru_cache(maxsize=None)
def _struct(fmt: str) -> struct.Struct:
    return struct.Struct("<" + fmt)


class Cursor:
    """Read position over a datagram.

    All reads are little-endian and raise :class:`EndOfDataError` (carrying
    the offset the read started at) when the buffer is too short.
    """

    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0):
        self._data = bytes(data)
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _require(self, n: int) -> None:
        if n > self.remaining:
            raise EndOfDataError(self._offset, n, self.remaining)

    def unpack(self, fmt: str) -> tuple:
        """Read a struct format (without byte-order prefix) and advance."""
        s = _struct(fmt)
        self._require(s.size)
        values = s.unpack_from(self._data, self._offset)
        self._offset += s.size
        return values

    def read_u8(self) -> int:
        return self.unpack("B")[0]

    def read_u16(self) -> int:
        return self.unpack("H")[0]

    def read_u32(self) -> int:
        return self.unpack("I")[0]

    def read_u64(self) -> int:
        return self.unpack("Q")[0]

    def read_i8(self) -> int:
        return self.unpack("b")[0]

    def read_i16(self) -> int:
        return self.unpack("h")[0]

    def read_f32(self) -> float:
        return self.unpack("f")[0]

    def read_f64(self) -> float:
        return self.unpack("d")[0]

    def read_bytes(self, n: int) -> bytes:
        raw = self.peek_bytes(n)
        self._offset += n
        return raw

    def peek_bytes(self, n: int) -> bytes:
        """Return the next *n* bytes without moving the cursor."""
        self._require(n)
        return self._data[self._offset:self._offset + n]

    def skip(self, n: int) -> None:
        self._require(n)
        self._offset += n

    # ------------------------------------------------------------------
    # Typed reads with validation
    # ------------------------------------------------------------------

    def read_bool(self, field: str) -> bool:
        """Read a byte that must be exactly 0 or 1."""
        start = self._offset
        value = self.read_u8()
        if value not in (0, 1):
            raise InvalidBoolError(field, value, start)
        return value == 1

    def read_name(self, size: int, field: str) -> str:
        """Decode a NUL-terminated UTF-8 string from a fixed-size field."""
        start = self._offset
        raw = self.read_bytes(size).split(b"\x00", 1)[0]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedTextError(field, raw, start) from None
