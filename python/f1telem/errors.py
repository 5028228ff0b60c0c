"""Decode errors.

Every error carries the byte offset it was raised at and renders it the same
way: ``"<what went wrong> at 0x<offset>"``.
"""

from __future__ import annotations

from typing import Any


class DecodeError(ValueError):
    """Base class for anything that makes a datagram undecodable."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at 0x{offset:x}")
        self.offset = offset


class EndOfDataError(DecodeError):
    def __init__(self, offset: int, needed: int, available: int):
        super().__init__(
            f"Unexpected end of data: needed {needed} bytes, {available} left",
            offset)
        self.needed = needed
        self.available = available


class UnsupportedFormatError(DecodeError):
    def __init__(self, packet_format: int, offset: int):
        super().__init__(
            f"Invalid or unsupported packet format: {packet_format}", offset)
        self.packet_format = packet_format


class UnknownPacketIdError(DecodeError):
    def __init__(self, packet_id: int, offset: int):
        super().__init__(f"Unknown packet id: {packet_id}", offset)
        self.packet_id = packet_id


class UnknownEventCodeError(DecodeError):
    def __init__(self, code: bytes, packet_format: int, offset: int):
        super().__init__(
            f"Unknown event code {code!r} for packet format {packet_format}",
            offset)
        self.code = code
        self.packet_format = packet_format


class FieldRangeError(DecodeError):
    def __init__(self, field: str, value: Any, expected: str, offset: int):
        super().__init__(
            f"Field {field} has an invalid value: {value} (expected {expected})",
            offset)
        self.field = field
        self.value = value
        self.expected = expected


class InvalidBoolError(DecodeError):
    def __init__(self, field: str, value: int, offset: int):
        super().__init__(f"Invalid bool value in {field}: {value}", offset)
        self.field = field
        self.value = value


class MalformedTextError(DecodeError):
    def __init__(self, field: str, raw: bytes, offset: int):
        super().__init__(f"Field {field} is not valid UTF-8: {raw!r}", offset)
        self.field = field
        self.raw = raw


class InvalidCountError(DecodeError):
    def __init__(self, field: str, count: int, capacity: int, offset: int):
        super().__init__(
            f"Field {field} has an invalid count: {count} (capacity {capacity})",
            offset)
        self.field = field
        self.count = count
        self.capacity = capacity
