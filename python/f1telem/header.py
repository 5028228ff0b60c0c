"""Universal packet header."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import SUPPORTED_FORMATS, PacketId
from .cursor import Cursor
from .errors import UnknownPacketIdError, UnsupportedFormatError
from .layout import CAR_INDEX, F32, FieldDef, Record, U8, U16, U32, U64


@dataclass
class PacketHeader:
    packet_format: int
    game_year: int | None                 # 2023+
    game_major_version: int
    game_minor_version: int
    packet_version: int
    packet_id: PacketId
    session_uid: int
    session_time: float
    frame_identifier: int                 # goes back after a flashback
    overall_frame_identifier: int | None  # 2023+, never goes back
    player_car_index: int
    secondary_player_car_index: int       # 255 outside splitscreen


def _packet_id(value: int, offset: int) -> PacketId:
    try:
        return PacketId(value)
    except ValueError:
        raise UnknownPacketIdError(value, offset) from None


HEADER = Record("header", PacketHeader, [
    FieldDef("packet_format", U16),
    FieldDef("game_year", U8, since=2023),
    FieldDef("game_major_version", U8),
    FieldDef("game_minor_version", U8),
    FieldDef("packet_version", U8),
    FieldDef("packet_id", U8, convert=_packet_id),
    FieldDef("session_uid", U64),
    FieldDef("session_time", F32),
    FieldDef("frame_identifier", U32),
    FieldDef("overall_frame_identifier", U32, since=2023),
    FieldDef("player_car_index", U8, check=CAR_INDEX),
    FieldDef("secondary_player_car_index", U8),
])


def header_size(packet_format: int) -> int:
    """Bytes taken by the header in *packet_format* (24 or 29)."""
    return HEADER.wire_size(packet_format)


def decode_header(cur: Cursor) -> PacketHeader:
    """Decode the header at the cursor.

    The format is peeked and checked first: it selects which of the
    remaining fields are on the wire.
    """
    start = cur.offset
    packet_format = int.from_bytes(cur.peek_bytes(2), "little")
    if packet_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(packet_format, start)
    return HEADER.read(cur, packet_format)
