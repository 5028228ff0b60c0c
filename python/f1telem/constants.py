"""Wire-level constants shared by the decoders."""

from __future__ import annotations

from enum import IntEnum

SUPPORTED_FORMATS = (2022, 2023, 2024)

MAX_NUM_CARS = 22
# index fields use this to mean "no car"
UNSET_INDEX = 255

NAME_SIZE = 48
DEFAULT_PORT = 20777


class PacketId(IntEnum):
    MOTION = 0
    SESSION = 1
    LAPS = 2
    EVENT = 3
    PARTICIPANTS = 4
    CAR_SETUPS = 5
    CAR_TELEMETRY = 6
    CAR_STATUS = 7
    FINAL_CLASSIFICATION = 8
    LOBBY = 9
    CAR_DAMAGE = 10
    SESSION_HISTORY = 11
    TYRE_SETS = 12
    MOTION_EX = 13
    TIME_TRIAL = 14


# first format the game emits each kind in
PACKET_SINCE = {
    PacketId.TYRE_SETS: 2023,
    PacketId.MOTION_EX: 2023,
    PacketId.TIME_TRIAL: 2024,
}
