"""Event packet (id 3): a 4-byte code followed by the payload it selects.

The wire carries a fixed-size union after the code, so bytes beyond the
selected payload are filler and are left unread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..cursor import Cursor
from ..errors import UnknownEventCodeError
from ..flags import ButtonFlags
from ..layout import (BOOL, CAR_INDEX, F32, FLAGS, U8, U32, FieldDef, Record,
                      index_or_unset)

CODE_SIZE = 4


@dataclass
class SessionStarted:
    pass


@dataclass
class SessionEnded:
    pass


@dataclass
class FastestLap:
    vehicle_index: int
    lap_time: float     # seconds


@dataclass
class Retirement:
    vehicle_index: int


@dataclass
class DrsEnabled:
    pass


@dataclass
class DrsDisabled:
    pass


@dataclass
class TeamMateInPits:
    vehicle_index: int


@dataclass
class ChequeredFlag:
    pass


@dataclass
class RaceWinner:
    vehicle_index: int


@dataclass
class Penalty:
    penalty_type: int
    infringement_type: int
    vehicle_index: int
    other_vehicle_index: int    # 255 when no other car is involved
    time: int
    lap_num: int
    places_gained: int


@dataclass
class SpeedTrap:
    vehicle_index: int
    speed: float        # km/h
    is_overall_fastest_in_session: bool
    is_driver_fastest_in_session: bool
    fastest_vehicle_index_in_session: int | None    # 2023+
    fastest_speed_in_session: float | None          # 2023+


@dataclass
class StartLights:
    num_lights: int


@dataclass
class LightsOut:
    pass


@dataclass
class DriveThroughServed:
    vehicle_index: int


@dataclass
class StopGoServed:
    vehicle_index: int


@dataclass
class Flashback:
    flashback_frame_identifier: int
    flashback_session_time: float


@dataclass
class Buttons:
    button_status: ButtonFlags


@dataclass
class RedFlag:
    pass


@dataclass
class Overtake:
    overtaking_vehicle_index: int
    being_overtaken_vehicle_index: int


@dataclass
class SafetyCar:
    safety_car_type: int
    event_type: int


@dataclass
class Collision:
    vehicle1_index: int
    vehicle2_index: int


@dataclass
class Event:
    code: str
    details: Any


def _vehicle(name: str = "vehicle_index") -> FieldDef:
    return FieldDef(name, U8, check=CAR_INDEX)


def _empty(name: str, cls: type) -> Record:
    return Record(name, cls, [])


_PAYLOADS: dict[bytes, tuple[Record, int]] = {
    b"SSTA": (_empty("session started", SessionStarted), 2022),
    b"SEND": (_empty("session ended", SessionEnded), 2022),
    b"FTLP": (Record("fastest lap", FastestLap, [
        _vehicle(),
        FieldDef("lap_time", F32),
    ]), 2022),
    b"RTMT": (Record("retirement", Retirement, [_vehicle()]), 2022),
    b"DRSE": (_empty("drs enabled", DrsEnabled), 2022),
    b"DRSD": (_empty("drs disabled", DrsDisabled), 2022),
    b"TMPT": (Record("team mate in pits", TeamMateInPits, [_vehicle()]), 2022),
    b"CHQF": (_empty("chequered flag", ChequeredFlag), 2022),
    b"RCWN": (Record("race winner", RaceWinner, [_vehicle()]), 2022),
    b"PENA": (Record("penalty", Penalty, [
        FieldDef("penalty_type", U8),
        FieldDef("infringement_type", U8),
        _vehicle(),
        FieldDef("other_vehicle_index", U8, check=index_or_unset()),
        FieldDef("time", U8),
        FieldDef("lap_num", U8),
        FieldDef("places_gained", U8),
    ]), 2022),
    b"SPTP": (Record("speed trap", SpeedTrap, [
        _vehicle(),
        FieldDef("speed", F32),
        FieldDef("is_overall_fastest_in_session", BOOL),
        FieldDef("is_driver_fastest_in_session", BOOL),
        FieldDef("fastest_vehicle_index_in_session", U8, since=2023,
                 check=index_or_unset()),
        FieldDef("fastest_speed_in_session", F32, since=2023),
    ]), 2022),
    b"STLG": (Record("start lights", StartLights, [
        FieldDef("num_lights", U8),
    ]), 2022),
    b"LGOT": (_empty("lights out", LightsOut), 2022),
    b"DTSV": (Record("drive through served", DriveThroughServed,
                     [_vehicle()]), 2022),
    b"SGSV": (Record("stop go served", StopGoServed, [_vehicle()]), 2022),
    b"FLBK": (Record("flashback", Flashback, [
        FieldDef("flashback_frame_identifier", U32),
        FieldDef("flashback_session_time", F32),
    ]), 2022),
    b"BUTN": (Record("buttons", Buttons, [
        FieldDef("button_status", FLAGS, flags=ButtonFlags),
    ]), 2022),
    b"RDFL": (_empty("red flag", RedFlag), 2023),
    b"OVTK": (Record("overtake", Overtake, [
        _vehicle("overtaking_vehicle_index"),
        _vehicle("being_overtaken_vehicle_index"),
    ]), 2023),
    b"SCAR": (Record("safety car", SafetyCar, [
        FieldDef("safety_car_type", U8),
        FieldDef("event_type", U8),
    ]), 2024),
    b"COLL": (Record("collision", Collision, [
        _vehicle("vehicle1_index"),
        _vehicle("vehicle2_index"),
    ]), 2024),
}


def event_codes(packet_format: int) -> list[str]:
    """Codes the game can send in *packet_format*."""
    return [code.decode("ascii") for code, (_, since) in _PAYLOADS.items()
            if packet_format >= since]


def payload_record(code: bytes, packet_format: int) -> Record | None:
    entry = _PAYLOADS.get(bytes(code))
    if entry is None or packet_format < entry[1]:
        return None
    return entry[0]


def decode_event(cur: Cursor, packet_format: int) -> Event:
    start = cur.offset
    raw = cur.peek_bytes(CODE_SIZE)
    record = payload_record(raw, packet_format)
    if record is None:
        raise UnknownEventCodeError(raw, packet_format, start)
    code = raw.decode("ascii")
    cur.skip(CODE_SIZE)
    return Event(code=code, details=record.read(cur, packet_format))
