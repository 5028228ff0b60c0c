"""numpy extraction of per-car fields.

entries   : the per-car entry list of a body.
car_array : one field across the entries of a single body.
car_table : several fields at once, as a dict of arrays.
series    : one field across a stream of packets, stacked by session time.

Arrays take the field's wire type (``u8`` → ``uint8``, ``f32`` →
``float32``, flags → unsigned of the flag width) unless a dtype is given.
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from .decoder import Packet
from .flags import FLAG_WIDTHS
from .layout import FieldDef, Record, WireType
from .packets.car import (CAR_DAMAGE_ENTRY, CAR_SETUP, CAR_STATUS_ENTRY,
                          CAR_TELEMETRY_ENTRY, PacketCarDamage,
                          PacketCarSetups, PacketCarStatus,
                          PacketCarTelemetry)
from .packets.classification import (CLASSIFICATION_ENTRY,
                                     PacketFinalClassification)
from .packets.history import (LAP_HISTORY, TYRE_SET, PacketSessionHistory,
                              PacketTyreSets)
from .packets.laps import LAP_DATA, PacketLaps
from .packets.motion import CAR_MOTION, PacketMotion
from .packets.participants import (LOBBY_PLAYER, PARTICIPANT,
                                   PacketLobbyInfo, PacketParticipants)

# body type -> (attribute holding its entry list, entry layout)
ENTRY_LISTS: dict[type, tuple[str, Record]] = {
    PacketMotion: ("car_motion_data", CAR_MOTION),
    PacketLaps: ("lap_data", LAP_DATA),
    PacketParticipants: ("participants", PARTICIPANT),
    PacketCarSetups: ("car_setups", CAR_SETUP),
    PacketCarTelemetry: ("car_telemetry_data", CAR_TELEMETRY_ENTRY),
    PacketCarStatus: ("car_status_data", CAR_STATUS_ENTRY),
    PacketFinalClassification: ("classification_data", CLASSIFICATION_ENTRY),
    PacketLobbyInfo: ("lobby_players", LOBBY_PLAYER),
    PacketCarDamage: ("car_damage_data", CAR_DAMAGE_ENTRY),
    PacketSessionHistory: ("lap_history_data", LAP_HISTORY),
    PacketTyreSets: ("tyre_set_data", TYRE_SET),
}

_NUMPY_DTYPE = {
    WireType.U8: np.uint8,
    WireType.U16: np.uint16,
    WireType.U32: np.uint32,
    WireType.U64: np.uint64,
    WireType.I8: np.int8,
    WireType.I16: np.int16,
    WireType.F32: np.float32,
    WireType.F64: np.float64,
    WireType.BOOL: np.bool_,
    WireType.NAME: np.str_,
}

_FLAG_DTYPE = {1: np.uint8, 2: np.uint16, 4: np.uint32}


def _lookup(body: Any) -> tuple[list[Any], Record]:
    try:
        attr, record = ENTRY_LISTS[type(body)]
    except KeyError:
        raise TypeError(f"{type(body).__name__} has no per-car entries") from None
    return getattr(body, attr), record


def entries(body: Any) -> list[Any]:
    """The per-car entry list of *body*."""
    return _lookup(body)[0]


def _field(record: Record, name: str) -> FieldDef:
    for f in record.fields:
        if f.name == name:
            return f
    raise KeyError(f"{record.name} has no field {name!r}")


def field_dtype(f: FieldDef) -> Any:
    if f.type == WireType.FLAGS:
        return _FLAG_DTYPE[FLAG_WIDTHS[f.flags]]
    if f.type == WireType.RECORD:
        raise TypeError(f"{f.name} is a nested record, not a column")
    return _NUMPY_DTYPE[f.type]


def car_array(body: Any, name: str, dtype: Any = None) -> np.ndarray:
    """Values of *name* for every entry of *body*, one row per entry.

    Wheel arrays give shape ``(n, 4)``.  A field the body's format does not
    carry raises ValueError.
    """
    rows, record = _lookup(body)
    f = _field(record, name)
    if dtype is None:
        dtype = field_dtype(f)
    values = [getattr(e, name) for e in rows]
    if any(v is None for v in values):
        raise ValueError(f"{name} is not present in this packet format")
    if f.type == WireType.FLAGS:
        values = [int(v) for v in values]
    if not values:
        shape = (0,) if f.count == 1 else (0, f.count)
        return np.empty(shape, dtype=dtype)
    return np.array(values, dtype=dtype)


def car_table(body: Any, names: Iterable[str]) -> dict[str, np.ndarray]:
    return {name: car_array(body, name) for name in names}


def series(packets: Iterable[Packet], kind: str, name: str,
           dtype: Any = None) -> tuple[np.ndarray, np.ndarray]:
    """Stack *name* from every *kind* packet in *packets*.

    Returns ``(session_time, values)``; ``values`` has one row per packet
    and one column per entry, so *kind* must have fixed-length entry lists
    (motion, laps, setups, telemetry, status, damage, tyre sets).
    """
    times: list[float] = []
    rows: list[np.ndarray] = []
    for packet in packets:
        if packet.kind != kind:
            continue
        times.append(packet.header.session_time)
        rows.append(car_array(packet.body, name, dtype))
    if not rows:
        return np.empty((0,), dtype=np.float32), np.empty((0,), dtype=dtype)
    return np.array(times, dtype=np.float32), np.stack(rows)
