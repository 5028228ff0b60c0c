"""Datagram decoder: header first, then the one body the header names."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable

from .constants import PACKET_SINCE, PacketId
from .cursor import Cursor
from .header import PacketHeader, decode_header
from .packets import (CAR_DAMAGE, CAR_SETUPS, CAR_STATUS, CAR_TELEMETRY,
                      FINAL_CLASSIFICATION, LAPS, LOBBY, MOTION, MOTION_EX,
                      PARTICIPANTS, SESSION, SESSION_HISTORY, TIME_TRIAL,
                      TYRE_SETS, Event, PacketCarDamage, PacketCarSetups,
                      PacketCarStatus, PacketCarTelemetry,
                      PacketFinalClassification, PacketLaps, PacketLobbyInfo,
                      PacketMotion, PacketMotionEx, PacketParticipants,
                      PacketSession, PacketSessionHistory, PacketTimeTrial,
                      PacketTyreSets, decode_event)

logger = logging.getLogger(__name__)


@dataclass
class Packet:
    """A decoded datagram.

    Exactly one body slot is set; ``header.packet_id`` says which.
    """

    header: PacketHeader
    motion: PacketMotion | None = None
    session: PacketSession | None = None
    laps: PacketLaps | None = None
    event: Event | None = None
    participants: PacketParticipants | None = None
    car_setups: PacketCarSetups | None = None
    car_telemetry: PacketCarTelemetry | None = None
    car_status: PacketCarStatus | None = None
    final_classification: PacketFinalClassification | None = None
    lobby: PacketLobbyInfo | None = None
    car_damage: PacketCarDamage | None = None
    session_history: PacketSessionHistory | None = None
    tyre_sets: PacketTyreSets | None = None
    motion_ex: PacketMotionEx | None = None
    time_trial: PacketTimeTrial | None = None

    @property
    def kind(self) -> str:
        """Name of the populated body slot."""
        return BODY_SLOTS[self.header.packet_id]

    @property
    def body(self) -> Any:
        return getattr(self, self.kind)


# packet id -> (slot on Packet, body reader taking (cursor, format))
BODY_DECODERS: dict[PacketId, tuple[str, Callable[[Cursor, int], Any]]] = {
    PacketId.MOTION: ("motion", MOTION.read),
    PacketId.SESSION: ("session", SESSION.read),
    PacketId.LAPS: ("laps", LAPS.read),
    PacketId.EVENT: ("event", decode_event),
    PacketId.PARTICIPANTS: ("participants", PARTICIPANTS.read),
    PacketId.CAR_SETUPS: ("car_setups", CAR_SETUPS.read),
    PacketId.CAR_TELEMETRY: ("car_telemetry", CAR_TELEMETRY.read),
    PacketId.CAR_STATUS: ("car_status", CAR_STATUS.read),
    PacketId.FINAL_CLASSIFICATION: ("final_classification",
                                    FINAL_CLASSIFICATION.read),
    PacketId.LOBBY: ("lobby", LOBBY.read),
    PacketId.CAR_DAMAGE: ("car_damage", CAR_DAMAGE.read),
    PacketId.SESSION_HISTORY: ("session_history", SESSION_HISTORY.read),
    PacketId.TYRE_SETS: ("tyre_sets", TYRE_SETS.read),
    PacketId.MOTION_EX: ("motion_ex", MOTION_EX.read),
    PacketId.TIME_TRIAL: ("time_trial", TIME_TRIAL.read),
}

BODY_SLOTS: dict[PacketId, str] = {
    pid: slot for pid, (slot, _) in BODY_DECODERS.items()}

assert set(BODY_SLOTS.values()) == {
    f.name for f in fields(Packet) if f.name != "header"}


def decode(data: bytes | bytearray | memoryview) -> Packet:
    """Decode one datagram.

    Raises a :class:`~f1telem.errors.DecodeError` subclass on the first
    problem found; nothing partial is returned.  Bytes left over after the
    body are ignored.
    """
    cur = Cursor(data)
    header = decode_header(cur)
    if header.packet_format < PACKET_SINCE.get(header.packet_id, 0):
        logger.debug("%s in format %d, before the game sent it",
                     header.packet_id.name, header.packet_format)
    slot, read_body = BODY_DECODERS[header.packet_id]
    body = read_body(cur, header.packet_format)

    if cur.remaining:
        logger.debug("%s %d: %d trailing bytes", header.packet_id.name,
                     header.packet_format, cur.remaining)
    return Packet(header=header, **{slot: body})
