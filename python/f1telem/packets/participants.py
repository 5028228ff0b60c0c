"""Participants (id 4) and multiplayer lobby info (id 9)."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import MAX_NUM_CARS, NAME_SIZE
from ..layout import BOOL, NAME, RECORD, U8, U16, FieldDef, Record


@dataclass
class ParticipantData:
    ai_controlled: bool
    driver_id: int          # 255 for network humans
    network_id: int
    team_id: int
    my_team: bool
    race_number: int
    nationality: int
    name: str
    your_telemetry: int     # 0 restricted, 1 public
    show_online_names: bool | None  # 2023+
    tech_level: int | None          # 2024+
    platform: int | None            # 2023+


@dataclass
class PacketParticipants:
    num_active_cars: int
    participants: list[ParticipantData]


@dataclass
class LobbyInfoData:
    ai_controlled: bool
    team_id: int
    nationality: int
    platform: int | None            # 2023+
    name: str
    car_number: int
    your_telemetry: int | None      # 2024+
    show_online_names: bool | None  # 2024+
    tech_level: int | None          # 2024+
    ready_status: int


@dataclass
class PacketLobbyInfo:
    num_players: int
    lobby_players: list[LobbyInfoData]


PARTICIPANT = Record("participant", ParticipantData, [
    FieldDef("ai_controlled", BOOL),
    FieldDef("driver_id", U8),
    FieldDef("network_id", U8),
    FieldDef("team_id", U8),
    FieldDef("my_team", BOOL),
    FieldDef("race_number", U8),
    FieldDef("nationality", U8),
    FieldDef("name", NAME, size=NAME_SIZE),
    FieldDef("your_telemetry", U8),
    FieldDef("show_online_names", BOOL, since=2023),
    FieldDef("tech_level", U16, since=2024),
    FieldDef("platform", U8, since=2023),
])

PARTICIPANTS = Record("participants", PacketParticipants, [
    FieldDef("num_active_cars", U8),
    FieldDef("participants", RECORD, record=PARTICIPANT,
             capacity=MAX_NUM_CARS, count_field="num_active_cars"),
])

LOBBY_PLAYER = Record("lobby player", LobbyInfoData, [
    FieldDef("ai_controlled", BOOL),
    FieldDef("team_id", U8),
    FieldDef("nationality", U8),
    FieldDef("platform", U8, since=2023),
    FieldDef("name", NAME, size=NAME_SIZE),
    FieldDef("car_number", U8),
    FieldDef("your_telemetry", U8, since=2024),
    FieldDef("show_online_names", BOOL, since=2024),
    FieldDef("tech_level", U16, since=2024),
    FieldDef("ready_status", U8),
])

LOBBY = Record("lobby", PacketLobbyInfo, [
    FieldDef("num_players", U8),
    FieldDef("lobby_players", RECORD, record=LOBBY_PLAYER,
             capacity=MAX_NUM_CARS, count_field="num_players"),
])
