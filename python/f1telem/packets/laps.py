"""Lap data (id 2)."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import MAX_NUM_CARS
from ..layout import (BOOL, F32, RECORD, U8, U16, U32, FieldDef, Record,
                      at_most, index_or_unset)

_MS_PER_MINUTE = 60_000


def split_time_ms(ms_part: int, minutes_part: int | None) -> int:
    """Join a millisecond part and an optional whole-minute part."""
    return ms_part + (minutes_part or 0) * _MS_PER_MINUTE


@dataclass
class LapData:
    last_lap_time_ms: int
    current_lap_time_ms: int
    # a plain millisecond value in 2022, split with a minute part from 2023
    sector1_time_ms_part: int
    sector1_time_minutes_part: int | None
    sector2_time_ms_part: int
    sector2_time_minutes_part: int | None
    delta_to_car_in_front_ms_part: int | None       # 2023+
    delta_to_car_in_front_minutes_part: int | None  # 2024+
    delta_to_race_leader_ms_part: int | None        # 2023+
    delta_to_race_leader_minutes_part: int | None   # 2024+
    lap_distance: float
    total_distance: float
    safety_car_delta: float
    car_position: int
    current_lap_num: int
    pit_status: int
    num_pit_stops: int
    sector: int
    current_lap_invalid: bool
    penalties: int
    total_warnings: int
    corner_cutting_warnings: int | None             # 2023+
    num_unserved_drive_through_pens: int
    num_unserved_stop_go_pens: int
    grid_position: int
    driver_status: int
    result_status: int
    pit_lane_timer_active: bool
    pit_lane_time_in_lane_ms: int
    pit_stop_timer_ms: int
    pit_stop_should_serve_pen: bool
    speed_trap_fastest_speed: float | None          # 2024+
    speed_trap_fastest_lap: int | None              # 2024+, 255 = not set

    @property
    def sector1_time_ms(self) -> int:
        return split_time_ms(self.sector1_time_ms_part,
                             self.sector1_time_minutes_part)

    @property
    def sector2_time_ms(self) -> int:
        return split_time_ms(self.sector2_time_ms_part,
                             self.sector2_time_minutes_part)


@dataclass
class PacketLaps:
    lap_data: list[LapData]
    time_trial_pb_car_index: int        # 255 if invalid
    time_trial_rival_car_index: int     # 255 if invalid


LAP_DATA = Record("lap data", LapData, [
    FieldDef("last_lap_time_ms", U32),
    FieldDef("current_lap_time_ms", U32),
    FieldDef("sector1_time_ms_part", U16),
    FieldDef("sector1_time_minutes_part", U8, since=2023),
    FieldDef("sector2_time_ms_part", U16),
    FieldDef("sector2_time_minutes_part", U8, since=2023),
    FieldDef("delta_to_car_in_front_ms_part", U16, since=2023),
    FieldDef("delta_to_car_in_front_minutes_part", U8, since=2024),
    FieldDef("delta_to_race_leader_ms_part", U16, since=2023),
    FieldDef("delta_to_race_leader_minutes_part", U8, since=2024),
    FieldDef("lap_distance", F32),
    FieldDef("total_distance", F32),
    FieldDef("safety_car_delta", F32),
    FieldDef("car_position", U8),
    FieldDef("current_lap_num", U8),
    FieldDef("pit_status", U8),
    FieldDef("num_pit_stops", U8),
    FieldDef("sector", U8, check=at_most(2)),
    FieldDef("current_lap_invalid", BOOL),
    FieldDef("penalties", U8),
    FieldDef("total_warnings", U8),
    FieldDef("corner_cutting_warnings", U8, since=2023),
    FieldDef("num_unserved_drive_through_pens", U8),
    FieldDef("num_unserved_stop_go_pens", U8),
    FieldDef("grid_position", U8),
    FieldDef("driver_status", U8),
    FieldDef("result_status", U8),
    FieldDef("pit_lane_timer_active", BOOL),
    FieldDef("pit_lane_time_in_lane_ms", U16),
    FieldDef("pit_stop_timer_ms", U16),
    FieldDef("pit_stop_should_serve_pen", BOOL),
    FieldDef("speed_trap_fastest_speed", F32, since=2024),
    FieldDef("speed_trap_fastest_lap", U8, since=2024),
])

LAPS = Record("laps", PacketLaps, [
    FieldDef("lap_data", RECORD, count=MAX_NUM_CARS, record=LAP_DATA),
    FieldDef("time_trial_pb_car_index", U8, check=index_or_unset()),
    FieldDef("time_trial_rival_car_index", U8, check=index_or_unset()),
])
