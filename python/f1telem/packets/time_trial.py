"""Time trial (id 14), 2024 only."""

from __future__ import annotations

from dataclasses import dataclass

from ..layout import BOOL, CAR_INDEX, RECORD, U8, U32, FieldDef, Record


@dataclass
class TimeTrialDataSet:
    car_idx: int
    team_id: int
    lap_time_in_ms: int
    sector1_time_in_ms: int
    sector2_time_in_ms: int
    sector3_time_in_ms: int
    traction_control: int
    gearbox_assist: int
    anti_lock_brakes: bool
    equal_car_performance: bool
    custom_setup: bool
    valid: bool


@dataclass
class PacketTimeTrial:
    player_session_best_data_set: TimeTrialDataSet
    personal_best_data_set: TimeTrialDataSet
    rival_data_set: TimeTrialDataSet


TIME_TRIAL_DATA_SET = Record("time trial data set", TimeTrialDataSet, [
    FieldDef("car_idx", U8, check=CAR_INDEX),
    FieldDef("team_id", U8),
    FieldDef("lap_time_in_ms", U32),
    FieldDef("sector1_time_in_ms", U32),
    FieldDef("sector2_time_in_ms", U32),
    FieldDef("sector3_time_in_ms", U32),
    FieldDef("traction_control", U8),
    FieldDef("gearbox_assist", U8),
    FieldDef("anti_lock_brakes", BOOL),
    FieldDef("equal_car_performance", BOOL),
    FieldDef("custom_setup", BOOL),
    FieldDef("valid", BOOL),
])

TIME_TRIAL = Record("time trial", PacketTimeTrial, [
    FieldDef("player_session_best_data_set", RECORD, record=TIME_TRIAL_DATA_SET),
    FieldDef("personal_best_data_set", RECORD, record=TIME_TRIAL_DATA_SET),
    FieldDef("rival_data_set", RECORD, record=TIME_TRIAL_DATA_SET),
])
