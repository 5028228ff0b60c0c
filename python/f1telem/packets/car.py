"""Per-car setups (5), telemetry (6), status (7) and damage (10).

Every body here is a plain array of 22 entries, one per car slot.
Wheel arrays are ordered RL, RR, FL, FR.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import MAX_NUM_CARS
from ..flags import RevLights
from ..layout import (BOOL, F32, FLAGS, I8, PERCENT, RECORD, U8, U16,
                      FieldDef, Record, at_most, within)


# ---------------------------------------------------------------------------
# Car setups
# ---------------------------------------------------------------------------

@dataclass
class CarSetupData:
    front_wing: int
    rear_wing: int
    on_throttle: int        # differential, percent
    off_throttle: int
    front_camber: float
    rear_camber: float
    front_toe: float
    rear_toe: float
    front_suspension: int
    rear_suspension: int
    front_anti_roll_bar: int
    rear_anti_roll_bar: int
    front_suspension_height: int
    rear_suspension_height: int
    brake_pressure: int     # percent
    brake_bias: int
    engine_braking: int | None      # 2024+
    rear_left_tyre_pressure: float
    rear_right_tyre_pressure: float
    front_left_tyre_pressure: float
    front_right_tyre_pressure: float
    ballast: int
    fuel_load: float


@dataclass
class PacketCarSetups:
    car_setups: list[CarSetupData]
    next_front_wing_value: float | None     # 2024+, after a pit stop


CAR_SETUP = Record("car setup", CarSetupData, [
    FieldDef("front_wing", U8),
    FieldDef("rear_wing", U8),
    FieldDef("on_throttle", U8, check=PERCENT),
    FieldDef("off_throttle", U8, check=PERCENT),
    FieldDef("front_camber", F32),
    FieldDef("rear_camber", F32),
    FieldDef("front_toe", F32),
    FieldDef("rear_toe", F32),
    FieldDef("front_suspension", U8),
    FieldDef("rear_suspension", U8),
    FieldDef("front_anti_roll_bar", U8),
    FieldDef("rear_anti_roll_bar", U8),
    FieldDef("front_suspension_height", U8),
    FieldDef("rear_suspension_height", U8),
    FieldDef("brake_pressure", U8, check=PERCENT),
    FieldDef("brake_bias", U8),
    FieldDef("engine_braking", U8, since=2024),
    FieldDef("rear_left_tyre_pressure", F32),
    FieldDef("rear_right_tyre_pressure", F32),
    FieldDef("front_left_tyre_pressure", F32),
    FieldDef("front_right_tyre_pressure", F32),
    FieldDef("ballast", U8),
    FieldDef("fuel_load", F32),
])

CAR_SETUPS = Record("car setups", PacketCarSetups, [
    FieldDef("car_setups", RECORD, count=MAX_NUM_CARS, record=CAR_SETUP),
    FieldDef("next_front_wing_value", F32, since=2024),
])


# ---------------------------------------------------------------------------
# Car telemetry
# ---------------------------------------------------------------------------

@dataclass
class CarTelemetryData:
    speed: int              # km/h
    throttle: float
    steer: float
    brake: float
    clutch: int
    gear: int               # -1 reverse, 0 neutral
    engine_rpm: int
    drs: int
    rev_lights_percent: int
    rev_lights_bit_value: RevLights
    brakes_temperature: list[int]
    tyres_surface_temperature: list[int]
    tyres_inner_temperature: list[int]
    engine_temperature: int
    tyres_pressure: list[float]
    surface_type: list[int]


@dataclass
class PacketCarTelemetry:
    car_telemetry_data: list[CarTelemetryData]
    mfd_panel_index: int                    # 255 when closed
    mfd_panel_index_secondary_player: int
    suggested_gear: int                     # 0 when no suggestion


GEAR = within(-1, 8)

CAR_TELEMETRY_ENTRY = Record("car telemetry", CarTelemetryData, [
    FieldDef("speed", U16),
    FieldDef("throttle", F32, check=within(0.0, 1.0)),
    FieldDef("steer", F32, check=within(-1.0, 1.0)),
    FieldDef("brake", F32, check=within(0.0, 1.0)),
    FieldDef("clutch", U8, check=PERCENT),
    FieldDef("gear", I8, check=GEAR),
    FieldDef("engine_rpm", U16),
    FieldDef("drs", U8),
    FieldDef("rev_lights_percent", U8, check=PERCENT),
    FieldDef("rev_lights_bit_value", FLAGS, flags=RevLights),
    FieldDef("brakes_temperature", U16, count=4),
    FieldDef("tyres_surface_temperature", U8, count=4),
    FieldDef("tyres_inner_temperature", U8, count=4),
    FieldDef("engine_temperature", U16),
    FieldDef("tyres_pressure", F32, count=4),
    FieldDef("surface_type", U8, count=4),
])

CAR_TELEMETRY = Record("car telemetry packet", PacketCarTelemetry, [
    FieldDef("car_telemetry_data", RECORD, count=MAX_NUM_CARS,
             record=CAR_TELEMETRY_ENTRY),
    FieldDef("mfd_panel_index", U8),
    FieldDef("mfd_panel_index_secondary_player", U8),
    FieldDef("suggested_gear", I8, check=GEAR),
])


# ---------------------------------------------------------------------------
# Car status
# ---------------------------------------------------------------------------

@dataclass
class CarStatusData:
    traction_control: int
    anti_lock_brakes: bool
    fuel_mix: int
    front_brake_bias: int
    pit_limiter_status: bool
    fuel_in_tank: float
    fuel_capacity: float
    fuel_remaining_laps: float
    max_rpm: int
    idle_rpm: int
    max_gears: int
    drs_allowed: int
    drs_activation_distance: int    # metres, 0 when not available
    actual_tyre_compound: int
    visual_tyre_compound: int
    tyres_age_laps: int
    vehicle_fia_flags: int          # -1 invalid/unknown
    engine_power_ice: float | None  # 2023+, watts
    engine_power_mguk: float | None  # 2023+, watts
    ers_store_energy: float
    ers_deploy_mode: int
    ers_harvested_this_lap_mguk: float
    ers_harvested_this_lap_mguh: float
    ers_deployed_this_lap: float
    network_paused: bool


@dataclass
class PacketCarStatus:
    car_status_data: list[CarStatusData]


CAR_STATUS_ENTRY = Record("car status", CarStatusData, [
    FieldDef("traction_control", U8),
    FieldDef("anti_lock_brakes", BOOL),
    FieldDef("fuel_mix", U8),
    FieldDef("front_brake_bias", U8),
    FieldDef("pit_limiter_status", BOOL),
    FieldDef("fuel_in_tank", F32),
    FieldDef("fuel_capacity", F32),
    FieldDef("fuel_remaining_laps", F32),
    FieldDef("max_rpm", U16),
    FieldDef("idle_rpm", U16),
    FieldDef("max_gears", U8, check=at_most(9)),
    FieldDef("drs_allowed", U8),
    FieldDef("drs_activation_distance", U16),
    FieldDef("actual_tyre_compound", U8),
    FieldDef("visual_tyre_compound", U8),
    FieldDef("tyres_age_laps", U8),
    FieldDef("vehicle_fia_flags", I8),
    FieldDef("engine_power_ice", F32, since=2023),
    FieldDef("engine_power_mguk", F32, since=2023),
    FieldDef("ers_store_energy", F32),
    FieldDef("ers_deploy_mode", U8),
    FieldDef("ers_harvested_this_lap_mguk", F32),
    FieldDef("ers_harvested_this_lap_mguh", F32),
    FieldDef("ers_deployed_this_lap", F32),
    FieldDef("network_paused", BOOL),
])

CAR_STATUS = Record("car status packet", PacketCarStatus, [
    FieldDef("car_status_data", RECORD, count=MAX_NUM_CARS,
             record=CAR_STATUS_ENTRY),
])


# ---------------------------------------------------------------------------
# Car damage
# ---------------------------------------------------------------------------

@dataclass
class CarDamageData:
    tyres_wear: list[float]     # percent
    tyres_damage: list[int]
    brakes_damage: list[int]
    front_left_wing_damage: int
    front_right_wing_damage: int
    rear_wing_damage: int
    floor_damage: int
    diffuser_damage: int
    sidepod_damage: int
    drs_fault: bool
    ers_fault: bool
    gear_box_damage: int
    engine_damage: int
    engine_mguh_wear: int
    engine_es_wear: int
    engine_ce_wear: int
    engine_ice_wear: int
    engine_mguk_wear: int
    engine_tc_wear: int
    engine_blown: bool
    engine_seized: bool


@dataclass
class PacketCarDamage:
    car_damage_data: list[CarDamageData]


CAR_DAMAGE_ENTRY = Record("car damage", CarDamageData, [
    FieldDef("tyres_wear", F32, count=4),
    FieldDef("tyres_damage", U8, count=4),
    FieldDef("brakes_damage", U8, count=4),
    FieldDef("front_left_wing_damage", U8),
    FieldDef("front_right_wing_damage", U8),
    FieldDef("rear_wing_damage", U8),
    FieldDef("floor_damage", U8),
    FieldDef("diffuser_damage", U8),
    FieldDef("sidepod_damage", U8),
    FieldDef("drs_fault", BOOL),
    FieldDef("ers_fault", BOOL),
    FieldDef("gear_box_damage", U8),
    FieldDef("engine_damage", U8),
    FieldDef("engine_mguh_wear", U8),
    FieldDef("engine_es_wear", U8),
    FieldDef("engine_ce_wear", U8),
    FieldDef("engine_ice_wear", U8),
    FieldDef("engine_mguk_wear", U8),
    FieldDef("engine_tc_wear", U8),
    FieldDef("engine_blown", BOOL),
    FieldDef("engine_seized", BOOL),
])

CAR_DAMAGE = Record("car damage packet", PacketCarDamage, [
    FieldDef("car_damage_data", RECORD, count=MAX_NUM_CARS,
             record=CAR_DAMAGE_ENTRY),
])
