"""Session packet (id 1)."""

from __future__ import annotations

from dataclasses import dataclass

from ..layout import (BOOL, F32, I8, RECORD, U8, U16, U32, FieldDef, Record,
                      Switch, at_most, fraction)


@dataclass
class MarshalZone:
    zone_start: float   # fraction of the lap, [0, 1)
    zone_flag: int


@dataclass
class WeatherForecastSample:
    session_type: int
    time_offset: int    # minutes
    weather: int
    track_temperature: int
    track_temperature_change: int
    air_temperature: int
    air_temperature_change: int
    rain_percentage: int


@dataclass
class PacketSession:
    weather: int
    track_temperature: int
    air_temperature: int
    total_laps: int
    track_length: int
    session_type: int
    track_id: int
    formula: int
    session_time_left: int
    session_duration: int
    pit_speed_limit: int
    game_paused: bool
    is_spectating: bool
    spectator_car_index: int
    sli_pro_native_support: bool
    num_marshal_zones: int
    marshal_zones: list[MarshalZone]
    safety_car_status: int
    network_game: bool
    num_weather_forecast_samples: int
    weather_forecast_samples: list[WeatherForecastSample]
    forecast_accuracy: int
    ai_difficulty: int
    season_link_identifier: int
    weekend_link_identifier: int
    session_link_identifier: int
    pit_stop_window_ideal_lap: int
    pit_stop_window_latest_lap: int
    pit_stop_rejoin_position: int
    steering_assist: bool
    braking_assist: int
    gearbox_assist: int
    pit_assist: bool
    pit_release_assist: bool
    ers_assist: bool
    drs_assist: bool
    dynamic_racing_line: int
    dynamic_racing_line_type: int
    game_mode: int
    rule_set: int
    time_of_day: int    # minutes since midnight
    session_length: int
    # 2023+
    speed_units_lead_player: int | None
    temperature_units_lead_player: int | None
    speed_units_secondary_player: int | None
    temperature_units_secondary_player: int | None
    num_safety_car_periods: int | None
    num_virtual_safety_car_periods: int | None
    num_red_flag_periods: int | None
    # 2024+
    equal_car_performance: bool | None
    recovery_mode: int | None
    flashback_limit: int | None
    surface_type: int | None
    low_fuel_mode: int | None
    race_starts: int | None
    tyre_temperature: int | None
    pit_lane_tyre_sim: int | None
    car_damage: int | None
    car_damage_rate: int | None
    collisions: int | None
    collisions_off_for_first_lap_only: bool | None
    mp_unsafe_pit_release: int | None
    mp_off_for_griefing: bool | None
    corner_cutting_stringency: int | None
    parc_ferme_rules: bool | None
    pit_stop_experience: int | None
    safety_car: int | None
    safety_car_experience: int | None
    formation_lap: bool | None
    formation_lap_experience: int | None
    red_flags: int | None
    affects_licence_level_solo: bool | None
    affects_licence_level_mp: bool | None
    num_sessions_in_weekend: int | None
    weekend_structure: list[int] | None
    sector2_lap_distance_start: float | None
    sector3_lap_distance_start: float | None


MARSHAL_ZONE = Record("marshal zone", MarshalZone, [
    FieldDef("zone_start", F32, check=fraction()),
    FieldDef("zone_flag", I8),
])

WEATHER_FORECAST_SAMPLE = Record("weather forecast sample", WeatherForecastSample, [
    FieldDef("session_type", U8),
    FieldDef("time_offset", U8),
    FieldDef("weather", U8),
    FieldDef("track_temperature", I8),
    FieldDef("track_temperature_change", I8),
    FieldDef("air_temperature", I8),
    FieldDef("air_temperature_change", I8),
    FieldDef("rain_percentage", U8, check=at_most(100)),
])

MAX_MARSHAL_ZONES = 21
MAX_WEATHER_SAMPLES = Switch(2024, 56, 64)

SESSION = Record("session", PacketSession, [
    FieldDef("weather", U8),
    FieldDef("track_temperature", I8),
    FieldDef("air_temperature", I8),
    FieldDef("total_laps", U8),
    FieldDef("track_length", U16),
    FieldDef("session_type", U8),
    FieldDef("track_id", I8),
    FieldDef("formula", U8),
    FieldDef("session_time_left", U16),
    FieldDef("session_duration", U16),
    FieldDef("pit_speed_limit", U8),
    FieldDef("game_paused", BOOL),
    FieldDef("is_spectating", BOOL),
    FieldDef("spectator_car_index", U8),
    FieldDef("sli_pro_native_support", BOOL),
    FieldDef("num_marshal_zones", U8),
    FieldDef("marshal_zones", RECORD, record=MARSHAL_ZONE,
             capacity=MAX_MARSHAL_ZONES, count_field="num_marshal_zones"),
    FieldDef("safety_car_status", U8),
    FieldDef("network_game", BOOL),
    FieldDef("num_weather_forecast_samples", U8),
    FieldDef("weather_forecast_samples", RECORD, record=WEATHER_FORECAST_SAMPLE,
             capacity=MAX_WEATHER_SAMPLES,
             count_field="num_weather_forecast_samples"),
    FieldDef("forecast_accuracy", U8),
    FieldDef("ai_difficulty", U8, check=at_most(110)),
    FieldDef("season_link_identifier", U32),
    FieldDef("weekend_link_identifier", U32),
    FieldDef("session_link_identifier", U32),
    FieldDef("pit_stop_window_ideal_lap", U8),
    FieldDef("pit_stop_window_latest_lap", U8),
    FieldDef("pit_stop_rejoin_position", U8),
    FieldDef("steering_assist", BOOL),
    FieldDef("braking_assist", U8),
    FieldDef("gearbox_assist", U8),
    FieldDef("pit_assist", BOOL),
    FieldDef("pit_release_assist", BOOL),
    FieldDef("ers_assist", BOOL),
    FieldDef("drs_assist", BOOL),
    FieldDef("dynamic_racing_line", U8),
    FieldDef("dynamic_racing_line_type", U8),
    FieldDef("game_mode", U8),
    FieldDef("rule_set", U8),
    FieldDef("time_of_day", U32),
    FieldDef("session_length", U8),
    FieldDef("speed_units_lead_player", U8, since=2023),
    FieldDef("temperature_units_lead_player", U8, since=2023),
    FieldDef("speed_units_secondary_player", U8, since=2023),
    FieldDef("temperature_units_secondary_player", U8, since=2023),
    FieldDef("num_safety_car_periods", U8, since=2023),
    FieldDef("num_virtual_safety_car_periods", U8, since=2023),
    FieldDef("num_red_flag_periods", U8, since=2023),
    FieldDef("equal_car_performance", BOOL, since=2024),
    FieldDef("recovery_mode", U8, since=2024),
    FieldDef("flashback_limit", U8, since=2024),
    FieldDef("surface_type", U8, since=2024),
    FieldDef("low_fuel_mode", U8, since=2024),
    FieldDef("race_starts", U8, since=2024),
    FieldDef("tyre_temperature", U8, since=2024),
    FieldDef("pit_lane_tyre_sim", U8, since=2024),
    FieldDef("car_damage", U8, since=2024),
    FieldDef("car_damage_rate", U8, since=2024),
    FieldDef("collisions", U8, since=2024),
    FieldDef("collisions_off_for_first_lap_only", BOOL, since=2024),
    FieldDef("mp_unsafe_pit_release", U8, since=2024),
    FieldDef("mp_off_for_griefing", BOOL, since=2024),
    FieldDef("corner_cutting_stringency", U8, since=2024),
    FieldDef("parc_ferme_rules", BOOL, since=2024),
    FieldDef("pit_stop_experience", U8, since=2024),
    FieldDef("safety_car", U8, since=2024),
    FieldDef("safety_car_experience", U8, since=2024),
    FieldDef("formation_lap", BOOL, since=2024),
    FieldDef("formation_lap_experience", U8, since=2024),
    FieldDef("red_flags", U8, since=2024),
    FieldDef("affects_licence_level_solo", BOOL, since=2024),
    FieldDef("affects_licence_level_mp", BOOL, since=2024),
    FieldDef("num_sessions_in_weekend", U8, since=2024, check=at_most(12)),
    FieldDef("weekend_structure", U8, count=12, since=2024),
    FieldDef("sector2_lap_distance_start", F32, since=2024),
    FieldDef("sector3_lap_distance_start", F32, since=2024),
])
