"""Session history (id 11) and tyre sets (id 12)."""

from __future__ import annotations

from dataclasses import dataclass

from ..flags import LapValid
from ..layout import (BOOL, CAR_INDEX, FLAGS, I16, PERCENT, RECORD, U8, U16,
                      U32, FieldDef, Record)
from .laps import split_time_ms

MAX_LAPS = 100
MAX_TYRE_STINTS = 8
NUM_TYRE_SETS = 20  # 13 dry + 7 wet


@dataclass
class LapHistoryData:
    lap_time_in_ms: int
    sector1_time_ms_part: int
    sector1_time_minutes_part: int | None   # 2023+
    sector2_time_ms_part: int
    sector2_time_minutes_part: int | None   # 2023+
    sector3_time_ms_part: int
    sector3_time_minutes_part: int | None   # 2023+
    lap_valid_bit_flags: LapValid

    @property
    def sector1_time_ms(self) -> int:
        return split_time_ms(self.sector1_time_ms_part,
                             self.sector1_time_minutes_part)

    @property
    def sector2_time_ms(self) -> int:
        return split_time_ms(self.sector2_time_ms_part,
                             self.sector2_time_minutes_part)

    @property
    def sector3_time_ms(self) -> int:
        return split_time_ms(self.sector3_time_ms_part,
                             self.sector3_time_minutes_part)


@dataclass
class TyreStintHistoryData:
    end_lap: int    # 255 for the current tyre
    tyre_actual_compound: int
    tyre_visual_compound: int


@dataclass
class PacketSessionHistory:
    car_idx: int
    num_laps: int
    num_tyre_stints: int
    best_lap_time_lap_num: int
    best_sector1_lap_num: int
    best_sector2_lap_num: int
    best_sector3_lap_num: int
    lap_history_data: list[LapHistoryData]
    tyre_stints_history_data: list[TyreStintHistoryData]


LAP_HISTORY = Record("lap history", LapHistoryData, [
    FieldDef("lap_time_in_ms", U32),
    FieldDef("sector1_time_ms_part", U16),
    FieldDef("sector1_time_minutes_part", U8, since=2023),
    FieldDef("sector2_time_ms_part", U16),
    FieldDef("sector2_time_minutes_part", U8, since=2023),
    FieldDef("sector3_time_ms_part", U16),
    FieldDef("sector3_time_minutes_part", U8, since=2023),
    FieldDef("lap_valid_bit_flags", FLAGS, flags=LapValid),
])

TYRE_STINT_HISTORY = Record("tyre stint history", TyreStintHistoryData, [
    FieldDef("end_lap", U8),
    FieldDef("tyre_actual_compound", U8),
    FieldDef("tyre_visual_compound", U8),
])

SESSION_HISTORY = Record("session history", PacketSessionHistory, [
    FieldDef("car_idx", U8, check=CAR_INDEX),
    FieldDef("num_laps", U8),
    FieldDef("num_tyre_stints", U8),
    FieldDef("best_lap_time_lap_num", U8),
    FieldDef("best_sector1_lap_num", U8),
    FieldDef("best_sector2_lap_num", U8),
    FieldDef("best_sector3_lap_num", U8),
    FieldDef("lap_history_data", RECORD, record=LAP_HISTORY,
             capacity=MAX_LAPS, count_field="num_laps"),
    FieldDef("tyre_stints_history_data", RECORD, record=TYRE_STINT_HISTORY,
             capacity=MAX_TYRE_STINTS, count_field="num_tyre_stints"),
])


@dataclass
class TyreSetData:
    actual_tyre_compound: int
    visual_tyre_compound: int
    wear: int               # percent
    available: bool
    recommended_session: int
    life_span: int          # laps left
    usable_life: int        # max recommended laps
    lap_delta_time: int     # ms, compared to the fitted set
    fitted: bool


@dataclass
class PacketTyreSets:
    car_idx: int
    tyre_set_data: list[TyreSetData]
    fitted_idx: int


TYRE_SET = Record("tyre set", TyreSetData, [
    FieldDef("actual_tyre_compound", U8),
    FieldDef("visual_tyre_compound", U8),
    FieldDef("wear", U8, check=PERCENT),
    FieldDef("available", BOOL),
    FieldDef("recommended_session", U8),
    FieldDef("life_span", U8),
    FieldDef("usable_life", U8),
    FieldDef("lap_delta_time", I16),
    FieldDef("fitted", BOOL),
])

TYRE_SETS = Record("tyre sets", PacketTyreSets, [
    FieldDef("car_idx", U8, check=CAR_INDEX),
    FieldDef("tyre_set_data", RECORD, count=NUM_TYRE_SETS, record=TYRE_SET),
    FieldDef("fitted_idx", U8),
])
