"""Final classification (id 8), sent once at the end of a race."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import MAX_NUM_CARS
from ..layout import F64, RECORD, U8, U32, FieldDef, Record, RecordCheck

MAX_TYRE_STINTS = 8


@dataclass
class FinalClassificationData:
    position: int
    num_laps: int
    grid_position: int
    points: int
    num_pit_stops: int
    result_status: int
    best_lap_time_in_ms: int
    total_race_time: float      # seconds, without penalties
    penalties_time: int         # seconds
    num_penalties: int
    num_tyre_stints: int
    tyre_stints_actual: list[int]
    tyre_stints_visual: list[int]
    tyre_stints_end_laps: list[int]


@dataclass
class PacketFinalClassification:
    num_cars: int
    classification_data: list[FinalClassificationData]


CLASSIFICATION_ENTRY = Record("final classification entry",
                              FinalClassificationData, [
    FieldDef("position", U8),
    FieldDef("num_laps", U8),
    FieldDef("grid_position", U8),
    FieldDef("points", U8),
    FieldDef("num_pit_stops", U8),
    FieldDef("result_status", U8),
    FieldDef("best_lap_time_in_ms", U32),
    FieldDef("total_race_time", F64),
    FieldDef("penalties_time", U8),
    FieldDef("num_penalties", U8),
    FieldDef("num_tyre_stints", U8),
    FieldDef("tyre_stints_actual", U8, count=MAX_TYRE_STINTS),
    FieldDef("tyre_stints_visual", U8, count=MAX_TYRE_STINTS),
    FieldDef("tyre_stints_end_laps", U8, count=MAX_TYRE_STINTS),
], checks=[
    # the stint arrays are fixed, the count says how many slots are used
    RecordCheck("num_tyre_stints",
                lambda v: v["num_tyre_stints"] <= MAX_TYRE_STINTS,
                f"<= {MAX_TYRE_STINTS}"),
])

FINAL_CLASSIFICATION = Record("final classification", PacketFinalClassification, [
    FieldDef("num_cars", U8),
    FieldDef("classification_data", RECORD, record=CLASSIFICATION_ENTRY,
             capacity=MAX_NUM_CARS, count_field="num_cars"),
])
