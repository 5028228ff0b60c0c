"""Body layouts, one record table per packet kind."""

from .motion import (CarMotionData, PacketMotion, PacketMotionEx, MOTION,
                     MOTION_EX)
from .session import (MarshalZone, WeatherForecastSample, PacketSession,
                      SESSION)
from .laps import LapData, PacketLaps, LAPS
from .event import Event, decode_event, event_codes
from .participants import (ParticipantData, PacketParticipants, LobbyInfoData,
                           PacketLobbyInfo, PARTICIPANTS, LOBBY)
from .car import (CarSetupData, PacketCarSetups, CarTelemetryData,
                  PacketCarTelemetry, CarStatusData, PacketCarStatus,
                  CarDamageData, PacketCarDamage, CAR_SETUPS, CAR_TELEMETRY,
                  CAR_STATUS, CAR_DAMAGE)
from .classification import (FinalClassificationData,
                             PacketFinalClassification, FINAL_CLASSIFICATION)
from .history import (LapHistoryData, TyreStintHistoryData,
                      PacketSessionHistory, TyreSetData, PacketTyreSets,
                      SESSION_HISTORY, TYRE_SETS)
from .time_trial import TimeTrialDataSet, PacketTimeTrial, TIME_TRIAL

__all__ = [
    "CarMotionData", "PacketMotion", "PacketMotionEx",
    "MarshalZone", "WeatherForecastSample", "PacketSession",
    "LapData", "PacketLaps",
    "Event", "decode_event", "event_codes",
    "ParticipantData", "PacketParticipants", "LobbyInfoData",
    "PacketLobbyInfo",
    "CarSetupData", "PacketCarSetups", "CarTelemetryData",
    "PacketCarTelemetry", "CarStatusData", "PacketCarStatus",
    "CarDamageData", "PacketCarDamage",
    "FinalClassificationData", "PacketFinalClassification",
    "LapHistoryData", "TyreStintHistoryData", "PacketSessionHistory",
    "TyreSetData", "PacketTyreSets",
    "TimeTrialDataSet", "PacketTimeTrial",
    "MOTION", "MOTION_EX", "SESSION", "LAPS", "PARTICIPANTS", "LOBBY",
    "CAR_SETUPS", "CAR_TELEMETRY", "CAR_STATUS", "CAR_DAMAGE",
    "FINAL_CLASSIFICATION", "SESSION_HISTORY", "TYRE_SETS", "TIME_TRIAL",
]
