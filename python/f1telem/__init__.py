"""f1telem - F1 game UDP telemetry decoder and tooling."""

from .constants import PacketId, SUPPORTED_FORMATS, MAX_NUM_CARS, DEFAULT_PORT
from .errors import (DecodeError, EndOfDataError, UnsupportedFormatError,
                     UnknownPacketIdError, UnknownEventCodeError,
                     FieldRangeError, InvalidBoolError, MalformedTextError,
                     InvalidCountError)
from .flags import ButtonFlags, RevLights, LapValid
from .header import PacketHeader
from .decoder import Packet, decode
from .storage import LogWriter, LogReader, sample_name

__all__ = [
    "PacketId", "SUPPORTED_FORMATS", "MAX_NUM_CARS", "DEFAULT_PORT",
    "DecodeError", "EndOfDataError", "UnsupportedFormatError",
    "UnknownPacketIdError", "UnknownEventCodeError", "FieldRangeError",
    "InvalidBoolError", "MalformedTextError", "InvalidCountError",
    "ButtonFlags", "RevLights", "LapValid",
    "PacketHeader", "Packet", "decode",
    "LogWriter", "LogReader", "sample_name",
]
