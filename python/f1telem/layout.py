"""Versioned record layouts and the field engine that reads them.

A :class:`Record` pairs a dataclass with an ordered table of
:class:`FieldDef` entries.  Each field carries its own presence window
(``since`` / ``until``), so the three wire generations of a record are read
from one table:

    FieldDef("sector1_time_ms_part", U16),
    FieldDef("sector1_time_minutes_part", U8, since=2023),

Fields absent from the active format decode to ``None``.  The same format
value is passed to every nested record of a body.

Count-prefixed lists use one of two :class:`ListPolicy` strategies:

- ``FIXED_FULL``: every slot up to capacity is on the wire and is decoded.
- ``COUNT_THEN_PAD``: ``count`` entries are decoded and the unused capacity
  is skipped, ``(capacity - count) * record.wire_size(format)`` bytes.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields as dataclass_fields
from enum import IntEnum, IntFlag
from typing import Any, Callable

from .constants import MAX_NUM_CARS, UNSET_INDEX
from .cursor import Cursor
from .errors import FieldRangeError, InvalidCountError
from .flags import FLAG_WIDTHS


class WireType(IntEnum):
    U8 = 0
    U16 = 1
    U32 = 2
    U64 = 3
    I8 = 4
    I16 = 5
    F32 = 6
    F64 = 7
    BOOL = 8
    NAME = 9
    FLAGS = 10
    RECORD = 11


U8 = WireType.U8
U16 = WireType.U16
U32 = WireType.U32
U64 = WireType.U64
I8 = WireType.I8
I16 = WireType.I16
F32 = WireType.F32
F64 = WireType.F64
BOOL = WireType.BOOL
NAME = WireType.NAME
FLAGS = WireType.FLAGS
RECORD = WireType.RECORD

# struct format chars indexed by WireType (little-endian base)
_TYPE_FMT = {
    WireType.U8: "B",
    WireType.U16: "H",
    WireType.U32: "I",
    WireType.U64: "Q",
    WireType.I8: "b",
    WireType.I16: "h",
    WireType.F32: "f",
    WireType.F64: "d",
    WireType.BOOL: "B",
    WireType.NAME: None,    # fixed-size buffer, FieldDef.size bytes
    WireType.FLAGS: None,   # handled by width: 1→B, 2→H, 4→I
    WireType.RECORD: None,  # nested layout
}

_FLAG_FMT = {1: "B", 2: "H", 4: "I"}


# ---------------------------------------------------------------------------
# Format switches and checks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Switch:
    """A value that changes at a format threshold.

    ``before`` applies to formats older than ``at``, ``after`` from ``at`` on.
    """

    at: int
    before: Any
    after: Any

    def __call__(self, packet_format: int) -> Any:
        return self.after if packet_format >= self.at else self.before


def resolve(value: Any, packet_format: int) -> Any:
    if isinstance(value, Switch):
        return value(packet_format)
    return value


@dataclass(frozen=True)
class Check:
    """Range assertion evaluated right after a field is decoded."""

    test: Callable[[Any], bool]
    expected: str

    def apply(self, name: str, value: Any, offset: int) -> None:
        for v in value if isinstance(value, list) else (value,):
            if not self.test(v):
                raise FieldRangeError(name, v, self.expected, offset)


@dataclass(frozen=True)
class RecordCheck:
    """Cross-field assertion evaluated once a whole record is decoded.

    Failures are reported against ``field``.
    """

    field: str
    test: Callable[[dict[str, Any]], bool]
    expected: str


def below(limit: int) -> Check:
    return Check(lambda v: v < limit, f"< {limit}")


def at_most(limit: int) -> Check:
    return Check(lambda v: v <= limit, f"<= {limit}")


def within(lo: float, hi: float) -> Check:
    return Check(lambda v: lo <= v <= hi, f"in [{lo}, {hi}]")


def fraction() -> Check:
    return Check(lambda v: 0.0 <= v < 1.0, "in [0, 1)")


def index_or_unset(limit: int = MAX_NUM_CARS) -> Check:
    return Check(lambda v: v < limit or v == UNSET_INDEX,
                 f"< {limit} or {UNSET_INDEX}")


CAR_INDEX = below(MAX_NUM_CARS)
PERCENT = at_most(100)


# ---------------------------------------------------------------------------
# List policies
# ---------------------------------------------------------------------------

class ListPolicy:
    name = "abstract"

    def read(self, cur: Cursor, record: Record, packet_format: int,
             capacity: int, count: int) -> list[Any]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<ListPolicy {self.name}>"


class FixedFull(ListPolicy):
    """Every slot up to capacity is serialised; all of them are decoded."""

    name = "fixed-full"

    def read(self, cur, record, packet_format, capacity, count):
        return [record.read(cur, packet_format) for _ in range(capacity)]


class CountThenPad(ListPolicy):
    """Only ``count`` entries are decoded; filler up to capacity is skipped."""

    name = "count-then-pad"

    def read(self, cur, record, packet_format, capacity, count):
        items = [record.read(cur, packet_format) for _ in range(count)]
        cur.skip((capacity - count) * record.wire_size(packet_format))
        return items


FIXED_FULL = FixedFull()
COUNT_THEN_PAD = CountThenPad()

# 2022 lists are read in full; from 2023 on only the counted prefix
COUNTED = Switch(2023, FIXED_FULL, COUNT_THEN_PAD)


# ---------------------------------------------------------------------------
# Fields and records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldDef:
    name: str
    type: WireType
    count: int = 1
    since: int | None = None
    until: int | None = None
    check: Check | None = None
    size: int = 0
    flags: type[IntFlag] | None = None
    record: Record | None = None
    # maps (raw value, offset) to the stored value, may raise DecodeError
    convert: Callable[[Any, int], Any] | None = None
    # count-prefixed lists only
    capacity: int | Switch | None = None
    count_field: str | None = None
    policy: ListPolicy | Switch = COUNTED

    def present(self, packet_format: int) -> bool:
        if self.since is not None and packet_format < self.since:
            return False
        if self.until is not None and packet_format > self.until:
            return False
        return True

    def wire_size(self, packet_format: int) -> int:
        """Bytes this field occupies on the wire in *packet_format*."""
        if not self.present(packet_format):
            return 0
        if self.type == WireType.RECORD:
            assert self.record is not None
            slots = (resolve(self.capacity, packet_format)
                     if self.capacity is not None else self.count)
            return slots * self.record.wire_size(packet_format)
        if self.type == WireType.NAME:
            return self.size
        if self.type == WireType.FLAGS:
            return FLAG_WIDTHS[self.flags]
        return struct.calcsize("<" + _TYPE_FMT[self.type]) * self.count

    def read(self, cur: Cursor, packet_format: int,
             values: dict[str, Any], offsets: dict[str, int]) -> Any:
        if self.type == WireType.RECORD:
            assert self.record is not None
            if self.capacity is not None:
                return self._read_list(cur, packet_format, values, offsets)
            if self.count == 1:
                return self.record.read(cur, packet_format)
            return [self.record.read(cur, packet_format)
                    for _ in range(self.count)]

        if self.type == WireType.NAME:
            return cur.read_name(self.size, self.name)

        if self.type == WireType.BOOL:
            if self.count == 1:
                return cur.read_bool(self.name)
            return [cur.read_bool(self.name) for _ in range(self.count)]

        if self.type == WireType.FLAGS:
            raw = cur.unpack(_FLAG_FMT[FLAG_WIDTHS[self.flags]])[0]
            return self.flags(raw)

        fmt_char = _TYPE_FMT[self.type]
        if self.count > 1:
            return list(cur.unpack(f"{self.count}{fmt_char}"))
        return cur.unpack(fmt_char)[0]

    def _read_list(self, cur: Cursor, packet_format: int,
                   values: dict[str, Any], offsets: dict[str, int]) -> list[Any]:
        assert self.record is not None and self.count_field is not None
        count = values[self.count_field]
        capacity = resolve(self.capacity, packet_format)
        if count > capacity:
            raise InvalidCountError(self.count_field, count, capacity,
                                    offsets[self.count_field])
        policy = resolve(self.policy, packet_format)
        return policy.read(cur, self.record, packet_format, capacity, count)


@dataclass
class Record:
    """A dataclass plus the versioned field table that fills it."""

    name: str
    cls: type
    fields: list[FieldDef]
    checks: list[RecordCheck] = field(default_factory=list)

    def __post_init__(self):
        declared = [f.name for f in dataclass_fields(self.cls)]
        listed = [f.name for f in self.fields]
        if sorted(declared) != sorted(listed):
            missing = set(declared) ^ set(listed)
            raise TypeError(
                f"{self.name} layout does not match {self.cls.__name__}: "
                f"{sorted(missing)}")

    def wire_size(self, packet_format: int) -> int:
        return sum(f.wire_size(packet_format) for f in self.fields)

    def read(self, cur: Cursor, packet_format: int) -> Any:
        """Decode one instance of this record at the cursor."""
        values: dict[str, Any] = {}
        offsets: dict[str, int] = {}
        for f in self.fields:
            if not f.present(packet_format):
                values[f.name] = None
                continue
            offsets[f.name] = cur.offset
            value = f.read(cur, packet_format, values, offsets)
            if f.convert is not None:
                value = f.convert(value, offsets[f.name])
            if f.check is not None:
                f.check.apply(f.name, value, offsets[f.name])
            values[f.name] = value

        for rc in self.checks:
            if values.get(rc.field) is None:
                continue
            if not rc.test(values):
                raise FieldRangeError(rc.field, values[rc.field], rc.expected,
                                      offsets[rc.field])

        return self.cls(**values)
