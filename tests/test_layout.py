"""Field engine: presence windows, checks and list policies on toy records."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "python"))

import struct
from dataclasses import dataclass

import pytest

from f1telem.cursor import Cursor
from f1telem.errors import (EndOfDataError, FieldRangeError, InvalidBoolError,
                            InvalidCountError)
from f1telem.layout import (BOOL, COUNT_THEN_PAD, COUNTED, F32, FIXED_FULL,
                            I16, RECORD, U8, U16, FieldDef, Record,
                            RecordCheck, Switch, below, within)


@dataclass
class Sample:
    id: int
    value: int
    extra: int | None


SAMPLE = Record("sample", Sample, [
    FieldDef("id", U8, check=below(10)),
    FieldDef("value", I16),
    FieldDef("extra", U8, since=2023),
])


@dataclass
class Batch:
    count: int
    samples: list
    tail: int


BATCH = Record("batch", Batch, [
    FieldDef("count", U8),
    FieldDef("samples", RECORD, record=SAMPLE, capacity=Switch(2024, 3, 4),
             count_field="count"),
    FieldDef("tail", U16),
])


def sample_bytes(fmt, id_, value, extra=0):
    if fmt < 2023:
        return struct.pack("<Bh", id_, value)
    return struct.pack("<BhB", id_, value, extra)


def test_cursor_reads():
    print("test_cursor_reads...", end="")

    cur = Cursor(struct.pack("<BhIf", 7, -2, 70000, 1.5) + b"abc\x00\xff")
    assert cur.read_u8() == 7
    assert cur.read_i16() == -2
    assert cur.read_u32() == 70000
    assert cur.read_f32() == 1.5
    assert cur.offset == 11
    assert cur.peek_bytes(2) == b"ab"
    assert cur.offset == 11
    assert cur.read_name(5, "name") == "abc"
    assert cur.remaining == 0

    with pytest.raises(EndOfDataError) as info:
        cur.read_u8()
    assert info.value.offset == 16
    assert info.value.needed == 1
    assert info.value.available == 0

    c = Cursor(b"\x00\x02")
    assert c.read_bool("flag") is False
    with pytest.raises(InvalidBoolError) as info:
        c.read_bool("flag")
    assert info.value.offset == 1
    assert info.value.value == 2

    print(" OK")


def test_presence_windows():
    print("test_presence_windows...", end="")

    f = FieldDef("x", U8, since=2023)
    assert not f.present(2022) and f.present(2023) and f.present(2024)
    f = FieldDef("x", U8, until=2022)
    assert f.present(2022) and not f.present(2023)
    f = FieldDef("x", F32, count=4)
    assert f.wire_size(2022) == 16

    assert SAMPLE.wire_size(2022) == 3
    assert SAMPLE.wire_size(2023) == 4
    s = SAMPLE.read(Cursor(sample_bytes(2022, 1, -5)), 2022)
    assert s == Sample(id=1, value=-5, extra=None)
    s = SAMPLE.read(Cursor(sample_bytes(2024, 1, 300, 9)), 2024)
    assert s == Sample(id=1, value=300, extra=9)

    print(" OK")


def test_switch():
    print("test_switch...", end="")

    sw = Switch(2024, 56, 64)
    assert sw(2022) == 56
    assert sw(2023) == 56
    assert sw(2024) == 64
    assert COUNTED(2022) is FIXED_FULL
    assert COUNTED(2023) is COUNT_THEN_PAD

    print(" OK")


def test_fixed_full_reads_every_slot():
    print("test_fixed_full_reads_every_slot...", end="")

    data = (b"\x01" + sample_bytes(2022, 1, 10) + sample_bytes(2022, 2, 20)
            + sample_bytes(2022, 3, 30) + struct.pack("<H", 0xBEEF))
    batch = BATCH.read(Cursor(data), 2022)
    assert batch.count == 1
    assert [s.value for s in batch.samples] == [10, 20, 30]
    assert batch.tail == 0xBEEF

    print(" OK")


def test_count_then_pad_skips_filler():
    print("test_count_then_pad_skips_filler...", end="")

    # 2023: capacity 3, element width 4
    data = (b"\x02" + sample_bytes(2023, 1, 10) + sample_bytes(2023, 2, 20)
            + b"\xee" * 4 + struct.pack("<H", 0xBEEF))
    cur = Cursor(data)
    batch = BATCH.read(cur, 2023)
    assert len(batch.samples) == 2
    assert batch.tail == 0xBEEF
    assert cur.remaining == 0

    # 2024: capacity grows to 4
    data = b"\x00" + b"\xee" * 16 + struct.pack("<H", 7)
    batch = BATCH.read(Cursor(data), 2024)
    assert batch.samples == []
    assert batch.tail == 7

    # filler still has to be there
    with pytest.raises(EndOfDataError):
        BATCH.read(Cursor(b"\x00" + b"\xee" * 11), 2024)

    print(" OK")


def test_count_over_capacity():
    print("test_count_over_capacity...", end="")

    for fmt in (2022, 2023):
        with pytest.raises(InvalidCountError) as info:
            BATCH.read(Cursor(b"\x04" + bytes(40)), fmt)
        assert info.value.count == 4
        assert info.value.capacity == 3
        assert info.value.offset == 0

    print(" OK")


def test_checks():
    print("test_checks...", end="")

    with pytest.raises(FieldRangeError) as info:
        SAMPLE.read(Cursor(sample_bytes(2023, 10, 0)), 2023)
    assert info.value.field == "id"
    assert info.value.value == 10
    assert str(info.value) == \
        "Field id has an invalid value: 10 (expected < 10) at 0x0"

    # list values are checked element by element
    @dataclass
    class Levels:
        levels: list

    levels = Record("levels", Levels, [
        FieldDef("levels", F32, count=3, check=within(0.0, 1.0)),
    ])
    assert levels.read(Cursor(struct.pack("<3f", 0, 0.5, 1)), 2022).levels == [0, 0.5, 1]
    with pytest.raises(FieldRangeError):
        levels.read(Cursor(struct.pack("<3f", 0, 2.0, 1)), 2022)

    print(" OK")


def test_record_checks():
    print("test_record_checks...", end="")

    @dataclass
    class Span:
        lo: int
        hi: int

    span = Record("span", Span, [
        FieldDef("lo", U8),
        FieldDef("hi", U8),
    ], checks=[RecordCheck("hi", lambda v: v["hi"] >= v["lo"], ">= lo")])

    assert span.read(Cursor(b"\x01\x02"), 2022) == Span(1, 2)
    with pytest.raises(FieldRangeError) as info:
        span.read(Cursor(b"\x05\x02"), 2022)
    assert info.value.field == "hi"
    assert info.value.offset == 1

    print(" OK")


def test_record_must_match_dataclass():
    print("test_record_must_match_dataclass...", end="")

    with pytest.raises(TypeError):
        Record("broken", Sample, [FieldDef("id", U8), FieldDef("value", I16)])
    with pytest.raises(TypeError):
        Record("broken", Sample, [FieldDef("id", U8), FieldDef("value", I16),
                                  FieldDef("extra", U8), FieldDef("more", BOOL)])

    print(" OK")


if __name__ == "__main__":
    print("f1telem layout tests")
    print("====================\n")

    test_cursor_reads()
    test_presence_windows()
    test_switch()
    test_fixed_full_reads_every_slot()
    test_count_then_pad_skips_filler()
    test_count_over_capacity()
    test_checks()
    test_record_checks()
    test_record_must_match_dataclass()

    print("\nAll tests passed.")
