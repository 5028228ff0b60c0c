"""Bitmap flag sets keep every bit of the wire value."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "python"))

from f1telem.flags import (FLAG_WIDTHS, ButtonFlags, LapValid, RevLights,
                           named_mask, unnamed_bits)


def test_raw_value_preserved():
    print("test_raw_value_preserved...", end="")

    for cls, values in ((ButtonFlags, (0, 1, 0x3, 0xFFFFFFFF, 0x80000000)),
                        (RevLights, (0, 0x7FFF, 0x8000, 0xFFFF, 0x0421)),
                        (LapValid, (0, 0x0F, 0x10, 0xFF, 0x05))):
        for raw in values:
            flags = cls(raw)
            assert int(flags) == raw, (cls.__name__, raw)
            assert isinstance(flags, cls)

    print(" OK")


def test_unnamed_bits():
    print("test_unnamed_bits...", end="")

    assert named_mask(ButtonFlags) == 0xFFFFFFFF
    assert named_mask(RevLights) == 0x7FFF
    assert named_mask(LapValid) == 0x0F

    assert unnamed_bits(RevLights(0xC001)) == 0x8000
    assert unnamed_bits(RevLights(0x8000)) == 0x8000
    assert unnamed_bits(LapValid(0x31)) == 0x30
    assert unnamed_bits(ButtonFlags(0x12345678)) == 0

    print(" OK")


def test_set_operations():
    print("test_set_operations...", end="")

    lap = LapValid(0x0B)
    assert LapValid.OVERALL in lap
    assert LapValid.SECTOR_1 in lap
    assert LapValid.SECTOR_2 not in lap
    assert LapValid.SECTOR_3 in lap
    assert lap & LapValid.SECTOR_2 == LapValid(0)
    assert lap | LapValid.SECTOR_2 == LapValid(0x0F)

    # intersection with an unnamed bit keeps it
    odd = LapValid(0x80) | LapValid.OVERALL
    assert int(odd & LapValid(0x80)) == 0x80

    lights = RevLights.LEFT_1 | RevLights.MIDDLE_3 | RevLights.RIGHT_5
    assert int(lights) == 0x4081

    print(" OK")


def test_widths():
    print("test_widths...", end="")

    assert FLAG_WIDTHS[ButtonFlags] == 4
    assert FLAG_WIDTHS[RevLights] == 2
    assert FLAG_WIDTHS[LapValid] == 1
    for cls, width in FLAG_WIDTHS.items():
        assert named_mask(cls) < 1 << (8 * width)

    print(" OK")


if __name__ == "__main__":
    print("f1telem flag tests")
    print("==================\n")

    test_raw_value_preserved()
    test_unnamed_bits()
    test_set_operations()
    test_widths()

    print("\nAll tests passed.")
