"""Bitmap fields.

Each class wraps one packed wire integer. They are declared with
``boundary=KEEP`` so bits without a name survive decoding: ``int(flags)``
always equals the value that was on the wire.
"""

from __future__ import annotations

from enum import KEEP, IntFlag


class ButtonFlags(IntFlag, boundary=KEEP):
    """Buttons held down, from the ``BUTN`` event (32 bits)."""

    A_OR_CROSS = 0x0000_0001
    Y_OR_TRIANGLE = 0x0000_0002
    B_OR_CIRCLE = 0x0000_0004
    X_OR_SQUARE = 0x0000_0008
    DPAD_LEFT = 0x0000_0010
    DPAD_RIGHT = 0x0000_0020
    DPAD_UP = 0x0000_0040
    DPAD_DOWN = 0x0000_0080
    MENU_OR_OPTIONS = 0x0000_0100
    LEFT_BUMPER = 0x0000_0200
    RIGHT_BUMPER = 0x0000_0400
    LEFT_TRIGGER = 0x0000_0800
    RIGHT_TRIGGER = 0x0000_1000
    LEFT_STICK_CLICK = 0x0000_2000
    RIGHT_STICK_CLICK = 0x0000_4000
    RIGHT_STICK_LEFT = 0x0000_8000
    RIGHT_STICK_RIGHT = 0x0001_0000
    RIGHT_STICK_UP = 0x0002_0000
    RIGHT_STICK_DOWN = 0x0004_0000
    SPECIAL = 0x0008_0000
    UDP_ACTION_1 = 0x0010_0000
    UDP_ACTION_2 = 0x0020_0000
    UDP_ACTION_3 = 0x0040_0000
    UDP_ACTION_4 = 0x0080_0000
    UDP_ACTION_5 = 0x0100_0000
    UDP_ACTION_6 = 0x0200_0000
    UDP_ACTION_7 = 0x0400_0000
    UDP_ACTION_8 = 0x0800_0000
    UDP_ACTION_9 = 0x1000_0000
    UDP_ACTION_10 = 0x2000_0000
    UDP_ACTION_11 = 0x4000_0000
    UDP_ACTION_12 = 0x8000_0000


class RevLights(IntFlag, boundary=KEEP):
    """Rev light LEDs lit on the steering wheel, left to right (16 bits)."""

    LEFT_1 = 0x0001
    LEFT_2 = 0x0002
    LEFT_3 = 0x0004
    LEFT_4 = 0x0008
    LEFT_5 = 0x0010
    MIDDLE_1 = 0x0020
    MIDDLE_2 = 0x0040
    MIDDLE_3 = 0x0080
    MIDDLE_4 = 0x0100
    MIDDLE_5 = 0x0200
    RIGHT_1 = 0x0400
    RIGHT_2 = 0x0800
    RIGHT_3 = 0x1000
    RIGHT_4 = 0x2000
    RIGHT_5 = 0x4000


class LapValid(IntFlag, boundary=KEEP):
    """Validity of a historical lap and its sectors (8 bits)."""

    OVERALL = 0x01
    SECTOR_1 = 0x02
    SECTOR_2 = 0x04
    SECTOR_3 = 0x08


# storage width in bytes
FLAG_WIDTHS: dict[type[IntFlag], int] = {
    ButtonFlags: 4,
    RevLights: 2,
    LapValid: 1,
}


def named_mask(cls: type[IntFlag]) -> int:
    mask = 0
    for member in cls:
        mask |= member.value
    return mask


def unnamed_bits(flags: IntFlag) -> int:
    """Bits set in *flags* that no member of its class names."""
    return int(flags) & ~named_mask(type(flags))
