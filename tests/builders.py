"""struct.pack helpers that build synthetic datagrams for the tests.

Formats here are written out by hand from the game's published layouts and
do not use f1telem's record tables, so a mistake in a table shows up as a
size or value mismatch.
"""

import struct

FORMATS = (2022, 2023, 2024)

# total datagram size per format and packet id
PACKET_SIZES = {
    2022: {0: 1464, 1: 632, 2: 972, 4: 1257, 5: 1102, 6: 1347, 7: 1058,
           8: 1015, 9: 1191, 10: 948, 11: 1155},
    2023: {0: 1349, 1: 644, 2: 1131, 4: 1306, 5: 1107, 6: 1352, 7: 1239,
           8: 1020, 9: 1218, 10: 953, 11: 1460, 12: 231, 13: 217},
    2024: {0: 1349, 1: 753, 2: 1285, 4: 1350, 5: 1133, 6: 1352, 7: 1239,
           8: 1020, 9: 1306, 10: 953, 11: 1460, 12: 231, 13: 237, 14: 101},
}

# formats where the game actually sends the kind; older ones reuse its layout
KIND_IDS = sorted({pid for sizes in PACKET_SIZES.values() for pid in sizes})

EVENT_UNION_SIZE = 12

HEADER_2022 = "<HBBBBQfIBB"
HEADER_2023 = "<HBBBBBQfIIBB"


def header_size(fmt):
    return struct.calcsize(HEADER_2022 if fmt == 2022 else HEADER_2023)


def header(fmt, packet_id, *, player=0, secondary=255, frame=7,
           overall_frame=9, session_time=12.5, session_uid=0xDEADBEEF):
    if fmt == 2022:
        return struct.pack(HEADER_2022, fmt, 1, 18, 1, packet_id,
                           session_uid, session_time, frame, player, secondary)
    return struct.pack(HEADER_2023, fmt, fmt % 100, 1, 18, 1, packet_id,
                       session_uid, session_time, frame, overall_frame,
                       player, secondary)


def packet(fmt, packet_id, body=b"", **kw):
    """Header + body, zero-padded to the kind's full size for *fmt*."""
    data = header(fmt, packet_id, **kw) + body
    size = _full_size(fmt, packet_id)
    assert len(data) <= size, f"body too long: {len(data)} > {size}"
    return data + bytes(size - len(data))


def _full_size(fmt, packet_id):
    if packet_id in PACKET_SIZES[fmt]:
        return PACKET_SIZES[fmt][packet_id]
    # a kind the game did not send yet in fmt: same body as the next format,
    # which for the header-size step from 2022 means shifting by 5
    later = min(f for f in FORMATS if packet_id in PACKET_SIZES[f])
    return (PACKET_SIZES[later][packet_id]
            - header_size(later) + header_size(fmt))


def expected_size(fmt, packet_id):
    """Bytes the decoder needs for the kind in *fmt*."""
    if packet_id == 3:
        return header_size(fmt) + 4
    if packet_id == 13 and fmt == 2022:
        return header_size(fmt) + 120
    return _full_size(fmt, packet_id)


def blank(fmt, packet_id, **kw):
    """A zero-filled body of the right size; events get a session start."""
    if packet_id == 3:
        return event(fmt, b"SSTA", **kw)
    if packet_id == 13 and fmt == 2022:
        return header(fmt, packet_id, **kw) + bytes(120)
    return packet(fmt, packet_id, **kw)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

def event(fmt, code, payload=b"", pad=True, **kw):
    """Event datagram: code + payload, filler up to the union size."""
    assert len(code) == 4 and len(payload) <= EVENT_UNION_SIZE
    data = header(fmt, 3, **kw) + code + payload
    if pad:
        data += bytes(EVENT_UNION_SIZE - len(payload))
    return data


def speed_trap(fmt, vehicle, speed, overall, driver, fastest_vehicle=255,
               fastest_speed=0.0):
    payload = struct.pack("<BfBB", vehicle, speed, overall, driver)
    if fmt >= 2023:
        payload += struct.pack("<Bf", fastest_vehicle, fastest_speed)
    return event(fmt, b"SPTP", payload)


# ---------------------------------------------------------------------------
# Lap data
# ---------------------------------------------------------------------------

def lap_data_entry(fmt, *, last_lap=90_000, current_lap=30_000,
                   sector1_ms=25_000, sector1_min=0, sector2_ms=27_500,
                   sector2_min=0, position=1, lap_num=3, sector=1,
                   invalid=0):
    out = struct.pack("<II", last_lap, current_lap)
    if fmt == 2022:
        out += struct.pack("<HH", sector1_ms, sector2_ms)
    else:
        out += struct.pack("<HBHB", sector1_ms, sector1_min,
                           sector2_ms, sector2_min)
        if fmt == 2023:
            out += struct.pack("<HH", 1200, 5400)
        else:
            out += struct.pack("<HBHB", 1200, 0, 5400, 1)
    out += struct.pack("<fff", 123.0, 4567.0, 0.0)
    out += struct.pack("<BBBBBB", position, lap_num, 0, 0, sector, invalid)
    out += struct.pack("<BB", 0, 2)             # penalties, total warnings
    if fmt >= 2023:
        out += struct.pack("<B", 1)             # corner cutting warnings
    out += struct.pack("<BBBBB", 0, 0, position, 4, 2)
    out += struct.pack("<BHHB", 0, 0, 0, 0)
    if fmt >= 2024:
        out += struct.pack("<fB", 321.5, 2)
    return out


def laps(fmt, entries=None, pb_index=255, rival_index=255, **kw):
    entries = entries or [lap_data_entry(fmt) for _ in range(22)]
    body = b"".join(entries) + struct.pack("<BB", pb_index, rival_index)
    return packet(fmt, 2, body, **kw)


# ---------------------------------------------------------------------------
# Participants / lobby
# ---------------------------------------------------------------------------

def name_field(name):
    raw = name.encode("utf-8") if isinstance(name, str) else name
    return raw.ljust(48, b"\x00")


def participant(fmt, name="", *, ai=1, driver_id=9, team_id=3, race_number=44,
                nationality=10, telemetry=1, show_names=1, tech_level=1500,
                platform=255):
    out = struct.pack("<BBBBBBB", ai, driver_id, 255, team_id, 0, race_number,
                      nationality)
    out += name_field(name) + struct.pack("<B", telemetry)
    if fmt >= 2023:
        out += struct.pack("<B", show_names)
        if fmt >= 2024:
            out += struct.pack("<H", tech_level)
        out += struct.pack("<B", platform)
    return out


def participants(fmt, names, **kw):
    body = struct.pack("<B", len(names))
    body += b"".join(participant(fmt, n) for n in names)
    return packet(fmt, 4, body, **kw)


def lobby_player(fmt, name="", *, ai=0, team_id=3, nationality=10,
                 platform=1, car_number=4, telemetry=1, show_names=1,
                 tech_level=1200, ready=1):
    out = struct.pack("<BBB", ai, team_id, nationality)
    if fmt >= 2023:
        out += struct.pack("<B", platform)
    out += name_field(name) + struct.pack("<B", car_number)
    if fmt >= 2024:
        out += struct.pack("<BBH", telemetry, show_names, tech_level)
    return out + struct.pack("<B", ready)


def lobby(fmt, players, **kw):
    body = struct.pack("<B", len(players)) + b"".join(players)
    return packet(fmt, 9, body, **kw)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

MAX_MARSHAL_ZONES = 21


def weather_capacity(fmt):
    return 64 if fmt >= 2024 else 56


def session_counts_offset(fmt):
    """Offsets of num_marshal_zones and num_weather_forecast_samples."""
    zones = header_size(fmt) + 18
    return zones, zones + 1 + MAX_MARSHAL_ZONES * 5 + 2


def session(fmt, zones=(), samples=(), *, ai_difficulty=50,
            zone_filler=b"\x00", **kw):
    """Session body with *zones* (start, flag) and weather *samples*.

    Unused marshal zone slots are filled with *zone_filler*.
    """
    body = struct.pack("<BbbBHBbBHHBBBBBB", 1, 30, 22, 50, 5412, 10, 11, 0,
                       3600, 7200, 80, 0, 0, 255, 0, len(zones))
    body += b"".join(struct.pack("<fb", *z) for z in zones)
    body += zone_filler * ((MAX_MARSHAL_ZONES - len(zones)) * 5)
    body += struct.pack("<BBB", 0, 1, len(samples))
    body += b"".join(struct.pack("<BBBbbbbB", *s) for s in samples)
    body += bytes((weather_capacity(fmt) - len(samples)) * 8)
    body += struct.pack("<BBIIIBBB", 2, ai_difficulty, 1, 2, 3, 20, 25, 12)
    body += bytes(11) + struct.pack("<IB", 720, 7)
    if fmt >= 2023:
        body += struct.pack("<7B", 0, 1, 0, 1, 1, 2, 0)
    return packet(fmt, 1, body, **kw)


def weather_sample(i):
    return (10, i, 1, 30, 0, 22, -1, i % 101)


# ---------------------------------------------------------------------------
# Car telemetry
# ---------------------------------------------------------------------------

def car_telemetry_entry(*, speed=250, throttle=1.0, steer=0.0, brake=0.0,
                        clutch=0, gear=7, rpm=11_500, drs=1,
                        rev_percent=80, rev_bits=0x001F):
    return (struct.pack("<HfffBbHBBH", speed, throttle, steer, brake, clutch,
                        gear, rpm, drs, rev_percent, rev_bits)
            + struct.pack("<4H", 600, 610, 620, 630)
            + struct.pack("<4B", 95, 96, 97, 98)
            + struct.pack("<4B", 100, 101, 102, 103)
            + struct.pack("<H", 110)
            + struct.pack("<4f", 22.0, 22.1, 23.0, 23.1)
            + struct.pack("<4B", 0, 0, 0, 0))


def car_telemetry(fmt, entries=None, suggested_gear=0, **kw):
    entries = entries or [car_telemetry_entry(speed=200 + i) for i in range(22)]
    body = b"".join(entries) + struct.pack("<BBb", 255, 255, suggested_gear)
    return packet(fmt, 6, body, **kw)


# ---------------------------------------------------------------------------
# Session history
# ---------------------------------------------------------------------------

def lap_history_entry(fmt, lap_ms, sectors_ms, valid=0x0F):
    """One lap; *sectors_ms* are full millisecond totals."""
    if fmt == 2022:
        return struct.pack("<IHHHB", lap_ms, *sectors_ms, valid)
    parts = []
    for ms in sectors_ms:
        parts += [ms % 60_000, ms // 60_000]
    return struct.pack("<IHBHBHBB", lap_ms, *parts, valid)


def lap_history_size(fmt):
    return 11 if fmt == 2022 else 14


def session_history(fmt, car_idx=0, laps=(), stints=(), best=(1, 1, 1, 1),
                    **kw):
    """Session history with *laps* lap entries and *stints* (end, actual, visual)."""
    body = struct.pack("<BBB", car_idx, len(laps), len(stints))
    body += struct.pack("<4B", *best)
    body += b"".join(laps)
    body += bytes((100 - len(laps)) * lap_history_size(fmt))
    body += b"".join(struct.pack("<BBB", *s) for s in stints)
    body += bytes((8 - len(stints)) * 3)
    return packet(fmt, 11, body, **kw)


# ---------------------------------------------------------------------------
# Tyre sets / time trial
# ---------------------------------------------------------------------------

def tyre_set(actual=16, visual=16, wear=0, available=1, session=0,
             life_span=20, usable_life=18, delta=0, fitted=0):
    return struct.pack("<BBBBBBBhB", actual, visual, wear, available, session,
                       life_span, usable_life, delta, fitted)


def tyre_sets(fmt, car_idx=0, sets=None, fitted_idx=0, **kw):
    sets = sets or [tyre_set(fitted=int(i == 0)) for i in range(20)]
    body = struct.pack("<B", car_idx) + b"".join(sets)
    body += struct.pack("<B", fitted_idx)
    return packet(fmt, 12, body, **kw)


def time_trial_set(car_idx=0, team_id=2, lap=80_000, sectors=(26_000, 27_000, 27_000),
                   valid=1):
    return struct.pack("<BBIIIIBBBBBB", car_idx, team_id, lap, *sectors,
                       0, 0, 0, 0, 0, valid)
