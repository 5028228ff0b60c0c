"""End-to-end tests for f1telem.

Sends synthetic datagrams over loopback UDP, records and replays them
through a log, and drives the command-line tool on the result.
"""

import io
import os
import socket
import sys
import tempfile
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "python"))

import pytest

import builders
from f1telem import LogReader, LogWriter
from f1telem import cli
from f1telem.cli import main as cli_main
from f1telem.transport import FileTransport, UDPTransport

TIMEOUT = 0.2  # seconds


def session_stream():
    """A short mixed-format session, as the game would broadcast it."""
    return [
        builders.event(2024, b"SSTA"),
        builders.blank(2024, 1),
        builders.laps(2024),
        builders.car_telemetry(2024, suggested_gear=5),
        builders.event(2024, b"LGOT"),
        builders.blank(2024, 0),
        builders.event(2024, b"SEND"),
    ]


def run_cli(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        cli_main(argv)
    return out.getvalue()


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

def test_udp_loopback():
    """Every valid datagram sent comes out decoded; garbage is dropped."""
    print("test_udp_loopback...", end="")

    stream = session_stream()
    transport = UDPTransport("127.0.0.1", 0, timeout=TIMEOUT)
    try:
        host, port = transport.address
        assert port != 0
        assert transport.remote is None

        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            for i, data in enumerate(stream):
                s.sendto(data, (host, port))
                if i == 2:
                    s.sendto(b"\xe8\x07garbage", (host, port))
            sender_port = s.getsockname()[1]

            packets = list(transport.packets(stop_on_timeout=True))

        assert transport.remote == ("127.0.0.1", sender_port)
        assert [p.kind for p in packets] == [
            "event", "session", "laps", "car_telemetry", "event", "motion",
            "event"]
        assert [p.event.code for p in packets if p.event is not None] == [
            "SSTA", "LGOT", "SEND"]
        assert packets[3].car_telemetry.suggested_gear == 5

        # nothing left: read times out
        assert transport.read() == b""
    finally:
        transport.close()

    # a closed transport stops iterating instead of raising
    assert list(transport.datagrams()) == []

    print(" OK")


def test_record_and_replay():
    """UDP -> log -> FileTransport gives the same datagrams back."""
    print("test_record_and_replay...", end="")

    stream = session_stream()
    with tempfile.NamedTemporaryFile(suffix=".f1tl", delete=False) as f:
        tmppath = f.name

    transport = UDPTransport("127.0.0.1", 0, timeout=TIMEOUT)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            for data in stream:
                s.sendto(data, transport.address)

            with LogWriter(tmppath) as w:
                for recv_ns, data in transport.datagrams(stop_on_timeout=True):
                    w.write(data, recv_ns)
        transport.close()

        with LogReader(tmppath) as r:
            records = list(r.records())
        assert [d for _, d in records] == stream
        stamps = [ts for ts, _ in records]
        assert stamps == sorted(stamps)

        replay = FileTransport(tmppath)
        try:
            assert replay.read() == stream[0]
            kinds = [p.kind for p in replay.packets()]
            assert kinds == ["session", "laps", "car_telemetry", "event",
                             "motion", "event"]
            assert replay.read() == b""
        finally:
            replay.close()
    finally:
        transport.close()
        os.unlink(tmppath)

    print(" OK")


def test_cli_dump_and_info():
    print("test_cli_dump_and_info...", end="")

    stream = session_stream()
    with tempfile.NamedTemporaryFile(suffix=".f1tl", delete=False) as f:
        tmppath = f.name

    try:
        with LogWriter(tmppath) as w:
            for i, data in enumerate(stream):
                w.write(data, recv_ns=1_000_000_000 + i * 250_000_000)

        lines = run_cli(["dump", tmppath]).splitlines()
        assert len(lines) == len(stream)
        assert "event" in lines[0] and "SSTA" in lines[0]
        assert "laps" in lines[2]
        assert lines[0].startswith("[")

        verbose = run_cli(["dump", "-v", tmppath])
        assert "PacketCarTelemetry(" in verbose

        info = run_cli(["info", tmppath])
        assert "Packets:    7" in info
        assert "Sessions:   1" in info
        assert "Duration:   1.50s" in info
        assert "car_telemetry" in info
        assert "LGOT" in info

        replay = run_cli(["live", "--replay", tmppath, "--kind", "event"])
        lines = replay.splitlines()
        assert len(lines) == 3
        assert all("event" in line for line in lines)
    finally:
        os.unlink(tmppath)

    print(" OK")


def test_cli_sample_file():
    """A single .bin sample is dumped like a one-record log."""
    print("test_cli_sample_file...", end="")

    with tempfile.NamedTemporaryFile(suffix=".bin", delete=False) as f:
        f.write(builders.participants(2023, ["NORRIS", "PIASTRI"]))
        tmppath = f.name

    try:
        lines = run_cli(["dump", tmppath]).splitlines()
        assert len(lines) == 1
        assert "participants" in lines[0]

        verbose = run_cli(["dump", "--verbose", tmppath])
        assert "NORRIS" in verbose and "PIASTRI" in verbose
    finally:
        os.unlink(tmppath)

    print(" OK")


def test_cli_decode_error():
    """A sample that does not decode exits with status 1."""
    print("test_cli_decode_error...", end="")

    with tempfile.NamedTemporaryFile(suffix=".bin", delete=False) as f:
        f.write(builders.header(2021, 0))
        tmppath = f.name

    try:
        err = io.StringIO()
        with redirect_stderr(err), pytest.raises(SystemExit) as info:
            run_cli(["dump", tmppath])
        assert info.value.code == 1
        assert "unsupported packet format: 2021" in err.getvalue()
    finally:
        os.unlink(tmppath)

    print(" OK")


def test_cli_logger_name():
    """CLI messages log under the module's own logger."""
    print("test_cli_logger_name...", end="")

    assert cli.logger.name == "f1telem.cli"

    print(" OK")


if __name__ == "__main__":
    print("f1telem e2e tests")
    print("=================\n")

    test_udp_loopback()
    test_record_and_replay()
    test_cli_dump_and_info()
    test_cli_sample_file()
    test_cli_decode_error()
    test_cli_logger_name()

    print("\nAll tests passed.")
