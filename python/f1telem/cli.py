"""f1telem command-line tool."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections import Counter
from pathlib import Path
from typing import Iterator

from .constants import DEFAULT_PORT
from .decoder import Packet, decode
from .errors import DecodeError
from .storage import LOG_SUFFIX, LogReader, LogWriter, write_sample
from .transport import FileTransport, Transport, UDPTransport

logger = logging.getLogger(__name__)


def _format_packet(packet: Packet, verbose: bool = False) -> str:
    header = packet.header
    line = (f"{header.packet_format} {packet.kind:<20s} "
            f"frame={header.frame_identifier:<8d} t={header.session_time:10.3f}")
    if packet.event is not None:
        details = ", ".join(f"{k}={v}" for k, v in vars(packet.event.details).items())
        line += f"  {packet.event.code} {details}".rstrip()
    if verbose:
        line += f"\n    {packet.body!r}"
    return line


def _parse_address(text: str) -> tuple[str, int]:
    host, _, port = text.rpartition(":")
    return host or "0.0.0.0", int(port)


def _read_file(path: str) -> Iterator[tuple[int, Packet]]:
    """Packets from a log, or from a single-datagram sample file."""
    if path.endswith(LOG_SUFFIX):
        with LogReader(path) as reader:
            yield from reader.packets()
        return
    data = Path(path).read_bytes()
    yield 0, decode(data)


def cmd_dump(args: argparse.Namespace) -> None:
    """Dump a log or sample file to stdout."""
    for recv_ns, packet in _read_file(args.file):
        print(f"[{recv_ns / 1_000_000_000:17.6f}] "
              f"{_format_packet(packet, args.verbose)}")


def _format_duration(ns: int) -> str:
    """Format a nanosecond duration as a human-readable string."""
    if ns < 1_000_000:
        return f"{ns / 1_000:.1f}us"
    if ns < 1_000_000_000:
        return f"{ns / 1_000_000:.1f}ms"
    s = ns / 1_000_000_000
    if s < 60:
        return f"{s:.2f}s"
    if s < 3600:
        return f"{s / 60:.1f}m"
    return f"{s / 3600:.1f}h"


def cmd_info(args: argparse.Namespace) -> None:
    """Print per-format and per-kind packet counts for a file."""
    file_size = os.path.getsize(args.file)

    kinds: Counter[tuple[int, str]] = Counter()
    events: Counter[str] = Counter()
    sessions: set[int] = set()
    ts_min: int | None = None
    ts_max: int | None = None

    for recv_ns, packet in _read_file(args.file):
        kinds[packet.header.packet_format, packet.kind] += 1
        sessions.add(packet.header.session_uid)
        if packet.event is not None:
            events[packet.event.code] += 1
        if ts_min is None or recv_ns < ts_min:
            ts_min = recv_ns
        if ts_max is None or recv_ns > ts_max:
            ts_max = recv_ns

    print(f"File:       {args.file}")
    print(f"Size:       {file_size:,} bytes")
    print(f"Packets:    {sum(kinds.values()):,}")
    print(f"Sessions:   {len(sessions)}")
    if ts_min is not None and ts_max is not None:
        print(f"Duration:   {_format_duration(ts_max - ts_min)}")

    print(f"\n  {'Format':>6s}  {'Kind':<22s}  {'Count':>8s}")
    for (packet_format, kind), count in sorted(kinds.items()):
        print(f"  {packet_format:6d}  {kind:<22s}  {count:8,}")

    if events:
        print(f"\n  {'Event':<6s}  {'Count':>8s}")
        for code, count in sorted(events.items()):
            print(f"  {code:<6s}  {count:8,}")


def cmd_live(args: argparse.Namespace) -> None:
    """Decode the UDP broadcast (or a replayed log) and print it."""
    transport: Transport
    if args.replay:
        transport = FileTransport(args.replay)
    else:
        host, port = _parse_address(args.udp)
        transport = UDPTransport(host, port, buffer_size=args.buffer_size,
                                 timeout=args.timeout)
    try:
        for packet in transport.packets():
            if args.kind and packet.kind not in args.kind:
                continue
            print(_format_packet(packet, args.verbose))
    except KeyboardInterrupt:
        pass
    finally:
        transport.close()


def cmd_record(args: argparse.Namespace) -> None:
    """Append the UDP broadcast to a log, optionally keeping samples."""
    host, port = _parse_address(args.udp)
    transport = UDPTransport(host, port, buffer_size=args.buffer_size,
                             timeout=args.timeout)
    writer = LogWriter(args.out)
    try:
        for recv_ns, data in transport.datagrams():
            writer.write(data, recv_ns)
            if args.split is None:
                continue
            try:
                packet = decode(data)
            except DecodeError as e:
                logger.warning("not sampling %d byte datagram: %s", len(data), e)
                continue
            path = write_sample(args.split, packet, data)
            if path is not None:
                logger.info("new sample %s", path)
    except KeyboardInterrupt:
        pass
    finally:
        transport.close()
        writer.close()
        logger.info("recorded %d datagrams to %s", len(writer), args.out)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="f1telem",
                                     description="F1 UDP telemetry tool")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command")

    # dump
    p_dump = sub.add_parser("dump", help="Dump a log or sample file")
    p_dump.add_argument("file", help=f"Path to a {LOG_SUFFIX} log or .bin sample")
    p_dump.add_argument("-v", "--verbose", action="store_true",
                        help="Print the whole decoded body")

    # info
    p_info = sub.add_parser("info", help="Show summary info about a file")
    p_info.add_argument("file", help=f"Path to a {LOG_SUFFIX} log or .bin sample")

    default_udp = f"0.0.0.0:{DEFAULT_PORT}"
    for name, help_text in (("live", "Live decode from UDP"),
                            ("record", "Record UDP datagrams to a log")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--udp", default=default_udp,
                       help=f"UDP host:port to listen on (default: {default_udp})")
        p.add_argument("--buffer-size", type=int, default=2048,
                       help="Receive buffer size in bytes")
        p.add_argument("--timeout", type=float, default=1.0,
                       help="Socket timeout in seconds")
        if name == "live":
            p.add_argument("--replay", metavar="LOG",
                           help=f"Replay a {LOG_SUFFIX} log instead of listening")
            p.add_argument("--kind", action="append",
                           help="Only print this packet kind (repeatable)")
            p.add_argument("-v", "--verbose", action="store_true",
                           help="Print the whole decoded body")
        else:
            p.add_argument("out", help=f"Output {LOG_SUFFIX} log")
            p.add_argument("--split", metavar="DIR",
                           help="Also save the first datagram of each "
                                "format/kind/event code as a .bin sample")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    commands = {"dump": cmd_dump, "info": cmd_info,
                "live": cmd_live, "record": cmd_record}
    if args.command not in commands:
        parser.print_help()
        sys.exit(1)
    try:
        commands[args.command](args)
    except DecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
