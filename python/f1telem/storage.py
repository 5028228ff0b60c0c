"""Datagram log read/write with footer index.

File format:
  [magic: "F1TL" 4 bytes]
  [version: uint16 LE]
  [record 0]
  [record 1]
  ...
  [record N]
  [index_entry × (N+1)]        16 bytes each, fixed stride
  [index_footer]                16 bytes at EOF

Each record is one datagram exactly as received:
  [recv_time_ns: uint64][length: uint32][datagram bytes]

Records are appended in receive order, so the footer index is sorted by
time and time-range queries bisect it.  If the footer is missing (crash
before close) the reader falls back to a sequential scan, and a record cut
short by the crash ends the scan.
"""

from __future__ import annotations

import bisect
import logging
import struct
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator

from .constants import PacketId
from .decoder import Packet, decode
from .errors import DecodeError

logger = logging.getLogger(__name__)

MAGIC = b"F1TL"
VERSION = 1
FILE_HEADER_FMT = "<4sH"
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FMT)  # 6

RECORD_HEADER_FMT = "<QI"
RECORD_HEADER_SIZE = struct.calcsize(RECORD_HEADER_FMT)  # 12

INDEX_MAGIC = 0x49543146  # "F1TI"
INDEX_ENTRY_FMT = "<QQ"
INDEX_ENTRY_SIZE = struct.calcsize(INDEX_ENTRY_FMT)  # 16
INDEX_FOOTER_FMT = "<QII"
INDEX_FOOTER_SIZE = struct.calcsize(INDEX_FOOTER_FMT)  # 16

LOG_SUFFIX = ".f1tl"
SAMPLE_SUFFIX = ".bin"


@dataclass
class IndexEntry:
    offset: int
    recv_ns: int


def decode_records(records: Iterable[tuple[int, bytes]]
                   ) -> Iterator[tuple[int, Packet]]:
    """Decode ``(recv_ns, datagram)`` pairs, logging and skipping failures."""
    for recv_ns, datagram in records:
        try:
            yield recv_ns, decode(datagram)
        except DecodeError as e:
            logger.warning("dropping %d byte datagram: %s", len(datagram), e)


# ---------------------------------------------------------------------------
# Single-datagram samples
# ---------------------------------------------------------------------------

def sample_name(packet: Packet) -> str:
    """File name for a one-datagram sample, e.g. ``2023-03-BUTN.bin``.

    The event code is only part of the name for event packets.
    """
    header = packet.header
    name = f"{header.packet_format}-{int(header.packet_id):02}"
    if header.packet_id == PacketId.EVENT and packet.event is not None:
        name += f"-{packet.event.code}"
    return name + SAMPLE_SUFFIX


def write_sample(directory: str | Path, packet: Packet,
                 datagram: bytes) -> Path | None:
    """Store *datagram* under its sample name unless that file exists.

    Returns the new path, or None when a sample of the same kind is
    already there.
    """
    path = Path(directory) / sample_name(packet)
    if path.exists():
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(datagram)
    return path


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------

class LogWriter:
    """Appends datagrams to a log file.  Writes the footer index on close."""

    def __init__(self, path: str | Path):
        self._f: BinaryIO = open(path, "wb")
        self._index: list[IndexEntry] = []
        self._f.write(struct.pack(FILE_HEADER_FMT, MAGIC, VERSION))

    def __len__(self) -> int:
        return len(self._index)

    def write(self, datagram: bytes, recv_ns: int | None = None) -> None:
        """Append one datagram, stamped with *recv_ns* (default: now)."""
        if recv_ns is None:
            recv_ns = time.time_ns()
        offset = self._f.tell()
        self._f.write(struct.pack(RECORD_HEADER_FMT, recv_ns, len(datagram)))
        self._f.write(datagram)
        self._index.append(IndexEntry(offset, recv_ns))

    def flush(self) -> None:
        self._f.flush()

    def close(self) -> None:
        if self._f.closed:
            return
        self._write_index()
        self._f.close()

    def _write_index(self) -> None:
        index_offset = self._f.tell()
        for ie in self._index:
            self._f.write(struct.pack(INDEX_ENTRY_FMT, ie.offset, ie.recv_ns))
        self._f.write(struct.pack(
            INDEX_FOOTER_FMT, index_offset, len(self._index), INDEX_MAGIC,
        ))

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class LogReader:
    """Reads a datagram log.  Uses the footer index when available."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._f: BinaryIO | None = None
        self._index: list[IndexEntry] | None = None
        self._data_start: int = FILE_HEADER_SIZE
        self._data_end: int | None = None  # where records end (index starts)

    def open(self) -> None:
        """Open the file, check its header and load the index."""
        self._f = open(self._path, "rb")

        raw = self._f.read(FILE_HEADER_SIZE)
        if len(raw) < FILE_HEADER_SIZE:
            raise ValueError(f"{self._path}: too short for a log header")
        magic, version = struct.unpack(FILE_HEADER_FMT, raw)
        if magic != MAGIC:
            raise ValueError(f"{self._path}: not an f1telem log (magic {magic!r})")
        if version != VERSION:
            raise ValueError(f"{self._path}: log version {version}, expected {VERSION}")

        self._index = self._try_load_index()

    @property
    def index(self) -> list[IndexEntry] | None:
        return self._index

    def records(self, ts_min: int | None = None,
                ts_max: int | None = None) -> Iterator[tuple[int, bytes]]:
        """Iterate over ``(recv_ns, datagram)`` pairs, optionally in a time range.

        Both bounds are inclusive.
        """
        if self._f is None:
            self.open()
        assert self._f is not None

        if self._index is not None and (ts_min is not None or ts_max is not None):
            yield from self._records_indexed(ts_min, ts_max)
            return

        self._f.seek(self._data_start)
        for recv_ns, datagram in self._records_sequential():
            if ts_min is not None and recv_ns < ts_min:
                continue
            if ts_max is not None and recv_ns > ts_max:
                continue
            yield recv_ns, datagram

    def packets(self, ts_min: int | None = None,
                ts_max: int | None = None) -> Iterator[tuple[int, Packet]]:
        """Decode records, logging and skipping the ones that do not decode."""
        return decode_records(self.records(ts_min, ts_max))

    def _read_record(self) -> tuple[int, bytes] | None:
        assert self._f is not None
        pos = self._f.tell()
        hdr = self._f.read(RECORD_HEADER_SIZE)
        if not hdr:
            return None
        if len(hdr) < RECORD_HEADER_SIZE:
            logger.warning("truncated record header at offset %d", pos)
            return None
        recv_ns, length = struct.unpack(RECORD_HEADER_FMT, hdr)
        datagram = self._f.read(length)
        if len(datagram) < length:
            logger.warning("truncated record at offset %d: %d of %d bytes",
                           pos, len(datagram), length)
            return None
        return recv_ns, datagram

    def _records_sequential(self) -> Iterator[tuple[int, bytes]]:
        """Read records until the index (if any) or the end of the file."""
        assert self._f is not None
        while True:
            if self._data_end is not None and self._f.tell() >= self._data_end:
                break
            record = self._read_record()
            if record is None:
                break
            yield record

    def _records_indexed(self, ts_min: int | None,
                         ts_max: int | None) -> Iterator[tuple[int, bytes]]:
        """Bisect the index for the first record in range and read from there."""
        assert self._f is not None
        assert self._index is not None

        stamps = [ie.recv_ns for ie in self._index]
        lo = 0 if ts_min is None else bisect.bisect_left(stamps, ts_min)
        hi = len(stamps) if ts_max is None else bisect.bisect_right(stamps, ts_max)

        for ie in self._index[lo:hi]:
            self._f.seek(ie.offset)
            record = self._read_record()
            if record is None:
                break
            yield record

    def _try_load_index(self) -> list[IndexEntry] | None:
        """Index from the footer, or None when the footer is missing or bad."""
        assert self._f is not None

        size = self._f.seek(0, 2)
        if size < FILE_HEADER_SIZE + INDEX_FOOTER_SIZE:
            return None

        self._f.seek(size - INDEX_FOOTER_SIZE)
        index_offset, count, magic = struct.unpack(
            INDEX_FOOTER_FMT, self._f.read(INDEX_FOOTER_SIZE))
        table_size = count * INDEX_ENTRY_SIZE
        if magic != INDEX_MAGIC or index_offset + table_size + INDEX_FOOTER_SIZE != size:
            logger.debug("%s: no usable index footer", self._path)
            return None

        self._f.seek(index_offset)
        table = self._f.read(table_size)
        self._data_end = index_offset
        return [IndexEntry(offset, recv_ns) for offset, recv_ns
                in struct.iter_unpack(INDEX_ENTRY_FMT, table)]

    def close(self) -> None:
        if self._f:
            self._f.close()
            self._f = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc):
        self.close()
