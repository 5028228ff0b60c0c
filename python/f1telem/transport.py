"""Datagram sources: the game's UDP broadcast, or a recorded log."""

from __future__ import annotations

import logging
import socket
import time
from pathlib import Path
from typing import Iterator, Protocol

from .constants import DEFAULT_PORT
from .decoder import Packet
from .storage import LogReader, decode_records

logger = logging.getLogger(__name__)

# larger than the biggest packet any supported format sends
DEFAULT_BUFFER_SIZE = 2048


class Transport(Protocol):
    """Anything that hands out one datagram per read."""

    def read(self) -> bytes: ...
    def packets(self) -> Iterator[Packet]: ...
    def close(self) -> None: ...


class UDPTransport:
    """Listens for the game's telemetry broadcast."""

    def __init__(self, host: str = "0.0.0.0", port: int = DEFAULT_PORT,
                 buffer_size: int = DEFAULT_BUFFER_SIZE, timeout: float = 1.0):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind((host, port))
        self._sock.settimeout(timeout)
        self._buffer_size = buffer_size
        self.remote: tuple[str, int] | None = None
        logger.info("listening on %s:%d", *self.address)

    @property
    def address(self) -> tuple[str, int]:
        """Bound address; the port is real even when 0 was requested."""
        return self._sock.getsockname()

    def read(self) -> bytes:
        """One datagram, or ``b""`` if none arrived before the timeout."""
        try:
            data, addr = self._sock.recvfrom(self._buffer_size)
        except socket.timeout:
            return b""
        if self.remote is None:
            self.remote = addr
            logger.info("first datagram from %s:%d", *addr)
        return data

    def datagrams(self, stop_on_timeout: bool = False
                  ) -> Iterator[tuple[int, bytes]]:
        """Yield ``(recv_ns, datagram)`` pairs as they arrive.

        Runs until the socket is closed, or until a read times out when
        *stop_on_timeout* is set.
        """
        while True:
            try:
                data = self.read()
            except OSError:
                if self._sock.fileno() == -1:
                    return
                raise
            if data:
                yield time.time_ns(), data
            elif stop_on_timeout:
                return

    def packets(self, stop_on_timeout: bool = False) -> Iterator[Packet]:
        for _, packet in decode_records(self.datagrams(stop_on_timeout)):
            yield packet

    def close(self) -> None:
        self._sock.close()


class FileTransport:
    """Replays a datagram log written by :class:`~f1telem.storage.LogWriter`."""

    def __init__(self, path: str | Path):
        self._reader = LogReader(path)
        self._reader.open()
        self._records = self._reader.records()

    def read(self) -> bytes:
        """Next recorded datagram, ``b""`` at the end of the log."""
        for _, data in self._records:
            return data
        return b""

    def datagrams(self) -> Iterator[tuple[int, bytes]]:
        yield from self._records

    def packets(self) -> Iterator[Packet]:
        for _, packet in decode_records(self.datagrams()):
            yield packet

    def close(self) -> None:
        self._reader.close()
