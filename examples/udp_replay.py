#!/usr/bin/env python3
"""Re-broadcast a recorded log over UDP at its original pace.

Record a session first:
    f1telem record session.f1tl

Then replay it to anything listening on localhost:20777:
    python examples/udp_replay.py session.f1tl
"""

import socket
import sys
import time

from f1telem import DEFAULT_PORT, LogReader

TARGET = ("127.0.0.1", DEFAULT_PORT)

sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
sent = 0

with LogReader(sys.argv[1]) as reader:
    start = time.monotonic_ns()
    first_ns = None
    try:
        for recv_ns, datagram in reader.records():
            if first_ns is None:
                first_ns = recv_ns
            delay = (recv_ns - first_ns) - (time.monotonic_ns() - start)
            if delay > 0:
                time.sleep(delay / 1e9)
            sock.sendto(datagram, TARGET)
            sent += 1
    except KeyboardInterrupt:
        pass

sock.close()
print(f"sent {sent} datagrams to {TARGET[0]}:{TARGET[1]}")
