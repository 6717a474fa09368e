"""A ping utility sending ICMP echo requests, with an ICMP flood monitor."""

from __future__ import annotations

import os
import re
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass
from typing import TextIO

PKT_SIZE = 64
ICMP_STRUCT_SIZE = 28
DATA_SIZE = PKT_SIZE - ICMP_STRUCT_SIZE
IP_HEADER_SIZE = 20
RECV_SIZE = PKT_SIZE + IP_HEADER_SIZE
TIMEOUT_SEC = 5
MONITOR_INTERVAL = 5
FLOOD_THRESHOLD = 100
SEND_INTERVAL = 1
SNMP_PATH = "/proc/net/snmp"

ICMP_ECHO = 8
ICMP_ECHOREPLY = 0
PAYLOAD_BYTE = b"\x42"
HEADER = struct.Struct("=BBHHH")


@dataclass(frozen=True)
class EchoReply:
    """A matching echo reply: ICMP size in bytes, sequence number and TTL."""

    size: int
    seq: int
    ttl: int


@dataclass
class PingStats:
    transmitted: int = 0
    received: int = 0

    def loss_percent(self) -> float:
        if self.transmitted <= 0:
            return 0.0
        return 100.0 * (self.transmitted - self.received) / self.transmitted

    def summary(self, address: str) -> str:
        return (
            f"\n--- {address} ping statistics ---\n"
            f"{self.transmitted} packets transmitted, {self.received} received, "
            f"{self.loss_percent():.1f}% packet loss\n"
        )


def checksum(data: bytes) -> int:
    """Return the Internet checksum (ones' complement of the ones' complement sum)."""
    data = bytes(data)
    if len(data) % 2:
        data += b"\0"
    total = sum(struct.unpack(f">{len(data) // 2}H", data))
    total = (total >> 16) + (total & 0xFFFF)
    total += total >> 16
    return ~total & 0xFFFF


def build_echo_request(seq: int, ident: int) -> bytes:
    """Build a 64-byte echo request with a 0x42-filled data area."""
    header = HEADER.pack(ICMP_ECHO, 0, 0, ident & 0xFFFF, seq & 0xFFFF)
    packet = bytearray((header + PAYLOAD_BYTE * DATA_SIZE).ljust(PKT_SIZE, b"\0"))
    packet[2:4] = checksum(packet).to_bytes(2, "big")
    return bytes(packet)


def parse_echo_reply(data: bytes, ident: int) -> EchoReply | None:
    """Parse an IP datagram; return the reply if it is an echo reply for ``ident``.

    Raises ValueError if the datagram is too short to hold the headers.
    """
    if len(data) < IP_HEADER_SIZE:
        raise ValueError(f"datagram too short: {len(data)} bytes")
    ip_len = (data[0] & 0x0F) * 4
    if len(data) < ip_len + HEADER.size:
        raise ValueError(f"datagram too short for ICMP header: {len(data)} bytes")
    ttl = data[8]
    icmp_type, _, _, reply_id, seq = HEADER.unpack_from(data, ip_len)
    if icmp_type != ICMP_ECHOREPLY or reply_id != ident & 0xFFFF:
        return None
    return EchoReply(size=len(data) - ip_len, seq=seq, ttl=ttl)


def read_icmp_inmsgs(path: str | os.PathLike = SNMP_PATH) -> int:
    """Read the ICMP InMsgs counter; 0 if the file cannot be read."""
    try:
        with open(path, encoding="ascii", errors="replace") as snmp:
            seen_header = False
            for line in snmp:
                if not line.startswith("Icmp:"):
                    continue
                if not seen_header:
                    seen_header = True
                    continue
                match = re.match(r"\s*(\d+)", line[5:])
                if match:
                    return int(match.group(1))
    except OSError:
        return 0
    return 0


class FloodMonitor:
    """Watches the ICMP InMsgs counter and reports sudden spikes."""

    def __init__(self, path=SNMP_PATH, interval: float = MONITOR_INTERVAL,
                 threshold: int = FLOOD_THRESHOLD, out: TextIO | None = None):
        self.path = path
        self.interval = interval
        self.threshold = threshold
        self.out = out
        self.previous = read_icmp_inmsgs(path)

    def check(self) -> int:
        """Read the counter, alert if it grew by more than the threshold; return the growth."""
        now = read_icmp_inmsgs(self.path)
        delta = max(now - self.previous, 0)
        if delta > self.threshold:
            out = sys.stderr if self.out is None else self.out
            out.write(
                f"[ICMP ALERT] {delta} InMsgs in last {self.interval} sec "
                f"(threshold={self.threshold})\n"
            )
            out.flush()
        self.previous = now
        return delta

    def run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.check()


def open_socket(timeout: float = TIMEOUT_SEC) -> socket.socket:
    """Open a raw ICMP socket with a receive timeout (needs privileges)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    sock.settimeout(timeout)
    return sock


def ping_loop(sock, address: str, stats: PingStats, ident: int,
              out: TextIO | None = None) -> None:
    """Send one echo request per second and report replies, forever."""
    while True:
        target = sys.stdout if out is None else out
        seq = stats.transmitted
        stats.transmitted += 1
        packet = build_echo_request(seq, ident)
        started = time.monotonic()
        try:
            sock.sendto(packet, (address, 0))
        except OSError as exc:
            print(f"sendto: {exc}", file=sys.stderr)
            continue

        try:
            data, sender = sock.recvfrom(RECV_SIZE)
        except (TimeoutError, BlockingIOError):
            target.write(f"Request timeout for icmp_seq={seq}\n")
        except OSError as exc:
            print(f"recvfrom: {exc}", file=sys.stderr)
        else:
            elapsed = (time.monotonic() - started) * 1000.0
            try:
                reply = parse_echo_reply(data, ident)
            except ValueError:
                reply = None
            if reply is not None:
                stats.received += 1
                target.write(
                    f"{reply.size} bytes from {sender[0]}: icmp_seq={reply.seq} "
                    f"ttl={reply.ttl} time={elapsed:.3f} ms\n"
                )
        target.flush()
        time.sleep(SEND_INTERVAL)


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: ping <hostname>", file=sys.stderr)
        return 1
    try:
        address = socket.inet_ntoa(socket.inet_pton(socket.AF_INET, args[0]))
    except OSError:
        print(f"Invalid address: {args[0]}", file=sys.stderr)
        return 1

    try:
        sock = open_socket()
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        print("-> Must run as root or have CAP_NET_RAW", file=sys.stderr)
        return 1

    stop = threading.Event()
    monitor = FloodMonitor()
    threading.Thread(target=monitor.run, args=(stop,), daemon=True).start()

    # SIGTERM ends the run the same way Ctrl+C does.
    try:
        previous_handler = signal.signal(signal.SIGTERM, signal.default_int_handler)
    except ValueError:
        previous_handler = None

    stats = PingStats()
    print(f"PING {args[0]} ({address}): {DATA_SIZE} data bytes")
    try:
        with sock:
            ping_loop(sock, address, stats, os.getpid() & 0xFFFF, sys.stdout)
    except KeyboardInterrupt:
        pass
    finally:
        stop.set()
        if previous_handler is not None:
            signal.signal(signal.SIGTERM, previous_handler)

    sys.stdout.write(stats.summary(address))
    return 0


if __name__ == "__main__":
    sys.exit(main())