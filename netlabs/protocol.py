"""The tic-tac-toe wire protocol: 3-letter messages and 4-byte integers."""

from __future__ import annotations

import socket
import struct
from enum import Enum

INT_FORMAT = struct.Struct("<i")
MESSAGE_SIZE = 3


class ConnectionClosed(ConnectionError):
    """The peer closed the connection before a whole value arrived."""


class Message(str, Enum):
    HOLD = "HLD"
    START = "SRT"
    TURN = "TRN"
    INVALID = "INV"
    COUNT = "CNT"
    UPDATE = "UPD"
    WAIT = "WAT"
    WIN = "WIN"
    LOSE = "LSE"
    DRAW = "DRW"


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    received = bytearray()
    while len(received) < size:
        chunk = sock.recv(size - len(received))
        if not chunk:
            raise ConnectionClosed(
                f"connection closed after {len(received)} of {size} bytes"
            )
        received += chunk
    return bytes(received)


def send_int(sock: socket.socket, value: int) -> None:
    """Send a signed 32-bit little-endian integer."""
    if not -(2**31) <= value < 2**31:
        raise ValueError(f"value does not fit in 32 bits: {value}")
    sock.sendall(INT_FORMAT.pack(value))


def recv_int(sock: socket.socket) -> int:
    """Receive one integer; raises ConnectionClosed on a short read."""
    return INT_FORMAT.unpack(_recv_exact(sock, INT_FORMAT.size))[0]


def send_message(sock: socket.socket, message: Message) -> None:
    sock.sendall(Message(message).value.encode("ascii"))


def recv_message(sock: socket.socket) -> Message:
    """Receive one message; raises ValueError for an unknown code."""
    text = _recv_exact(sock, MESSAGE_SIZE).decode("ascii", "replace")
    try:
        return Message(text)
    except ValueError:
        raise ValueError(f"unknown message: {text!r}") from None