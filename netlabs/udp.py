"""A one-shot UDP greeting: the server waits for one datagram, the client sends one."""

from __future__ import annotations

import socket
import sys

BUFFER_SIZE = 1024
LOCALHOST = "127.0.0.1"
GREETING = "Hello Server\n"


def parse_port(text: str) -> int:
    """Parse a port number, raising ValueError for anything outside 0..65535."""
    try:
        port = int(text)
    except ValueError:
        raise ValueError(f"invalid port: {text!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"port out of range: {port}")
    return port


def open_server(port: int, host: str = LOCALHOST) -> socket.socket:
    """Open a UDP socket bound to host and port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def receive_message(sock: socket.socket) -> tuple[str, tuple]:
    """Receive one datagram and return its text up to the first NUL and the sender."""
    data, address = sock.recvfrom(BUFFER_SIZE)
    return data.split(b"\0", 1)[0].decode("utf-8", "replace"), address


def send_greeting(port: int, host: str = LOCALHOST) -> str:
    """Send the greeting in a full 1024-byte datagram and return the greeting."""
    payload = GREETING.encode("utf-8").ljust(BUFFER_SIZE, b"\0")
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(payload, (host, port))
    return GREETING


def _port_from(argv, prog: str) -> int | None:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(f"Usage: {prog} <port>")
        return None
    return parse_port(args[0])


def server_main(argv=None) -> int:
    try:
        port = _port_from(argv, "udp-server")
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if port is None:
        return 0
    with open_server(port) as sock:
        text, _ = receive_message(sock)
    print(f"[+]Data Received: {text}", end="")
    return 0


def client_main(argv=None) -> int:
    try:
        port = _port_from(argv, "udp-client")
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if port is None:
        return 0
    text = send_greeting(port)
    print(f"[+]Data Send: {text}", end="")
    return 0


if __name__ == "__main__":
    sys.exit(server_main())