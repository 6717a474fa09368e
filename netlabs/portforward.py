"""A TCP port forwarder: every accepted connection is relayed to a fixed target."""

from __future__ import annotations

import re
import socket
import sys
import threading
from dataclasses import dataclass

BUFFER_SIZE = 4096
BACKLOG = 40
SYNTAX = "Syntax:  portforward listen_port forward_host [forward_port]"


@dataclass(frozen=True)
class ForwardConfig:
    listen_port: int
    forward_host: str
    forward_port: int


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_arguments(argv) -> ForwardConfig:
    """Parse ``listen_port forward_host [forward_port]``; raise ValueError if invalid."""
    args = list(argv)
    if len(args) < 2:
        raise ValueError("Not enough arguments")
    listen_port = _atoi(args[0])
    if not 1 <= listen_port <= 65535:
        raise ValueError("Listen port is invalid")
    if len(args) == 2:
        forward_port = listen_port
    else:
        forward_port = _atoi(args[2])
        if not 1 <= forward_port <= 65535:
            raise ValueError("Forwarding port is invalid")
    return ForwardConfig(listen_port, args[1], forward_port)


def _shutdown(sock: socket.socket, how: int) -> None:
    try:
        sock.shutdown(how)
    except OSError:
        pass


def pump(src: socket.socket, dst: socket.socket) -> int:
    """Copy from src to dst until end of stream, then half-close both; return bytes copied."""
    total = 0
    while chunk := src.recv(BUFFER_SIZE):
        dst.sendall(chunk)
        total += len(chunk)
    _shutdown(src, socket.SHUT_RD)
    _shutdown(dst, socket.SHUT_WR)
    return total


def open_listening_port(port: int, host: str = "") -> socket.socket:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        server.bind((host, port))
        server.listen(BACKLOG)
    except OSError:
        server.close()
        raise
    return server


def open_forwarding_socket(host: str, port: int) -> socket.socket:
    """Resolve the host (IPv4) and connect to it."""
    address = socket.gethostbyname(host)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock


def _pump_logged(src: socket.socket, dst: socket.socket) -> None:
    try:
        pump(src, dst)
    except OSError as exc:
        print(f"forward: {exc}", file=sys.stderr)
        _shutdown(src, socket.SHUT_RDWR)
        _shutdown(dst, socket.SHUT_RDWR)


def forward_connection(client: socket.socket, host: str, port: int) -> None:
    """Relay traffic both ways between client and the target; close both at the end."""
    with client:
        upstream = open_forwarding_socket(host, port)
        with upstream:
            worker = threading.Thread(
                target=_pump_logged, args=(client, upstream), daemon=True
            )
            worker.start()
            _pump_logged(upstream, client)
            worker.join()


def _handle(client: socket.socket, host: str, port: int) -> None:
    try:
        forward_connection(client, host, port)
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)


def serve(server: socket.socket, host: str, port: int) -> None:
    """Accept connections and forward each in its own thread until the server closes."""
    while True:
        try:
            client, _ = server.accept()
        except OSError:
            if server.fileno() == -1:
                return
            raise
        threading.Thread(target=_handle, args=(client, host, port), daemon=True).start()


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_arguments(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        if len(args) < 2:
            print(SYNTAX, file=sys.stderr)
        return 1

    try:
        server = open_listening_port(config.listen_port)
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1

    with server:
        try:
            serve(server, config.forward_host, config.forward_port)
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())