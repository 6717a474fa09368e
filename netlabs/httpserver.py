"""A minimal HTTP server that answers every connection with one HTML page."""

from __future__ import annotations

import argparse
import socket
import sys
from pathlib import Path

PORT = 8080
BUFFER_SIZE = 1024
HEADER = b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n"


def send_html(conn: socket.socket, path: str | Path) -> None:
    """Send the 200 header followed by the file's contents.

    Raises OSError if the file cannot be opened; nothing is sent then.
    """
    with open(path, "rb") as page:
        conn.sendall(HEADER)
        for chunk in iter(lambda: page.read(BUFFER_SIZE), b""):
            conn.sendall(chunk)


def open_server(port: int = PORT, host: str = "") -> socket.socket:
    """Open a listening TCP socket."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        server.bind((host, port))
        server.listen(5)
    except OSError:
        server.close()
        raise
    return server


def serve(server: socket.socket, page: str | Path = "index.html") -> None:
    """Accept connections one by one until the server socket is closed."""
    while True:
        try:
            conn, _ = server.accept()
        except OSError as exc:
            if server.fileno() == -1:
                return
            print(f"Accept failed: {exc}", file=sys.stderr)
            continue

        print("Client connected")
        with conn:
            try:
                send_html(conn, page)
            except OSError as exc:
                print(f"Error sending HTML file: {exc}", file=sys.stderr)
        print("Client disconnected")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="httpserver", description="Serve one HTML page.")
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--page", default="index.html")
    args = parser.parse_args(argv)

    try:
        server = open_server(args.port)
    except OSError as exc:
        print(f"Bind failed: {exc}", file=sys.stderr)
        return 1

    with server:
        print(f"Server listening on port {args.port}...")
        try:
            serve(server, args.page)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())