"""A broadcast chat: the server relays every message to all other clients."""

from __future__ import annotations

import argparse
import select
import socket
import sys
import threading
from typing import TextIO

PORT = 8888
MAX_CLIENTS = 10
BUFFER_SIZE = 1024
LOCALHOST = "127.0.0.1"


class ChatServer:
    """A select-driven server holding up to ``max_clients`` connections."""

    def __init__(self, host: str = "", port: int = PORT, max_clients: int = MAX_CLIENTS):
        self.max_clients = max_clients
        self.clients: list[socket.socket] = []
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(3)
        except OSError:
            self._listener.close()
            raise

    @property
    def address(self) -> tuple:
        return self._listener.getsockname()

    def __enter__(self) -> ChatServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def step(self, timeout: float | None = None) -> None:
        """Wait once for activity, accept one connection and relay what arrived."""
        readable, _, _ = select.select([self._listener, *self.clients], [], [], timeout)

        if self._listener in readable:
            conn, _ = self._listener.accept()
            if len(self.clients) < self.max_clients:
                self.clients.append(conn)
                print("New client connected")
            else:
                conn.close()

        for client in readable:
            if client is self._listener or client not in self.clients:
                continue
            try:
                data = client.recv(BUFFER_SIZE)
            except OSError:
                data = b""
            if not data:
                self.clients.remove(client)
                client.close()
                print("Client disconnected")
                continue
            self._broadcast(client, data.split(b"\0", 1)[0])

    def _broadcast(self, sender: socket.socket, payload: bytes) -> None:
        for other in self.clients:
            if other is not sender:
                try:
                    other.sendall(payload)
                except OSError:
                    pass

    def serve_forever(self) -> None:
        while self._listener.fileno() != -1:
            try:
                self.step()
            except (OSError, ValueError) as exc:
                if self._listener.fileno() == -1:
                    return
                print(f"Select error: {exc}", file=sys.stderr)

    def close(self) -> None:
        for client in self.clients:
            client.close()
        self.clients.clear()
        self._listener.close()


def receive_messages(sock: socket.socket, out: TextIO) -> None:
    """Copy everything received on the socket to ``out`` until the peer closes."""
    while True:
        try:
            data = sock.recv(BUFFER_SIZE)
        except OSError:
            break
        if not data:
            break
        out.write("Received: " + data.split(b"\0", 1)[0].decode("utf-8", "replace"))
        out.flush()


def run_client(host: str = LOCALHOST, port: int = PORT,
               stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Connect, print incoming messages and send each input line until end of input."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout

    with socket.create_connection((host, port)) as sock:
        stdout.write("Connected to server\n")
        receiver = threading.Thread(target=receive_messages, args=(sock, stdout), daemon=True)
        receiver.start()

        while True:
            stdout.write("Enter message: ")
            stdout.flush()
            line = stdin.readline()
            if not line:
                break
            sock.sendall(line.encode("utf-8"))

        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        receiver.join(timeout=1)


def server_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="chat-server", description="Run the chat server.")
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)
    try:
        server = ChatServer("", args.port)
    except OSError as exc:
        print(f"Bind failed: {exc}", file=sys.stderr)
        return 1
    with server:
        print(f"Server listening on port {args.port}...")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


def client_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="chat-client", description="Join the chat.")
    parser.add_argument("--host", default=LOCALHOST)
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port)
    except OSError as exc:
        print(f"Connection failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(server_main())