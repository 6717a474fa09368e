"""The tic-tac-toe client: draws the board and relays moves from the keyboard."""

from __future__ import annotations

import socket
import sys
from typing import TextIO

from .board import Board, symbol
from .protocol import Message, recv_int, recv_message, send_int

DIGITS = frozenset("0123456789")
RESULTS = {
    Message.WIN: "You win!\n",
    Message.LOSE: "You lost.\n",
    Message.DRAW: "Draw.\n",
}
GAME_OVER_NOTE = (
    "Either the server shut down or the other player disconnected.\nGame over.\n"
)


def connect_to_server(host: str, port: int) -> socket.socket:
    """Open a TCP connection to the game server."""
    return socket.create_connection((host, port))


def read_move(stdin: TextIO, stdout: TextIO) -> int:
    """Prompt until a line starts with a digit and return that digit."""
    while True:
        stdout.write("Enter 0-8 to make a move, or 9 for number of active players: ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError("no move entered")
        if line[0] in DIGITS:
            stdout.write("\n")
            return int(line[0])
        stdout.write("\nInvalid input. Try again.\n")


def apply_update(sock: socket.socket, board: Board) -> tuple[int, int]:
    """Read a player id and a move from the server and mark the board."""
    player_id = recv_int(sock)
    move = recv_int(sock)
    board.place(move, player_id)
    return player_id, move


def play(sock: socket.socket, stdin: TextIO, stdout: TextIO) -> Message:
    """Play one game and return the final result message."""
    player_id = recv_int(sock)
    board = Board()
    stdout.write("Tic-Tac-Toe\n------------\n")

    while True:
        message = recv_message(sock)
        if message is Message.HOLD:
            stdout.write("Waiting for a second player...\n")
        elif message is Message.START:
            break

    stdout.write("Game on!\n")
    stdout.write(f"You are {symbol(player_id)}'s\n")
    stdout.write(board.render())

    while True:
        message = recv_message(sock)
        if message is Message.TURN:
            stdout.write("Your move...\n")
            send_int(sock, read_move(stdin, stdout))
        elif message is Message.INVALID:
            stdout.write("That position has already been played. Try again.\n")
        elif message is Message.COUNT:
            count = recv_int(sock)
            stdout.write(f"There are currently {count} active players.\n")
        elif message is Message.UPDATE:
            apply_update(sock, board)
            stdout.write(board.render())
        elif message is Message.WAIT:
            stdout.write("Waiting for other players move...\n")
        elif message in RESULTS:
            stdout.write(RESULTS[message])
            break
        else:
            raise ValueError(f"unexpected message: {message.value}")

    stdout.write("Game over.\n")
    stdout.flush()
    return message


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("usage tictactoe-client hostname port", file=sys.stderr)
        return 0
    try:
        port = int(args[1])
    except ValueError:
        print(f"ERROR, invalid port: {args[1]}", file=sys.stderr)
        return 1

    try:
        sock = connect_to_server(args[0], port)
    except socket.gaierror:
        print("ERROR, no such host", file=sys.stderr)
        return 0
    except OSError as exc:
        print(f"ERROR connecting to server: {exc}", file=sys.stderr)
        sys.stdout.write(GAME_OVER_NOTE)
        return 0

    with sock:
        try:
            play(sock, sys.stdin, sys.stdout)
        except (OSError, ValueError, EOFError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            sys.stdout.write(GAME_OVER_NOTE)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())