"""A tic-tac-toe server that pairs clients and runs each game in a thread."""

from __future__ import annotations

import socket
import sys
import threading

from .board import COUNT_REQUEST, Board
from .protocol import Message, recv_int, send_int, send_message

MAX_BACKLOG = 253
MAX_PLAYERS = 252
DISCONNECTED = -1


class GameServer:
    """Accepts players two at a time and plays each pair's game."""

    def __init__(self, host: str = "", port: int = 0):
        self.player_count = 0
        self._count_changed = threading.Condition()
        self._closed = False
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.bind((host, port))
            self._listener.listen(MAX_BACKLOG)
        except OSError:
            self._listener.close()
            raise

    @property
    def address(self) -> tuple:
        return self._listener.getsockname()

    def __enter__(self) -> GameServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _change_count(self, delta: int) -> None:
        with self._count_changed:
            self.player_count += delta
            print(f"Number of players is now {self.player_count}.")
            self._count_changed.notify_all()

    def accept_pair(self) -> list[socket.socket]:
        """Accept two players, telling each its id; the first is told to hold."""
        players: list[socket.socket] = []
        try:
            for player_id in range(2):
                self._listener.listen(max(MAX_BACKLOG - self.player_count, 0))
                conn, _ = self._listener.accept()
                players.append(conn)
                send_int(conn, player_id)
                self._change_count(1)
                if player_id == 0:
                    send_message(conn, Message.HOLD)
        except OSError:
            for conn in players:
                conn.close()
            if players:
                self._change_count(-len(players))
            raise
        return players

    def _get_move(self, board: Board, sock: socket.socket, turn: int) -> int | None:
        while True:
            send_message(sock, Message.TURN)
            try:
                move = recv_int(sock)
            except OSError:
                return None
            if move == DISCONNECTED:
                return None
            print(f"Player {turn} played position {move}")
            if board.is_valid_move(move):
                return move
            print("Move was invalid. Let's try this again...")
            send_message(sock, Message.INVALID)

    def _play(self, board: Board, players: list[socket.socket]) -> int | None:
        print("Game on!")
        for player in players:
            send_message(player, Message.START)
        print(board.render(), end="")

        previous, turn, turn_count = 1, 0, 0
        while True:
            other = 1 - turn
            if previous != turn:
                send_message(players[other], Message.WAIT)

            move = self._get_move(board, players[turn], turn)
            if move is None:
                print("Player disconnected.")
                return None

            if move == COUNT_REQUEST:
                previous = turn
                with self._count_changed:
                    count = self.player_count
                send_message(players[turn], Message.COUNT)
                send_int(players[turn], count)
                continue

            board.place(move, turn)
            for player in players:
                send_message(player, Message.UPDATE)
                send_int(player, turn)
                send_int(player, move)
            print(board.render(), end="")

            if board.is_winning_move(move):
                send_message(players[turn], Message.WIN)
                send_message(players[other], Message.LOSE)
                print(f"Player {turn} won.")
                return turn
            if turn_count == 8:
                print("Draw.")
                for player in players:
                    send_message(player, Message.DRAW)
                return None

            previous, turn = turn, other
            turn_count += 1

    def run_game(self, players: list[socket.socket]) -> int | None:
        """Play one game; return the winner's id, or None on a draw or disconnect."""
        winner = None
        try:
            winner = self._play(Board(), players)
        except OSError as exc:
            print(f"ERROR writing to client socket: {exc}", file=sys.stderr)
        finally:
            print("Game over.")
            for player in players:
                player.close()
            for _ in players:
                self._change_count(-1)
        return winner

    def serve_forever(self) -> None:
        while not self._closed:
            with self._count_changed:
                self._count_changed.wait_for(
                    lambda: self.player_count <= MAX_PLAYERS or self._closed
                )
            if self._closed:
                return
            try:
                players = self.accept_pair()
            except OSError as exc:
                if self._closed:
                    return
                print(f"ERROR accepting a connection from a client: {exc}", file=sys.stderr)
                continue
            threading.Thread(target=self.run_game, args=(players,), daemon=True).start()

    def close(self) -> None:
        self._closed = True
        try:
            self._listener.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._listener.close()
        with self._count_changed:
            self._count_changed.notify_all()


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("ERROR, no port provided", file=sys.stderr)
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(f"ERROR, invalid port: {args[0]}", file=sys.stderr)
        return 1
    try:
        server = GameServer("", port)
    except OSError as exc:
        print(f"ERROR binding listener socket: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())