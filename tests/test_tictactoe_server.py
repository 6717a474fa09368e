import socket
import threading

import pytest

from netlabs.protocol import (
    ConnectionClosed,
    Message,
    recv_int,
    recv_message,
    send_int,
)
from netlabs.tictactoe_server import GameServer, main


@pytest.fixture
def server():
    game_server = GameServer("127.0.0.1", 0)
    yield game_server
    game_server.close()


def _pair():
    server_end, client_end = socket.socketpair()
    server_end.settimeout(5)
    client_end.settimeout(5)
    return server_end, client_end


def _drain(sock):
    events = []
    while True:
        try:
            message = recv_message(sock)
        except ConnectionClosed:
            return events
        if message is Message.UPDATE:
            events.append((message, recv_int(sock), recv_int(sock)))
        elif message is Message.COUNT:
            events.append((message, recv_int(sock)))
        else:
            events.append(message)


def _send_moves(sock, moves):
    for move in moves:
        send_int(sock, move)


def test_accept_pair_assigns_ids(server):
    result = []
    worker = threading.Thread(target=lambda: result.append(server.accept_pair()))
    worker.start()
    first = socket.create_connection(server.address, timeout=5)
    assert recv_int(first) == 0
    assert recv_message(first) is Message.HOLD
    second = socket.create_connection(server.address, timeout=5)
    assert recv_int(second) == 1
    worker.join(5)
    assert len(result[0]) == 2
    assert server.player_count == 2
    for conn in [first, second, *result[0]]:
        conn.close()


def test_game_won_by_first_player(server):
    a_server, a_client = _pair()
    b_server, b_client = _pair()
    _send_moves(a_client, [0, 1, 2])
    _send_moves(b_client, [3, 4])

    assert server.run_game([a_server, b_server]) == 0

    U = Message.UPDATE
    assert _drain(a_client) == [
        Message.START, Message.TURN, (U, 0, 0), Message.WAIT, (U, 1, 3),
        Message.TURN, (U, 0, 1), Message.WAIT, (U, 1, 4), Message.TURN,
        (U, 0, 2), Message.WIN,
    ]
    assert _drain(b_client) == [
        Message.START, Message.WAIT, (U, 0, 0), Message.TURN, (U, 1, 3),
        Message.WAIT, (U, 0, 1), Message.TURN, (U, 1, 4), Message.WAIT,
        (U, 0, 2), Message.LOSE,
    ]
    a_client.close()
    b_client.close()


def test_full_board_without_line_is_draw(server):
    a_server, a_client = _pair()
    b_server, b_client = _pair()
    _send_moves(a_client, [0, 2, 3, 7, 8])
    _send_moves(b_client, [1, 4, 5, 6])

    assert server.run_game([a_server, b_server]) is None

    a_events = _drain(a_client)
    b_events = _drain(b_client)
    assert a_events[-1] is Message.DRAW
    assert b_events[-1] is Message.DRAW
    assert sum(1 for e in a_events if isinstance(e, tuple)) == 9
    a_client.close()
    b_client.close()


def test_invalid_move_count_request_and_disconnect(server):
    server.player_count = 2
    a_server, a_client = _pair()
    b_server, b_client = _pair()
    _send_moves(a_client, [0])
    a_client.shutdown(socket.SHUT_WR)
    _send_moves(b_client, [0, 9, 3])

    assert server.run_game([a_server, b_server]) is None

    U = Message.UPDATE
    assert _drain(b_client) == [
        Message.START, Message.WAIT, (U, 0, 0), Message.TURN, Message.INVALID,
        Message.TURN, (Message.COUNT, 2), Message.TURN, (U, 1, 3), Message.WAIT,
    ]
    assert server.player_count == 0
    a_client.close()
    b_client.close()


def test_serve_forever_starts_a_game(server):
    worker = threading.Thread(target=server.serve_forever, daemon=True)
    worker.start()
    first = socket.create_connection(server.address, timeout=5)
    assert recv_int(first) == 0
    assert recv_message(first) is Message.HOLD
    second = socket.create_connection(server.address, timeout=5)
    assert recv_int(second) == 1
    assert recv_message(first) is Message.START
    assert recv_message(second) is Message.START
    assert recv_message(second) is Message.WAIT
    assert recv_message(first) is Message.TURN
    first.close()
    second.close()


def test_main_without_port(capsys):
    assert main([]) == 1
    assert "no port provided" in capsys.readouterr().err