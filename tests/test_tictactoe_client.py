import io
import socket

import pytest

from netlabs.board import Board
from netlabs.protocol import Message, recv_int, send_int, send_message
from netlabs.tictactoe_client import apply_update, connect_to_server, main, play, read_move


@pytest.fixture
def pair():
    server_end, client_end = socket.socketpair()
    server_end.settimeout(5)
    client_end.settimeout(5)
    yield server_end, client_end
    server_end.close()
    client_end.close()


def _script(sock, items):
    for item in items:
        if isinstance(item, Message):
            send_message(sock, item)
        else:
            send_int(sock, item)


def test_read_move_skips_invalid_lines():
    stdout = io.StringIO()
    assert read_move(io.StringIO("a\n-3\n7\n"), stdout) == 7
    assert stdout.getvalue().count("Invalid input. Try again.") == 2


def test_read_move_uses_first_character():
    assert read_move(io.StringIO("12\n"), io.StringIO()) == 1


def test_read_move_raises_on_end_of_input():
    with pytest.raises(EOFError):
        read_move(io.StringIO(""), io.StringIO())


def test_apply_update_marks_board(pair):
    server_end, client_end = pair
    _script(server_end, [0, 8])
    board = Board()
    assert apply_update(client_end, board) == (0, 8)
    assert board.rows[2][2] == "O"
    assert board.is_valid_move(8) is False


def test_play_winning_game(pair):
    server_end, client_end = pair
    _script(server_end, [
        1, Message.HOLD, Message.START, Message.TURN,
        Message.UPDATE, 1, 4, Message.WAIT, Message.UPDATE, 0, 0, Message.WIN,
    ])
    stdout = io.StringIO()
    assert play(client_end, io.StringIO("4\n"), stdout) is Message.WIN
    assert recv_int(server_end) == 4

    expected = Board()
    expected.place(4, 1)
    expected.place(0, 0)
    text = stdout.getvalue()
    assert "Waiting for a second player..." in text
    assert "You are X's" in text
    assert expected.render() in text
    assert text.endswith("You win!\nGame over.\n")


def test_play_invalid_and_count_then_draw(pair):
    server_end, client_end = pair
    _script(server_end, [
        0, Message.START, Message.TURN, Message.INVALID, Message.TURN,
        Message.COUNT, 4, Message.DRAW,
    ])
    stdout = io.StringIO()
    assert play(client_end, io.StringIO("3\n9\n"), stdout) is Message.DRAW
    assert [recv_int(server_end), recv_int(server_end)] == [3, 9]
    text = stdout.getvalue()
    assert "You are O's" in text
    assert "That position has already been played. Try again." in text
    assert "There are currently 4 active players." in text
    assert text.endswith("Draw.\nGame over.\n")


def test_play_rejects_unknown_message(pair):
    server_end, client_end = pair
    _script(server_end, [0, Message.START])
    server_end.sendall(b"BAD")
    with pytest.raises(ValueError):
        play(client_end, io.StringIO(""), io.StringIO())


def test_connect_to_server_reaches_listener():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        host, port = listener.getsockname()
        with connect_to_server(host, port) as sock:
            conn, _ = listener.accept()
            with conn:
                assert conn.getpeername() == sock.getsockname()


def test_main_usage(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().err