"""The tic-tac-toe board shared by the game server and client."""

from __future__ import annotations

EMPTY = " "
COUNT_REQUEST = 9
SEPARATOR = "-----------"
_SYMBOLS = ("O", "X")


def symbol(player_id: int) -> str:
    """Player 0 plays 'O', any other player plays 'X'."""
    index = 1 if player_id else 0
    return _SYMBOLS[index]


class Board:
    """A 3x3 grid addressed by moves 0..8, row by row."""

    def __init__(self) -> None:
        self.rows: list[list[str]] = [[EMPTY] * 3 for _ in range(3)]

    @staticmethod
    def _position(move: int) -> tuple[int, int]:
        if not 0 <= move <= 8:
            raise ValueError(f"move must be in 0..8, got {move}")
        return divmod(move, 3)

    def is_valid_move(self, move: int) -> bool:
        """A count request (9) or a free cell is valid; anything else is not."""
        if move == COUNT_REQUEST:
            return True
        if not 0 <= move <= 8:
            return False
        row, col = divmod(move, 3)
        return self.rows[row][col] == EMPTY

    def place(self, move: int, player_id: int) -> None:
        row, col = self._position(move)
        self.rows[row][col] = symbol(player_id)

    def is_winning_move(self, last_move: int) -> bool:
        """Check only the lines that pass through the last move."""
        row, col = self._position(last_move)
        grid = self.rows
        if grid[row][0] == grid[row][1] == grid[row][2]:
            return True
        if grid[0][col] == grid[1][col] == grid[2][col]:
            return True
        if last_move % 2 == 0:
            centre = grid[1][1]
            if last_move in (0, 4, 8) and grid[0][0] == centre == grid[2][2]:
                return True
            if last_move in (2, 4, 6) and grid[0][2] == centre == grid[2][0]:
                return True
        return False

    def render(self) -> str:
        lines = (" " + " | ".join(row) + " " for row in self.rows)
        return f"\n{SEPARATOR}\n".join(lines) + "\n"