# sudoku_session.py
from sudoku_utils import (
    EMPTY, SIZE, DIGITS, copy_board, find_conflicts, get_sudoku_puzzle, is_solved,
)

DIRECTIONS = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


class PlaySession:
    """One game: the carved puzzle, its solved reference and the grid the player edits.

    Only the working grid changes. Cells that are filled in the original puzzle
    are givens and cannot be edited.
    """

    def __init__(self, puzzle, solution, difficulty=None):
        self.original = copy_board(puzzle)
        self.solution = copy_board(solution)
        self.working = copy_board(puzzle)
        self.difficulty = difficulty
        self.cursor = (0, 0)

    @classmethod
    def new(cls, difficulty, rng=None):
        puzzle, solution = get_sudoku_puzzle(difficulty, rng=rng)
        return cls(puzzle, solution, difficulty=difficulty)

    def is_given(self, row, col):
        return self.original[row][col] != EMPTY

    def place(self, row, col, value):
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise ValueError(f"Cell ({row}, {col}) is off the board")
        if type(value) is not int or (value != EMPTY and value not in DIGITS):
            raise ValueError(f"Cannot place {value!r}, expected 1-9 or 0 to clear")
        if self.is_given(row, col):
            raise ValueError(f"Cell ({row}, {col}) is a given")
        self.working[row][col] = value

    def clear(self, row, col):
        self.place(row, col, EMPTY)

    def cell_status(self, row, col):
        if self.is_given(row, col):
            return "given"
        value = self.working[row][col]
        if value == EMPTY:
            return "empty"
        return "correct" if value == self.solution[row][col] else "wrong"

    def move_cursor(self, direction):
        try:
            dr, dc = DIRECTIONS[direction]
        except KeyError:
            raise ValueError(f"Unknown direction {direction!r}") from None
        row, col = self.cursor
        self.cursor = (
            min(max(row + dr, 0), SIZE - 1),
            min(max(col + dc, 0), SIZE - 1),
        )
        return self.cursor

    def place_at_cursor(self, value):
        self.place(*self.cursor, value)

    def conflicts(self):
        return find_conflicts(self.working)

    def is_won(self):
        return is_solved(self.working)

    def reveal_solution(self):
        self.working = copy_board(self.solution)
