# sudoku_utils.py
import logging
import random

logger = logging.getLogger(__name__)

SIZE = 9
BOX = 3
EMPTY = 0
DIGITS = tuple(range(1, SIZE + 1))
TOTAL_CELLS = SIZE * SIZE

# Tier -> number of cells left filled after carving
DIFFICULTY_CLUES = {1: 76, 2: 35, 3: 30, 4: 25}
DIFFICULTY_LABELS = {1: "Demo", 2: "Easy", 3: "Medium", 4: "Hard"}

GENERATION_ATTEMPTS = 20

Grid = list[list[int]]


class SudokuError(Exception):
    """Base class for puzzle construction errors."""


class InvalidDifficulty(SudokuError, ValueError):
    def __init__(self, difficulty):
        super().__init__(f"Unknown difficulty level {difficulty!r}, expected one of {sorted(DIFFICULTY_CLUES)}")
        self.difficulty = difficulty


class GenerationFailure(SudokuError):
    """The full-grid search exhausted every branch without completing."""


class CarveFailure(GenerationFailure):
    """Carving could not reach the target count while keeping the solution unique."""


def _units():
    rows = [[(r, c) for c in range(SIZE)] for r in range(SIZE)]
    cols = [[(r, c) for r in range(SIZE)] for c in range(SIZE)]
    boxes = [
        [(br + i, bc + j) for i in range(BOX) for j in range(BOX)]
        for br in range(0, SIZE, BOX)
        for bc in range(0, SIZE, BOX)
    ]
    return rows + cols + boxes


UNITS = _units()


def empty_grid() -> Grid:
    return [[EMPTY for _ in range(SIZE)] for _ in range(SIZE)]


def copy_board(board):
    if not board: return None
    return [row[:] for row in board]


def count_empty_cells(grid: Grid) -> int:
    return sum(row.count(EMPTY) for row in grid)


def clue_count(difficulty: int) -> int:
    """Number of cells a puzzle of the given tier keeps filled."""
    try:
        return DIFFICULTY_CLUES[difficulty]
    except (KeyError, TypeError):
        raise InvalidDifficulty(difficulty) from None


def cells_to_remove(difficulty: int) -> int:
    return TOTAL_CELLS - clue_count(difficulty)


def is_safe(grid: Grid, row: int, col: int, num: int) -> bool:
    """Whether `num` may go at (row, col) without repeating in its row, column or box.

    The whole row, column and box are scanned, including the target cell itself,
    so the cell is expected to be empty (or about to be overwritten).
    """
    # Check row
    if num in grid[row]:
        return False
    # Check col
    for i in range(SIZE):
        if grid[i][col] == num:
            return False
    # Check 3x3 box
    start_row, start_col = row - row % BOX, col - col % BOX
    for i in range(BOX):
        for j in range(BOX):
            if grid[i + start_row][j + start_col] == num:
                return False
    return True


def candidates(grid: Grid, row: int, col: int) -> list[int]:
    """Digits that pass `is_safe` at an empty cell, computed in one sweep of its peers."""
    used = set(grid[row])
    used.update(grid[i][col] for i in range(SIZE))
    start_row, start_col = row - row % BOX, col - col % BOX
    for i in range(start_row, start_row + BOX):
        used.update(grid[i][start_col:start_col + BOX])
    return [num for num in DIGITS if num not in used]


def find_conflicts(board: Grid) -> set[tuple[int, int]]:
    """Cells whose non-zero value repeats somewhere in one of their units."""
    conflicting_cells = set()
    for unit in UNITS:
        seen = {}  # val: [(r, c) coords]
        for r, c in unit:
            val = board[r][c]
            if val == EMPTY:
                continue
            seen.setdefault(val, []).append((r, c))
        for coords in seen.values():
            if len(coords) > 1:
                conflicting_cells.update(coords)
    return conflicting_cells


# --- Backtracking ---

def _first_empty(grid):
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] == EMPTY:
                return r, c
    return None


def _most_constrained_empty(grid):
    best, best_count = None, SIZE + 1
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] != EMPTY:
                continue
            count = len(candidates(grid, r, c))
            if count < best_count:
                best, best_count = (r, c), count
                if count <= 1:
                    return best
    return best


def _ascending():
    return DIGITS


def _shuffled(rng):
    def order():
        nums = list(DIGITS)
        rng.shuffle(nums)
        return nums
    return order


def _backtrack(grid, digit_order, next_cell, limit):
    """Depth-first search shared by the solver, the generator and the uniqueness check.

    Returns the number of completions found, stopping at `limit`. When the limit is
    reached the grid is left holding the last completion found; otherwise every
    cell filled by the search is reset to empty.
    """
    cell = next_cell(grid)
    if cell is None:
        return 1  # Grid is filled
    r, c = cell
    found = 0
    for num in digit_order():
        if is_safe(grid, r, c, num):
            grid[r][c] = num
            found += _backtrack(grid, digit_order, next_cell, limit - found)
            if found >= limit:
                return found
            grid[r][c] = EMPTY  # Backtrack
    return found


def solve(grid: Grid) -> bool:
    """Fill `grid` in place with its first solution in ascending digit order.

    Grids whose givens already clash are rejected untouched. On failure every
    cell the search filled is back to empty.
    """
    if find_conflicts(grid):
        return False
    return _backtrack(grid, _ascending, _first_empty, limit=1) == 1


def get_solved(grid: Grid):
    solved = copy_board(grid)
    return solved if solve(solved) else None


def count_solutions(grid: Grid, limit: int = 2) -> int:
    """Count completions of `grid` up to `limit`. The grid itself is not modified."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if find_conflicts(grid):
        return 0
    board_copy = copy_board(grid)
    return _backtrack(board_copy, _ascending, _most_constrained_empty, limit)


def has_unique_solution(grid: Grid) -> bool:
    return count_solutions(grid, limit=2) == 1


def is_solved(grid: Grid) -> bool:
    """True when every row, column and box holds the digits 1-9 exactly once."""
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False
    for unit in UNITS:
        values = [grid[r][c] for r, c in unit]
        if any(type(v) is not int for v in values) or set(values) != set(DIGITS):
            return False
    return True


class SudokuGenerator:
    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def generate_full_grid(self):
        """A randomly filled, valid 9x9 grid, or None if the search dead-ends."""
        new_grid = empty_grid()
        if _backtrack(new_grid, _shuffled(self.rng), _first_empty, limit=1) != 1:
            return None
        return new_grid

    def carve(self, full_grid, difficulty, max_attempts=None):
        holes_to_make = cells_to_remove(difficulty)
        if not is_solved(full_grid):
            raise ValueError("carve() needs a completely solved grid")

        puzzle = copy_board(full_grid)
        # A cell whose removal breaks uniqueness stays unremovable: clearing
        # more cells can only add solutions.
        rejected = set()
        attempts = 0
        while holes_to_make > 0:
            removable = [
                (r, c) for r in range(SIZE) for c in range(SIZE)
                if puzzle[r][c] != EMPTY and (r, c) not in rejected
            ]
            if not removable:
                raise CarveFailure(
                    f"Stuck with {holes_to_make} cells left to remove for difficulty {difficulty}"
                )
            if max_attempts is not None and attempts >= max_attempts:
                raise CarveFailure(
                    f"Gave up after {attempts} removal attempts, {holes_to_make} cells left to remove"
                )
            attempts += 1

            r, c = self.rng.choice(removable)
            temp_val = puzzle[r][c]
            puzzle[r][c] = EMPTY
            if has_unique_solution(puzzle):
                holes_to_make -= 1
            else:
                puzzle[r][c] = temp_val  # Put it back if it breaks unique solution
                rejected.add((r, c))

        logger.debug("Carved %d cells in %d attempts", cells_to_remove(difficulty), attempts)
        return puzzle

    def generate_puzzle(self, difficulty):
        clue_count(difficulty)
        solution = self.generate_full_grid()
        if solution is None:
            raise GenerationFailure("Full grid search exhausted without completing")
        puzzle = self.carve(solution, difficulty)
        return puzzle, solution


def generate_full_grid(rng=None):
    return SudokuGenerator(rng).generate_full_grid()


def carve(full_grid, difficulty, rng=None, max_attempts=None):
    return SudokuGenerator(rng).carve(full_grid, difficulty, max_attempts=max_attempts)


def generate_puzzle(difficulty: int, rng=None):
    """One attempt at a (puzzle, solution) pair. Callers retry on GenerationFailure."""
    return SudokuGenerator(rng).generate_puzzle(difficulty)


def get_sudoku_puzzle(difficulty: int, max_attempts: int = GENERATION_ATTEMPTS, rng=None):
    """Generate a (puzzle, solution) pair, starting over from a fresh grid on failure."""
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    clue_count(difficulty)
    generator = SudokuGenerator(rng)
    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            puzzle, solution = generator.generate_puzzle(difficulty)
        except GenerationFailure as exc:
            logger.warning("Sudoku generation attempt %d/%d failed: %s", attempt, max_attempts, exc)
            last_error = exc
            continue
        logger.info(
            "Generated %s puzzle (%d clues) on attempt %d",
            DIFFICULTY_LABELS[difficulty], clue_count(difficulty), attempt,
        )
        return puzzle, solution
    raise last_error
