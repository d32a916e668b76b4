# weapon_clash/rules.py
from typing import List, Optional, Tuple

from .models import Board, EMPTY

BOARD_SIZE = 3

# scan order: rows top-to-bottom, columns left-to-right, main diagonal, anti-diagonal
WIN_LINES: List[Tuple[Tuple[int, int], ...]] = (
    [tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    + [tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    + [((0, 0), (1, 1), (2, 2)), ((0, 2), (1, 1), (2, 0))]
)


def empty_board() -> Board:
    return Board()


def in_bounds(row, col) -> bool:
    # bool is an int subclass, reject it explicitly
    for v in (row, col):
        if isinstance(v, bool) or not isinstance(v, int):
            return False
        if not 0 <= v < BOARD_SIZE:
            return False
    return True


def winning_line(cells: List[List[int]]) -> Optional[Tuple[int, List[List[int]]]]:
    """
    Returns (marker, [[r, c], ...]) for the first complete line in scan order,
    or None when no line is complete.
    """
    for line in WIN_LINES:
        (r0, c0), (r1, c1), (r2, c2) = line
        marker = cells[r0][c0]
        if marker != EMPTY and marker == cells[r1][c1] == cells[r2][c2]:
            return marker, [[r, c] for r, c in line]
    return None


def is_full(cells: List[List[int]]) -> bool:
    return all(cell != EMPTY for row in cells for cell in row)
