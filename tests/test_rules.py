from weapon_clash.models import EMPTY, PLAYER1, PLAYER2
from weapon_clash.rules import WIN_LINES, empty_board, in_bounds, is_full, winning_line


def test_eight_win_lines_in_scan_order():
    assert len(WIN_LINES) == 8
    assert WIN_LINES[0] == ((0, 0), (0, 1), (0, 2))
    assert WIN_LINES[3] == ((0, 0), (1, 0), (2, 0))
    assert WIN_LINES[6] == ((0, 0), (1, 1), (2, 2))
    assert WIN_LINES[7] == ((0, 2), (1, 1), (2, 0))


def test_empty_board():
    board = empty_board()
    assert board.cells == [[EMPTY] * 3 for _ in range(3)]
    assert board.winner is None and not board.is_draw and board.winning_cells == []
    # rows must not alias each other
    board.cells[0][0] = PLAYER1
    assert board.cells[1][0] == EMPTY


def test_in_bounds():
    assert in_bounds(0, 0) and in_bounds(2, 2)
    assert not in_bounds(-1, 0)
    assert not in_bounds(0, 3)
    assert not in_bounds("1", 1)
    assert not in_bounds(None, 1)
    assert not in_bounds(True, 0)
    assert not in_bounds(1.0, 1)


def test_winning_line_anti_diagonal():
    cells = [[EMPTY, EMPTY, PLAYER2], [EMPTY, PLAYER2, EMPTY], [PLAYER2, PLAYER1, PLAYER1]]
    assert winning_line(cells) == (PLAYER2, [[0, 2], [1, 1], [2, 0]])


def test_winning_line_none_and_full_board():
    cells = [[1, 2, 1], [1, 2, 2], [2, 1, 1]]
    assert winning_line(cells) is None
    assert is_full(cells)
    cells[2][2] = EMPTY
    assert not is_full(cells)
