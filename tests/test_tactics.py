from ttt_duel.game_basics import O, X, new_board
from ttt_duel.tactics import completing_move

_ = 0


def test_completing_move_top_row():
    assert completing_move([O, O, _, X, X, _, _, _, _], O) == 2
    assert completing_move([O, O, _, X, X, _, _, _, _], X) == 5


def test_completing_move_none():
    assert completing_move(new_board(), X) is None
    assert completing_move([X, O, X, _, _, _, _, _, _], X) is None


def test_completing_move_picks_empty_cell_inside_line():
    # diagonal (2,4,6) with the gap in the middle
    assert completing_move([_, _, X, _, _, _, X, _, _], X) == 4


def test_completing_move_first_line_in_order():
    # row (3,4,5) at 5 comes before column (0,3,6) at 6 and diagonal (0,4,8) at 8
    assert completing_move([O, _, _, O, O, _, _, _, _], O) == 5


def test_completing_move_ignores_blocked_line():
    assert completing_move([X, X, O, _, _, _, _, _, _], X) is None
