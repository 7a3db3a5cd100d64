from typing import List

import pytest
try:
    from hypothesis import given, strategies as st  # type: ignore
    HAS_HYP = True
except ModuleNotFoundError:  # pragma: no cover - test infra
    HAS_HYP = False
    import pytest as _pytest  # type: ignore
    _pytest.skip("Hypothesis not installed", allow_module_level=True)

from ttt_game.advisor import choose_move
from ttt_game.errors import IllegalMove
from ttt_game.game import SelectCell, new_game, transition
from ttt_game.game_basics import Board, Mark, apply_move, deserialize_board, detect_outcome, serialize_board

boards = st.lists(st.integers(min_value=0, max_value=2), min_size=9, max_size=9).map(
    lambda cells: deserialize_board(''.join(map(str, cells)))
)


@given(boards)
def test_detect_outcome_is_pure(board: Board):
    key = serialize_board(board)
    assert detect_outcome(board) == detect_outcome(board)
    assert serialize_board(board) == key


@given(boards, st.integers(min_value=-1, max_value=3), st.integers(min_value=-1, max_value=3),
       st.sampled_from([Mark.X, Mark.O]))
def test_apply_move_never_mutates(board: Board, row: int, col: int, mark: Mark):
    key = serialize_board(board)
    try:
        out = apply_move(board, row, col, mark)
    except IllegalMove:
        pass
    else:
        assert out[row, col] == mark
        changed = [i for i, (a, b) in enumerate(zip(key, serialize_board(out))) if a != b]
        assert changed == [row * 3 + col]
    assert serialize_board(board) == key


@given(st.lists(st.tuples(st.integers(0, 2), st.integers(0, 2)), max_size=20))
def test_piece_counts_stay_balanced(moves: List[tuple]):
    s = new_game()
    for row, col in moves:
        try:
            s = transition(s, SelectCell(row, col))
        except IllegalMove:
            continue
        x, o = s.board.piece_counts()
        assert x - o in (0, 1)
        assert s.turn == (Mark.X if x == o else Mark.O)


@given(st.lists(st.tuples(st.integers(0, 2), st.integers(0, 2)), max_size=9))
def test_advisor_picks_empty_cell(moves: List[tuple]):
    s = new_game()
    for row, col in moves:
        try:
            s = transition(s, SelectCell(row, col))
        except IllegalMove:
            continue
    if detect_outcome(s.board).is_terminal:
        return
    row, col = choose_move(s.board, s.turn)
    assert s.board[row, col] == Mark.EMPTY
