import pytest

from ttt_game.advisor import choose_move
from ttt_game.arena import run_arena
from ttt_game.game_basics import deserialize_board

pytest.importorskip("pytest_benchmark")


def test_benchmark_choose_move(benchmark):
    board = deserialize_board("120010000")
    move = benchmark(choose_move, board)
    assert move == (2, 2)


def test_benchmark_small_arena(benchmark):
    res = benchmark(run_arena, 20, "random", 42)
    assert res.total == 20
