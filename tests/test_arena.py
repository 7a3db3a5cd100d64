import csv
from pathlib import Path

import numpy as np
import pytest

from ttt_game.arena import encode_moves, get_opponent, play_game, run_arena, write_games_csv


def test_run_arena_reproducible():
    a = run_arena(50, opponent="random", seed=7)
    b = run_arena(50, opponent="random", seed=7)
    assert a.games == b.games
    assert (a.x_wins, a.o_wins, a.draws) == (b.x_wins, b.o_wins, b.draws)
    assert a.total == 50
    assert abs(sum(a.rates().values()) - 1.0) < 1e-9


def test_first_empty_opponent_game_is_fixed():
    # O takes the center, blocks row 0, then completes the anti-diagonal
    winner, moves = play_game(get_opponent("first-empty"), np.random.default_rng(0))
    assert moves == [(0, 0), (1, 1), (0, 1), (0, 2), (1, 0), (2, 0)]
    assert winner == "O"


def test_advisor_mirror_match_is_deterministic():
    res = run_arena(3, opponent="advisor", seed=0)
    assert len(set(res.games)) == 1
    assert res.total == 3


def test_unknown_opponent():
    with pytest.raises(ValueError):
        run_arena(1, opponent="minimax")


def test_encode_moves():
    assert encode_moves([(0, 0), (1, 1), (2, 2)]) == "048"


def test_write_games_csv(tmp_path: Path):
    res = run_arena(5, opponent="random", seed=1)
    out = write_games_csv(tmp_path / "sub" / "games.csv", res)
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 5
    assert [int(r["game"]) for r in rows] == list(range(5))
    for r in rows:
        assert int(r["plies"]) == len(r["moves"])
        assert r["result"] in ("X", "O", "draw")
