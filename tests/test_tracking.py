import sys
import types
from contextlib import contextmanager
from pathlib import Path

from ttt_game.cli import main
from ttt_game.tracking import maybe_mlflow_run


def test_tracking_disabled_yields_false():
    with maybe_mlflow_run(False, run_name="arena") as active:
        assert active is False


def test_arena_logs_to_mlflow(tmp_path: Path, monkeypatch):
    calls = {}
    fake = types.ModuleType("mlflow")

    @contextmanager
    def start_run(run_name):
        calls["run_name"] = run_name
        yield

    fake.start_run = start_run
    fake.set_tracking_uri = lambda uri: calls.setdefault("uri", uri)
    fake.log_params = lambda p: calls.setdefault("params", p)
    fake.log_metrics = lambda m: calls.setdefault("metrics", m)
    fake.log_artifact = lambda path, artifact_path=None: calls.setdefault("artifact", path)
    monkeypatch.setitem(sys.modules, "mlflow", fake)

    out = tmp_path / "games.csv"
    rc = main(["arena", "--games", "3", "--out", str(out),
               "--tracking", "mlflow", "--log-dir", str(tmp_path / "runs")])
    assert rc == 0
    assert calls["run_name"] == "arena"
    assert calls["uri"].startswith("file:")
    assert calls["params"] == {"games": 3, "opponent": "random", "seed": 42}
    assert set(calls["metrics"]) == {"x_win_rate", "o_win_rate", "draw_rate"}
    assert calls["artifact"] == str(out)
