import pytest

from ttt_game.config import DEFAULT_COMPUTER_DELAY, EngineConfig
from ttt_game.rules import GameMode


def test_defaults_when_env_unset(monkeypatch):
    monkeypatch.delenv("TTT_COMPUTER_DELAY", raising=False)
    monkeypatch.delenv("TTT_DEFAULT_MODE", raising=False)
    cfg = EngineConfig.from_env()
    assert cfg.computer_delay == DEFAULT_COMPUTER_DELAY == 0.5
    assert cfg.default_mode == GameMode.PLAYER_VS_PLAYER


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TTT_COMPUTER_DELAY", "0")
    monkeypatch.setenv("TTT_DEFAULT_MODE", "pvc")
    cfg = EngineConfig.from_env()
    assert cfg.computer_delay == 0.0
    assert cfg.default_mode == GameMode.PLAYER_VS_COMPUTER


@pytest.mark.parametrize("var,value", [
    ("TTT_COMPUTER_DELAY", "soon"),
    ("TTT_COMPUTER_DELAY", "-1"),
    ("TTT_DEFAULT_MODE", "online"),
])
def test_invalid_env_raises(monkeypatch, var, value):
    monkeypatch.delenv("TTT_COMPUTER_DELAY", raising=False)
    monkeypatch.delenv("TTT_DEFAULT_MODE", raising=False)
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        EngineConfig.from_env()
