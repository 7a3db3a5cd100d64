from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Optional

from .advisor import explain_move
from .arena import OPPONENTS, run_arena, write_games_csv
from .config import EngineConfig
from .errors import NoLegalMove
from .game import GameState, status_text, winning_line
from .game_basics import (
    Board,
    Mark,
    deserialize_board,
    detect_outcome,
    format_board,
    is_valid_state,
    turn_from_board,
)
from .rules import GameMode
from .session import GameSession
from .tactics import gives_opponent_immediate_win
from .tracking import log_artifact, log_metrics, log_params, maybe_mlflow_run

MODES = {m.value: m for m in GameMode}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_play = sub.add_parser("play", help="Play in the terminal (q quits, r restarts, m toggles mode)")
    p_play.add_argument("--mode", choices=sorted(MODES), default=None,
                        help="pvp or pvc (default: TTT_DEFAULT_MODE or pvp)")
    p_play.add_argument("--delay", type=float, default=None,
                        help="Seconds before the computer moves (default: TTT_COMPUTER_DELAY or 0.5)")

    p_adv = sub.add_parser("advise", help="Show the computer's move for a board (9 digits, 0=empty,1=X,2=O)")
    p_adv.add_argument("--board", required=True, help="Board string, e.g., 100020000")
    p_adv.add_argument("--mark", choices=["X", "O"], default=None,
                       help="Side to advise (default: side to move)")

    p_st = sub.add_parser("status", help="Show status text and winning line for a board")
    p_st.add_argument("--board", required=True, help="Board string, e.g., 111220000")
    p_st.add_argument("--mode", choices=sorted(MODES), default="pvp")

    p_ar = sub.add_parser("arena", help="Play the computer (O) against a baseline X opponent")
    p_ar.add_argument("--games", type=int, default=100)
    p_ar.add_argument("--opponent", choices=OPPONENTS, default="random")
    p_ar.add_argument("--seed", type=int, default=42, help="Seed for the random opponent")
    p_ar.add_argument("--out", type=Path, default=None, help="Optional CSV of per-game moves")
    p_ar.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_ar.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )
    return p


def _parse_board(raw: str) -> Optional[Board]:
    try:
        b = deserialize_board(raw)
    except ValueError as e:
        logging.error("%s", e)
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _cmd_advise(ns: argparse.Namespace) -> int:
    b = _parse_board(ns.board)
    if b is None:
        return 2
    mark = Mark[ns.mark] if ns.mark else turn_from_board(b)
    try:
        move, rule = explain_move(b, mark)
    except NoLegalMove as e:
        logging.error("%s", e)
        return 2
    logging.info(
        "to_move=%s move=%s rule=%s leaves_opponent_win=%s",
        mark.symbol,
        list(move),
        rule,
        gives_opponent_immediate_win(b, mark, move),
    )
    return 0


def _cmd_status(ns: argparse.Namespace) -> int:
    b = _parse_board(ns.board)
    if b is None:
        return 2
    state = GameState(board=b, turn=turn_from_board(b), mode=MODES[ns.mode], outcome=detect_outcome(b))
    logging.info("status=%s line=%s", status_text(state), [list(c) for c in winning_line(state)])
    return 0


def _cmd_arena(ns: argparse.Namespace) -> int:
    if ns.games < 0:
        logging.error("--games must be >= 0: %s", ns.games)
        return 2
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="arena", log_dir=ns.log_dir) as tracking:
        res = run_arena(ns.games, opponent=ns.opponent, seed=ns.seed)
        rates = res.rates()
        logging.info(
            "x_wins=%d o_wins=%d draws=%d draw_rate=%.3f",
            res.x_wins, res.o_wins, res.draws, rates["draw_rate"],
        )
        if ns.out is not None:
            write_games_csv(ns.out, res)
        if tracking:
            log_params({"games": ns.games, "opponent": ns.opponent, "seed": ns.seed})
            log_metrics(rates)
            if ns.out is not None:
                log_artifact(ns.out)
    return 0


def _render(session: GameSession, out: Callable[[str], None]) -> None:
    state = session.snapshot()
    out(format_board(state.board, highlight=winning_line(state)))
    out(f"[{state.mode.value}] {status_text(state)}")


def play(session: GameSession, read: Callable[[str], str] = input,
         out: Callable[[str], None] = print) -> int:
    """Terminal loop: enter "row col" to move, r to restart, m to toggle mode, q to quit."""
    _render(session, out)
    while True:
        if session.pending is not None:
            session.run_pending()
            _render(session, out)
            continue
        try:
            line = read("> ").strip().lower()
        except EOFError:
            return 0
        if line in ("q", "quit"):
            return 0
        if line in ("r", "restart"):
            session.restart()
        elif line in ("m", "mode"):
            other = (GameMode.PLAYER_VS_COMPUTER
                     if session.state.mode == GameMode.PLAYER_VS_PLAYER
                     else GameMode.PLAYER_VS_PLAYER)
            session.select_mode(other)
        else:
            parts = line.replace(",", " ").split()
            if len(parts) != 2 or not all(p.isdigit() for p in parts):
                out("Enter a move as: row col (0-2), or r / m / q")
                continue
            if not session.select_cell(int(parts[0]), int(parts[1])):
                out("That cell is not available.")
                continue
        _render(session, out)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("ttt-game"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.cmd == "play":
        try:
            cfg = EngineConfig.from_env()
        except ValueError as e:
            logging.error("Invalid TTT_* environment setting: %s", e)
            return 2
        if ns.delay is not None:
            if ns.delay < 0:
                logging.error("--delay must be >= 0: %s", ns.delay)
                return 2
            cfg = EngineConfig(computer_delay=ns.delay, default_mode=cfg.default_mode)
        mode = MODES[ns.mode] if ns.mode else cfg.default_mode
        return play(GameSession(mode=mode, config=cfg))

    if ns.cmd == "advise":
        return _cmd_advise(ns)

    if ns.cmd == "status":
        return _cmd_status(ns)

    if ns.cmd == "arena":
        return _cmd_arena(ns)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
