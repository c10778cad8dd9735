from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from .arena import run_series
from .config import Tier, default_tier, delay_seconds
from .errors import IllegalMove
from .game_basics import (
    DRAW,
    O,
    WIN,
    X,
    current_player,
    format_board,
    is_valid_state,
    mark_symbol,
    parse_board,
    parse_mark,
    round_outcome,
)
from .policy import explain_move, make_rng, select_move
from .scheduler import ImmediateScheduler, ThreadScheduler
from .session import PVC, PVP, MoveResult, Session

TIER_CHOICES = [t.value for t in Tier]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt-duel", description="Tic-tac-toe: human vs human or vs computer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--seed", type=int, default=None, help="Seed for the computer's random choices")

    p_play = sub.add_parser("play", help="Play rounds in the console")
    p_play.add_argument("--mode", choices=[PVC, PVP], default=PVC, help="pvc (default) or pvp")
    p_play.add_argument("--tier", choices=TIER_CHOICES, default=None,
                        help="Computer skill tier (default: $TTT_DUEL_TIER or medium)")
    p_play.add_argument("--first", choices=["human", "computer"], default="human",
                        help="Who plays X in pvc mode (default: human)")
    p_play.add_argument("--no-delay", action="store_true", help="Skip the computer's thinking delay")

    p_out = sub.add_parser("outcome", help="Report winner, draw or in-progress for a board")
    p_out.add_argument("--board", required=True, help="Board, e.g. XX.OO.... or 110220000")

    p_sug = sub.add_parser("suggest", help="Ask the computer for its move on a board")
    p_sug.add_argument("--board", required=True, help="Board, e.g. XX.O.....")
    p_sug.add_argument("--tier", choices=TIER_CHOICES, default="hard")
    p_sug.add_argument("--mark", default=None, help="Computer mark X or O (default: side to move)")

    p_arena = sub.add_parser("arena", help="Computer vs computer series between two tiers")
    p_arena.add_argument("--x-tier", choices=TIER_CHOICES, default="hard")
    p_arena.add_argument("--o-tier", choices=TIER_CHOICES, default="hard")
    p_arena.add_argument("--games", type=int, default=100)

    return p


def _read_board(raw: str) -> Optional[List[int]]:
    try:
        return parse_board(raw)
    except ValueError as e:
        logging.error("Invalid board: %s", e)
        return None


def _describe(board: List[int]) -> str:
    o = round_outcome(board)
    if o.status == WIN:
        return f"winner={mark_symbol(o.winner)} line={','.join(map(str, o.line))}"
    if o.status == DRAW:
        return "draw"
    return f"in_progress to_move={mark_symbol(current_player(board))}"


def _print_scores(session: Session) -> None:
    o_label = "Computer" if session.mode == PVC and session.computer_mark == O else "O"
    x_label = "Computer" if session.mode == PVC and session.computer_mark == X else "X"
    print(f"Score  {x_label} (X): {session.scores[X]}  {o_label} (O): {session.scores[O]}  "
          f"Draws: {session.draws}")


def _report(result: MoveResult, session: Session) -> None:
    print(format_board(list(result.board)))
    o = result.outcome
    if o.status == WIN:
        who = mark_symbol(o.winner)
        if session.mode == PVC and o.winner == session.computer_mark:
            print(f"Computer ({who}) wins!")
        else:
            print(f"Player {who} wins!")
        _print_scores(session)
    elif o.status == DRAW:
        print("It's a draw!")
        _print_scores(session)


def _play(ns: argparse.Namespace) -> int:
    try:
        tier = Tier.parse(ns.tier) if ns.tier else default_tier()
        delay_seconds(tier)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    computer_mark = X if ns.first == "computer" else O
    session = Session(
        mode=ns.mode,
        tier=tier,
        computer_mark=computer_mark,
        rng=make_rng(ns.seed),
        scheduler=ImmediateScheduler() if ns.no_delay else ThreadScheduler(),
    )
    print("Cells are numbered 1-9, row by row. Commands: n = new round, r = reset scores, q = quit.")
    session.start_round()
    print(format_board(session.board))
    while True:
        if session.computer_turn():
            print("Computer is thinking...")
            task = session.request_computer_move(lambda res: _report(res, session))
            task.wait()
            continue
        if session.active:
            prompt = f"{mark_symbol(session.to_move)} to move> "
        else:
            prompt = "round over (n/r/q)> "
        try:
            line = input(prompt)
        except EOFError:
            session.abandon_round()
            return 0
        cmd = line.strip().lower()
        if cmd in ("q", "quit"):
            session.abandon_round()
            return 0
        if cmd == "n":
            session.start_round()
            print(format_board(session.board))
            continue
        if cmd == "r":
            session.reset_scores()
            _print_scores(session)
            continue
        if not cmd.isdigit():
            print("Enter a cell number 1-9, or n/r/q.")
            continue
        try:
            result = session.play(int(cmd) - 1)
        except IllegalMove as e:
            print(f"Illegal move: {e}")
            continue
        if not result.outcome.finished:
            print(format_board(list(result.board)))
        else:
            _report(result, session)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-duel"))
        except Exception:
            print("unknown")
        return 0

    if ns.cmd == "play":
        return _play(ns)

    if ns.cmd == "outcome":
        b = _read_board(ns.board)
        if b is None:
            return 2
        print(_describe(b))
        return 0

    if ns.cmd == "suggest":
        b = _read_board(ns.board)
        if b is None:
            return 2
        if not is_valid_state(b):
            logging.error("Board is not a valid reachable state.")
            return 2
        if round_outcome(b).finished:
            logging.error("Board is already finished: %s", _describe(b))
            return 2
        try:
            mark = parse_mark(ns.mark) if ns.mark else current_player(b)
        except ValueError as e:
            logging.error("%s", e)
            return 2
        tier = Tier.parse(ns.tier)
        rng = make_rng(ns.seed)
        if tier is Tier.HARD:
            mv, rule = explain_move(b, mark, rng)
            print(f"move={mv} rule={rule}")
        else:
            print(f"move={select_move(b, tier, mark, rng)}")
        return 0

    if ns.cmd == "arena":
        if ns.games < 1:
            logging.error("--games must be >= 1")
            return 2
        seed = ns.seed if ns.seed is not None else 42
        res = run_series(Tier.parse(ns.x_tier), Tier.parse(ns.o_tier), games=ns.games, seed=seed)
        print(json.dumps(res.as_dict(), sort_keys=True))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
