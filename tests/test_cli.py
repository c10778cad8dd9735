import io
import json
import subprocess
import sys
from pathlib import Path

import pytest

from ttt_duel.cli import main


def test_outcome_win(capsys):
    assert main(["outcome", "--board", "XXX.OO..."]) == 0
    assert capsys.readouterr().out.strip() == "winner=X line=0,1,2"


def test_outcome_draw_and_in_progress(capsys):
    assert main(["outcome", "--board", "XOXXOOOXX"]) == 0
    assert main(["outcome", "--board", "........."]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["draw", "in_progress to_move=X"]


@pytest.mark.parametrize("board,mark,expected", [
    ("OO.XX....", "O", "move=2 rule=win"),
    ("XX.O.....", None, "move=2 rule=block"),
    (".........", None, "move=4 rule=center"),
])
def test_suggest_hard(capsys, board, mark, expected):
    argv = ["suggest", "--board", board]
    if mark:
        argv += ["--mark", mark]
    assert main(argv) == 0
    assert capsys.readouterr().out.strip() == expected


def test_suggest_easy_is_seeded(capsys):
    assert main(["--seed", "3", "suggest", "--board", "X........", "--tier", "easy"]) == 0
    first = capsys.readouterr().out
    assert main(["--seed", "3", "suggest", "--board", "X........", "--tier", "easy"]) == 0
    assert capsys.readouterr().out == first
    assert first.startswith("move=")


@pytest.mark.parametrize("bad", ["abc", "XXXX", "12345678x"])
def test_invalid_boards_exit_2(bad):
    assert main(["outcome", "--board", bad]) == 2
    assert main(["suggest", "--board", bad]) == 2


def test_unreachable_or_finished_board_rejected():
    assert main(["suggest", "--board", "OOO......"]) == 2
    assert main(["suggest", "--board", "XXXXXXXXX"]) == 2
    assert main(["suggest", "--board", "XXX.OO..."]) == 2


def test_arena_json(capsys):
    assert main(["--seed", "1", "arena", "--x-tier", "easy", "--o-tier", "hard", "--games", "10"]) == 0
    res = json.loads(capsys.readouterr().out)
    assert res["games"] == 10
    assert res["x_wins"] + res["o_wins"] + res["draws"] == 10


def test_arena_rejects_zero_games():
    assert main(["arena", "--games", "0"]) == 2


def test_play_pvp_round(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\n2\n4\n5\n7\nq\n"))
    assert main(["play", "--mode", "pvp"]) == 0
    out = capsys.readouterr().out
    assert "Player X wins!" in out
    assert "X (X): 1" in out


def test_play_rejects_occupied_cell(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("5\n5\nfoo\nq\n"))
    assert main(["play", "--mode", "pvp"]) == 0
    out = capsys.readouterr().out
    assert "Illegal move" in out
    assert "Enter a cell number" in out


def test_play_computer_first_without_delay(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    assert main(["play", "--tier", "hard", "--first", "computer", "--no-delay"]) == 0
    out = capsys.readouterr().out
    assert "Computer is thinking" in out
    assert ". . .\n. X .\n. . ." in out


def test_play_against_computer_with_thread_scheduler(monkeypatch, capsys):
    monkeypatch.setenv("TTT_DUEL_DELAY_SCALE", "0")
    monkeypatch.setattr(sys, "stdin", io.StringIO("1\nq\n"))
    assert main(["play", "--tier", "hard"]) == 0
    out = capsys.readouterr().out
    assert "X . .\n. O .\n. . ." in out


def _run_cli(args, cwd: Path) -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "ttt_duel.cli"]
    return subprocess.run(exe + args, cwd=cwd, capture_output=True, text=True)


def test_module_entry_point(tmp_path: Path):
    r = _run_cli(["outcome", "--board", "XOXXOOOXX"], cwd=tmp_path)
    assert r.returncode == 0
    assert "draw" in r.stdout
    r = _run_cli(["outcome", "--board", "bad"], cwd=tmp_path)
    assert r.returncode == 2


def test_play_bad_tier_env_exits_2(monkeypatch, caplog):
    monkeypatch.setenv("TTT_DUEL_TIER", "expert")
    monkeypatch.setattr(sys, "stdin", io.StringIO("q\n"))
    assert main(["play"]) == 2
    assert "Unknown tier" in caplog.text


def test_play_bad_delay_scale_exits_2(monkeypatch, caplog):
    monkeypatch.setenv("TTT_DUEL_DELAY_SCALE", "fast")
    monkeypatch.setattr(sys, "stdin", io.StringIO("q\n"))
    assert main(["play", "--tier", "easy"]) == 2
    assert "TTT_DUEL_DELAY_SCALE" in caplog.text
