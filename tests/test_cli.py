import os
import subprocess
import sys
from pathlib import Path

import pytest

from tictactoe_rules.board import Position
from tictactoe_rules.cli import main, parse_move

SRC = Path(__file__).resolve().parents[1] / "src"


def _run_cli(args: list[str], cwd: Path, stdin: str = "") -> subprocess.CompletedProcess:
    exe = [sys.executable, "-m", "tictactoe_rules.cli"]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    return subprocess.run(exe + args, cwd=cwd, input=stdin, capture_output=True, text=True, env=env)


def test_parse_move_formats():
    assert parse_move("12") == Position.from_indices(1, 2)
    assert parse_move("1 2") == Position.from_indices(1, 2)
    assert parse_move(" 2,0 ") == Position.from_indices(2, 0)
    for bad in ["", "1", "123", "ab", "33"]:
        with pytest.raises(ValueError):
            parse_move(bad)


def test_cli_replay_reports_winner(tmp_path: Path):
    r = _run_cli(["replay", "--moves", "00,11,01,12,02"], cwd=tmp_path)
    assert r.returncode == 0
    assert "winner=O" in r.stdout
    assert "OOO\n.XX\n..." in r.stdout


def test_cli_replay_reports_retry_and_next_player(tmp_path: Path):
    r = _run_cli(["replay", "--moves", "11,11"], cwd=tmp_path)
    assert r.returncode == 0
    assert "is taken" in r.stderr
    assert "to_move=X" in r.stdout


def test_cli_replay_resumes_from_board(tmp_path: Path):
    r = _run_cli(["replay", "--board", "200000000", "--moves", "11"], cwd=tmp_path)
    assert r.returncode == 0
    assert "O..\n.X.\n..." in r.stdout
    assert "to_move=O" in r.stdout


def test_cli_replay_draw(tmp_path: Path):
    # O X O / O X X / X O O
    r = _run_cli(["replay", "--moves", "00,01,02,11,10,12,21,20,22"], cwd=tmp_path)
    assert r.returncode == 0
    assert "result=draw" in r.stdout


def test_cli_replay_rejects_moves_after_win(tmp_path: Path):
    r = _run_cli(["replay", "--moves", "00,11,01,12,02,22"], cwd=tmp_path)
    assert r.returncode == 2


@pytest.mark.parametrize("bad", ["abc", "012345678", "0123456789", "12345678x"])
def test_cli_error_invalid_boards(tmp_path: Path, bad: str):
    r = _run_cli(["show", "--board", bad], cwd=tmp_path)
    assert r.returncode != 0
    r = _run_cli(["replay", "--board", bad, "--moves", "00"], cwd=tmp_path)
    assert r.returncode != 0


def test_cli_show(tmp_path: Path):
    r = _run_cli(["show", "--board", "111220000"], cwd=tmp_path)
    assert r.returncode == 0
    assert "XXX\nOO.\n..." in r.stdout
    assert "winner=X" in r.stdout


def test_cli_play_reads_moves_from_stdin(tmp_path: Path):
    r = _run_cli(["play"], cwd=tmp_path, stdin="0 0\n1 1\nnonsense\n0 1\n1 2\n0 2\n")
    assert r.returncode == 0
    assert "winner=O" in r.stdout
    assert "Invalid move" in r.stderr


def test_main_in_process(capsys):
    assert main(["replay", "--moves", "00"]) == 0
    out = capsys.readouterr().out
    assert "O..\n...\n..." in out
    assert main(["replay", "--moves", "0"]) == 2


def test_env_start_policy(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_START_POLICY", "fixed")
    r = _run_cli(["replay", "--board", "200000000", "--moves", "22"], cwd=tmp_path)
    assert r.returncode == 0
    assert "O..\n...\n..O" in r.stdout


def test_result_shown_when_logging_is_quiet(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTT_LOG_LEVEL", "WARNING")
    r = _run_cli(["replay", "--moves", "00,11,01,12,02"], cwd=tmp_path)
    assert r.returncode == 0
    assert "winner=O" in r.stdout
    r = _run_cli(["show", "--board", "100000000"], cwd=tmp_path)
    assert "to_move=O winner=- full=False" in r.stdout
