"""Tests for the python -m sky_garden entry point."""

import json
from pathlib import Path

import pytest

from sky_garden.__main__ import SEED_ENV, build_parser, main
from sky_garden.game import GameSession
from sky_garden.log import LOG_LEVEL_ENV
from sky_garden.state import with_player


def test_simulate_prints_summary(capsys):
    main(["simulate", "--games", "5", "--seed", "1"])
    out = capsys.readouterr().out
    assert "5 games" in out
    assert "Player 1 wins" in out
    assert "Avg turns" in out


def test_simulate_exports(tmp_path: Path, capsys):
    out_dir = tmp_path / "games"
    main(["simulate", "--games", "3", "--seed", "2", "--export", str(out_dir)])
    index = json.loads((out_dir / "games.json").read_text())
    assert len(index) == 3
    assert "Wrote 4 JSON files" in capsys.readouterr().out


def test_chart_command(tmp_path: Path, capsys):
    out = tmp_path / "race.png"
    main(["chart", "--seed", "4", "-o", str(out)])
    assert out.exists()
    assert "Chart saved" in capsys.readouterr().out


def test_same_character_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["simulate", "--p1", "cat", "--p2", "cat"])
    assert exc.value.code == 2


def test_play_quits(monkeypatch, capsys):
    answers = iter(["", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    main(["play", "--p1", "bunny", "--p2", "fox", "--seed", "9"])
    out = capsys.readouterr().out
    assert "Sky Garden Race begins!" in out
    assert "Player 1 rolled" in out


def test_play_prompts_for_characters(monkeypatch, capsys):
    answers = iter(["dragon", "cat", "cat", "fairy", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    main(["play", "--seed", "9"])
    out = capsys.readouterr().out
    assert "Unknown character: dragon" in out
    assert "Cat is taken by Player 1." in out
    assert "Player 2 is 🧚 Fairy." in out


def test_no_command_prints_help(capsys):
    main([])
    assert "usage" in capsys.readouterr().out


class _QuickWinSession(GameSession):
    """Starts Player 1 four tiles from home and always rolls a 4."""

    def start(self):
        result = super().start()
        self.players = with_player(self.players, self.players[0].moved_to(60))
        return result

    def roll(self, value=None):
        return super().roll(4)


def test_play_restarts_after_win(monkeypatch, capsys):
    monkeypatch.setattr("sky_garden.__main__.GameSession", _QuickWinSession)
    answers = iter(["", "r", "cat", "fairy", "", "q"])
    prompts = []

    def fake_input(prompt=""):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr("builtins.input", fake_input)
    main(["play", "--p1", "bunny", "--p2", "fox", "--seed", "3"])
    out = capsys.readouterr().out
    assert out.count("Sky Garden Race begins!") == 2
    assert out.count("wins the Sky Garden Race in 1 turns!") == 2
    assert "Player 1 is 🐱 Cat." in out
    assert "Player 2 is 🧚 Fairy." in out
    assert sum(p.startswith("Player 1, choose a character") for p in prompts) == 1
    assert prompts[-1].startswith("r to race again")


def _raise_eof(prompt=""):
    raise EOFError


def test_play_end_of_input_quits_at_roll_prompt(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", _raise_eof)
    main(["play", "--p1", "bunny", "--p2", "fox", "--seed", "9"])
    out = capsys.readouterr().out
    assert "Sky Garden Race begins!" in out
    assert "rolled" not in out


def test_play_end_of_input_quits_during_setup(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", _raise_eof)
    main(["play", "--seed", "9"])
    assert "Sky Garden Race begins!" not in capsys.readouterr().out


def test_play_end_of_input_after_win(monkeypatch, capsys):
    monkeypatch.setattr("sky_garden.__main__.GameSession", _QuickWinSession)
    answers = iter([""])

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    main(["play", "--p1", "bunny", "--p2", "fox", "--seed", "3"])
    assert capsys.readouterr().out.count("Sky Garden Race begins!") == 1


# ── environment defaults ────────────────────────────────────────────

def test_seed_from_environment(monkeypatch):
    monkeypatch.setenv(SEED_ENV, "17")
    args = build_parser().parse_args(["simulate"])
    assert args.seed == 17


def test_seed_unset_by_default(monkeypatch):
    monkeypatch.delenv(SEED_ENV, raising=False)
    assert build_parser().parse_args(["chart"]).seed is None


def test_seed_flag_overrides_environment(monkeypatch):
    monkeypatch.setenv(SEED_ENV, "17")
    assert build_parser().parse_args(["simulate", "--seed", "5"]).seed == 5


def test_bad_seed_in_environment_is_usage_error(monkeypatch, capsys):
    monkeypatch.setenv(SEED_ENV, "abc")
    with pytest.raises(SystemExit) as exc:
        main(["simulate", "--games", "1"])
    assert exc.value.code == 2
    assert "invalid int value: 'abc'" in capsys.readouterr().err


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    args = build_parser().parse_args(["simulate"])
    assert args.log_level == "DEBUG"
