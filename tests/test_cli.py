"""Tests for the command line front end."""

import argparse

import pytest

from cat_maze.cli import _build_parser, _parse_move, main
from cat_maze.config import GameConfig, WinCondition
from cat_maze.levels import FIRST_STEPS


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_parse_move(self):
        assert _parse_move("3,1:4,1") == (3, 1, 4, 1)

    @pytest.mark.parametrize("text", ["3,1", "3,1:4", "a,b:c,d", "1,2:3,4:5,6"])
    def test_parse_move_invalid(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_move(text)

    def test_play_args(self):
        parser = _build_parser()
        args = parser.parse_args([
            "play", "first-steps",
            "--moves", "1,3:2,3", "3,1:3,2",
            "--win-condition", "all",
        ])
        assert args.command == "play"
        assert args.level == "first-steps"
        assert args.moves == [(1, 3, 2, 3), (3, 1, 3, 2)]
        assert args.win_condition == "all"

    def test_bad_move_is_parser_error(self):
        with pytest.raises(SystemExit):
            main(["play", "first-steps", "--moves", "oops"])


class TestCLICommands:
    def test_levels(self, capsys):
        assert main(["levels"]) == 0
        out = capsys.readouterr().out
        assert "first-steps" in out
        assert "crossing" in out
        assert "7x7" in out

    def test_show_builtin(self, capsys):
        assert main(["show", "first-steps"]) == 0
        assert capsys.readouterr().out.splitlines()[1] == "#1bB#"

    def test_show_file(self, tmp_path, capsys):
        path = tmp_path / "level.txt"
        path.write_text(FIRST_STEPS.field().to_text())
        assert main(["show", "--file", str(path)]) == 0
        assert capsys.readouterr().out.splitlines()[4] == "##O##"

    def test_show_malformed_file(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("0x100, 0x100, 3, 3")
        assert main(["show", "--file", str(path)]) == 2

    def test_show_unknown_level(self):
        assert main(["show", "nope"]) == 2

    def test_show_requires_level(self):
        assert main(["show"]) == 2

    def test_play_solves_level(self, capsys):
        result = main([
            "play", "first-steps",
            "--moves", "1,3:2,3", "3,1:3,2", "3,2:4,2",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "Moves: 3 (solved)"

    def test_play_rejected_moves_not_counted(self, capsys):
        assert main(["play", "first-steps", "--moves", "2,1:2,2", "3,1:4,1"]) == 0
        assert capsys.readouterr().out.startswith("Moves: 0 (in progress)")

    def test_play_win_condition_override(self, capsys):
        main([
            "play", "first-steps", "--win-condition", "all",
            "--moves", "1,3:2,3", "3,1:3,2", "3,2:4,2",
        ])
        assert "Moves: 3 (in progress)" in capsys.readouterr().out

    def test_play_with_config(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        GameConfig(win_condition=WinCondition.ALL_ON_EXIT).save(path)
        main([
            "play", "first-steps", "--config", str(path),
            "--moves", "1,3:2,3", "3,1:3,2", "3,2:4,2",
        ])
        assert "(in progress)" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert main(["show", "--file", str(tmp_path / "missing.txt")]) == 2

    def test_invalid_config_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert main(["play", "first-steps", "--config", str(path)]) == 2

    def test_play_broken_cat(self, tmp_path):
        path = tmp_path / "broken.txt"
        path.write_text("0x201200, 0, 2, 1")
        assert main(["play", "--file", str(path), "--moves", "0,0:0,1"]) == 2
