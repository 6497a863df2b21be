"""Tests for the line-oriented console."""

from __future__ import annotations

import io

import pytest

from kibitz.console import Console, build_arg_parser, main, strip_move_number
from kibitz.core.enums import Color, GameResult
from kibitz.game.commands import CommandContext
from kibitz.parser import ParserEngine
from kibitz.settings import ConsoleSettings

_BLACK_FILES = "h g f e d c b a"


def _run(*lines: str, **settings: object) -> tuple[Console, str]:
    out = io.StringIO()
    console = Console(ConsoleSettings(**settings), out=out)
    assert console.run(lines) == 0
    return console, out.getvalue()


@pytest.mark.parametrize(
    ("token", "move"),
    [
        ("e4", "e4"),
        ("1.e4", "e4"),
        ("1.", ""),
        ("12...", ""),
        ("12...Nf6", "Nf6"),
        ("1-0", "1-0"),
        ("1/2-1/2", "1/2-1/2"),
        ("a.b", "a.b"),
    ],
)
def test_strip_move_number(token: str, move: str) -> None:
    assert strip_move_number(token) == move


class TestMoves:
    def test_moves_on_one_line(self) -> None:
        console, _ = _run("e4 e5 Nf3")
        assert len(console.game.history) == 3
        assert console.game.to_move == Color.BLACK

    def test_numbered_moves(self) -> None:
        console, _ = _run("1.e4 e5 2.Nf3 2...Nc6")
        assert console.game.move_list() == "1. e4 e5\n2. Nf3 Nc6"

    def test_spaced_move_numbers(self) -> None:
        console, out = _run("1. e4 e5 2. Nf3")
        assert console.game.move_list() == "1. e4 e5\n2. Nf3"
        assert "Error" not in out

    def test_bad_move_stops_the_line(self) -> None:
        console, out = _run("e4 Ke3 e5")
        assert len(console.game.history) == 1
        assert "Error (Invalid Move): " in out
        assert "Move not applied." in out

    def test_result_token(self) -> None:
        console, out = _run("e4 e5 0-1 Nf3")
        assert console.game.result == GameResult.BLACK_WINS
        assert len(console.game.history) == 2
        assert "Game over: 0-1" in out

    def test_end_of_input(self) -> None:
        console, out = _run()
        assert console.running
        assert "Please input move(s) or command." in out


class TestCommands:
    def test_quit_skips_the_rest(self) -> None:
        console, _ = _run("q e4", "e4")
        assert not console.running
        assert console.game.history == []

    def test_help(self) -> None:
        _, out = _run("h")
        assert "<move>" in out
        assert "E.g., e4, Bxc6+" in out

    def test_multi_word_command(self) -> None:
        _, out = _run("e4", "move list")
        assert "Move List Notation:\n1. e4" in out

    def test_fen(self) -> None:
        _, out = _run("e4 fen")
        assert "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1" in out

    def test_captures(self) -> None:
        _, out = _run("e4 d5 exd5 c")
        assert "Captures:\nWhite: p\nBlack:" in out

    def test_resign(self) -> None:
        console, out = _run("wr")
        assert console.game.result == GameResult.BLACK_WINS
        assert "White resigns." in out

    def test_board_follows_side_to_move(self) -> None:
        _, out = _run("e4")
        assert _BLACK_FILES in out

    def test_fixed_perspective(self) -> None:
        _, out = _run("e4", perspective="white")
        assert _BLACK_FILES not in out

    def test_display_for_black_each_move(self) -> None:
        _, out = _run("dfb")
        assert "Display for Black after each move." in out
        assert _BLACK_FILES in out

    def test_unicode(self) -> None:
        _, out = _run(unicode=True)
        assert "♔" in out


class TestSwitchParser:
    def test_switch(self) -> None:
        console, out = _run("sw", "3", "e2-e4")
        assert console.game.engine == ParserEngine.COORDINATE
        assert console.context == CommandContext.MAIN
        assert "Switching parser to Coordinate Parser." in out
        assert len(console.game.history) == 1

    def test_switch_by_name(self) -> None:
        console, _ = _run("sw", "long algebraic", "e2e4")
        assert console.game.engine == ParserEngine.LONG_ALGEBRAIC
        assert len(console.game.history) == 1

    def test_back(self) -> None:
        console, _ = _run("sw", "b")
        assert console.game.engine == ParserEngine.ALGEBRAIC
        assert console.context == CommandContext.MAIN

    def test_unknown_option_stays(self) -> None:
        console, out = _run("sw", "zz")
        assert "Unknown option: zz" in out
        assert console.context == CommandContext.SWITCH_PARSER

    def test_unimplemented_parser_reports(self) -> None:
        console, out = _run("sw", "4", "P-K4")
        assert console.game.engine == ParserEngine.DESCRIPTIVE
        assert "Error (Not Implemented): " in out
        assert console.game.history == []


class TestEntryPoint:
    def test_defaults(self) -> None:
        args = build_arg_parser().parse_args([])
        assert args.parser == "algebraic"
        assert args.perspective == "to-move"
        assert args.log_level == "WARNING"
        assert not args.unicode

    def test_log_level_case(self) -> None:
        args = build_arg_parser().parse_args(["--log-level", "debug"])
        assert args.log_level == "DEBUG"

    def test_main_plays_from_stdin(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("e2-e4 ml\nq\n"))
        assert main(["--parser", "3", "--white", "Alice"]) == 0
        out = capsys.readouterr().out
        assert "White: Alice" in out
        assert "1. e2-e4" in out

    def test_main_bad_parser(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--parser", "pgn"]) == 2
        assert "Error (Invalid Input): " in capsys.readouterr().err

    def test_main_bad_fen(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--fen", "8/8 w"]) == 2
        assert "Error (Invalid Input): " in capsys.readouterr().err

    def test_main_unicode_digit_in_fen(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--fen", "4k3/8/8/8/8/8/8/4K2² w - - 0 1"]) == 2
        assert "Error (Invalid Input): " in capsys.readouterr().err
