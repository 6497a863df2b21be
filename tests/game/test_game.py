"""Tests for Game — players, parsed moves and the result."""

from __future__ import annotations

import pytest

from kibitz.core.coord import E4
from kibitz.core.enums import Color, GameResult, PieceKind
from kibitz.core.errors import IncompatibleSides, InvalidInput, InvalidMove
from kibitz.core.notation import STARTING_FEN
from kibitz.core.position import BitmaskPosition
from kibitz.game import Game, Player
from kibitz.parser import ParserEngine

_AFTER_E4 = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"


def _game(**kwargs: object) -> Game:
    return Game(Player(Color.WHITE, "Alice"), Player(Color.BLACK), **kwargs)


class TestSetup:
    def test_same_color_rejected(self) -> None:
        with pytest.raises(IncompatibleSides):
            Game(Player(Color.WHITE), Player(Color.WHITE))

    def test_players_sorted_by_color(self) -> None:
        game = Game(Player(Color.BLACK, "b"), Player(Color.WHITE, "w"))
        assert game.white.name == "w"
        assert game.black.name == "b"
        assert game.player(Color.BLACK) is game.black

    def test_defaults(self) -> None:
        game = _game()
        assert game.fen() == STARTING_FEN
        assert game.start_fen == STARTING_FEN
        assert game.to_move == Color.WHITE
        assert game.result == GameResult.IN_PROGRESS
        assert not game.is_over
        assert game.parser.name == "Algebraic Parser"

    def test_from_fen(self) -> None:
        game = _game(fen=_AFTER_E4)
        assert game.to_move == Color.BLACK
        assert game.fen() == _AFTER_E4

    def test_bad_fen(self) -> None:
        with pytest.raises(InvalidInput):
            _game(fen="not a fen")

    def test_bitmask_backend(self) -> None:
        game = _game(backend=BitmaskPosition)
        assert isinstance(game.board.position, BitmaskPosition)
        game.play("e4")
        assert game.fen() == _AFTER_E4


class TestPlay:
    def test_record(self) -> None:
        game = _game()
        record = game.play("e4")
        assert record.side == Color.WHITE
        assert record.fullmove_number == 1
        assert record.fen_after == _AFTER_E4
        assert record.captured is None
        assert game.history == [record]
        assert game.to_move == Color.BLACK
        pawn = game.board[E4]
        assert pawn is not None and pawn.kind == PieceKind.PAWN

    def test_failed_move_changes_nothing(self) -> None:
        game = _game()
        with pytest.raises(InvalidMove):
            game.play("e5")
        assert game.fen() == STARTING_FEN
        assert game.history == []

    def test_parse_error(self) -> None:
        with pytest.raises(InvalidInput):
            _game().play("")

    def test_play_all_stops_at_failure(self) -> None:
        game = _game()
        with pytest.raises(InvalidMove):
            game.play_all("e4 e5 Nf6 Nc6")
        assert len(game.history) == 2

    def test_captures(self) -> None:
        game = _game()
        game.play_all("e4 e5 Nf3 Nc6 Bb5 a6 Bxc6 dxc6")
        assert [str(p) for p in game.captures_by(Color.WHITE)] == ["n"]
        assert [str(p) for p in game.captures_by(Color.BLACK)] == ["B"]
        assert game.history[-2].captured is not None

    def test_move_list(self) -> None:
        game = _game()
        assert game.move_list() == "No moves have been made."
        game.play_all("e4 e5 Nf3")
        assert game.move_list() == "1. e4 e5\n2. Nf3"

    def test_move_list_starting_with_black(self) -> None:
        game = _game(fen=_AFTER_E4)
        game.play_all("e5 Nf3")
        assert game.move_list() == "1... e5\n2. Nf3"

    def test_switch_parser(self) -> None:
        game = _game()
        game.switch_parser(ParserEngine.COORDINATE)
        assert game.engine == ParserEngine.COORDINATE
        game.play("e2-e4")
        game.switch_parser(ParserEngine.ICCF)
        game.play("5755")
        assert len(game.history) == 2
        assert game.to_move == Color.WHITE


class TestResult:
    def test_resign(self) -> None:
        game = _game()
        game.resign(Color.WHITE)
        assert game.result == GameResult.BLACK_WINS
        assert game.is_over

    def test_no_moves_after_the_end(self) -> None:
        game = _game()
        game.resign(Color.BLACK)
        assert game.result == GameResult.WHITE_WINS
        with pytest.raises(InvalidMove, match="over"):
            game.play("e4")

    @pytest.mark.parametrize(
        ("token", "result"),
        [
            ("1-0", GameResult.WHITE_WINS),
            ("0-1", GameResult.BLACK_WINS),
            ("1/2-1/2", GameResult.DRAW),
            ("½-½", GameResult.DRAW),
        ],
    )
    def test_finish_with_token(self, token: str, result: GameResult) -> None:
        game = _game()
        game.finish_with_token(token)
        assert game.result == result

    def test_unknown_token(self) -> None:
        game = _game()
        with pytest.raises(InvalidInput):
            game.finish_with_token("2-0")
        assert not game.is_over


class TestText:
    def test_headers(self) -> None:
        game = Game(
            Player(Color.WHITE, "Camina Drummer", age=37, elo=1500),
            Player(Color.BLACK),
        )
        assert game.headers() == [
            "White: Camina Drummer (37), 1500",
            "Black: Player (black)",
        ]

    def test_render_starts_with_headers(self) -> None:
        lines = _game().render().splitlines()
        assert lines[0] == "White: Alice"
        assert lines[1] == "Black: Player (black)"
        assert lines[-1] == "White to move."

    def test_xfen_matches_fen_for_standard_start(self) -> None:
        assert _game().xfen() == STARTING_FEN

    def test_repr(self) -> None:
        assert repr(_game()) == (
            "Game(Alice vs Player (black), Algebraic Parser, in_progress)"
        )
